"""Services package for the OceanEye identification service."""

from oceaneye.services.resolver import (
    RecordResolver,
    decode_collection,
    find_record,
)
from oceaneye.services.identifier import (
    Identifier,
    get_identifier,
    reset_identifier,
)
from oceaneye.services.catalog import (
    digest_reference_image,
    build_record_document,
    write_record_document,
)
from oceaneye.services.presentation import (
    RETAKE_NOTICE,
    NETWORK_NOTICE,
    notice_for,
    record_details,
)

__all__ = [
    # Resolver
    "RecordResolver",
    "decode_collection",
    "find_record",
    # Identifier
    "Identifier",
    "get_identifier",
    "reset_identifier",
    # Catalog
    "digest_reference_image",
    "build_record_document",
    "write_record_document",
    # Presentation
    "RETAKE_NOTICE",
    "NETWORK_NOTICE",
    "notice_for",
    "record_details",
]
