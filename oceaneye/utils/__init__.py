"""Utility functions for the OceanEye identification service."""
from oceaneye.utils.hashing import (
    compute_digest,
    compute_file_digest,
    is_valid_digest,
)
from oceaneye.utils.image_ops import (
    validate_image,
    open_image_from_bytes,
    image_to_canonical_bytes,
    canonicalize_image,
)
from oceaneye.utils.logging import get_logger, short_digest

__all__ = [
    # Hashing
    "compute_digest",
    "compute_file_digest",
    "is_valid_digest",
    # Image operations
    "validate_image",
    "open_image_from_bytes",
    "image_to_canonical_bytes",
    "canonicalize_image",
    # Logging
    "get_logger",
    "short_digest",
]
