"""
Error types for the OceanEye identification service.

Lower layers raise these; the resolver and identifier turn them into
LookupResult values so every lookup settles with an explicit outcome.
"""
from oceaneye.models.schemas import LookupStatus


class IdentificationError(Exception):
    """Base class for failures that end a lookup."""
    status: LookupStatus

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EncodingError(IdentificationError):
    """Image bytes could not be canonicalized or hashed."""
    status = LookupStatus.ENCODING_ERROR


class DecodeError(IdentificationError):
    """Record document was malformed or did not match the record schema."""
    status = LookupStatus.DECODE_ERROR


class TransportError(IdentificationError):
    """Record document could not be fetched (network failure or non-2xx)."""
    status = LookupStatus.TRANSPORT_ERROR


class LookupInProgressError(RuntimeError):
    """A lookup is already in flight on this resolver."""
