"""
Pydantic schemas for the OceanEye identification service.

Wire format of a species record (as stored in the Firebase export):

    {"hash": "<sha256 hex>", "name": "...", "habitat": "...",
     "scientific": "...", "size": "...", "status": "..."}
"""
from enum import Enum
from typing import Optional, List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class LookupStatus(str, Enum):
    """Every way an identification attempt can settle."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    ENCODING_ERROR = "encoding_error"
    DECODE_ERROR = "decode_error"
    TRANSPORT_ERROR = "transport_error"


ERROR_STATUSES = frozenset({
    LookupStatus.ENCODING_ERROR,
    LookupStatus.DECODE_ERROR,
    LookupStatus.TRANSPORT_ERROR,
})


class Record(BaseModel):
    """A species metadata entry keyed by the digest of its reference image."""
    model_config = ConfigDict(frozen=True)

    digest: str = Field(..., alias="hash", description="SHA256 of the reference image")
    name: str
    habitat: str
    scientific_name: str = Field(..., alias="scientific")
    size: str
    conservation_status: str = Field(..., alias="status")


class LookupResult(BaseModel):
    """
    Outcome of one identification attempt.

    Exactly one of the LookupStatus values; `record` is set only when
    found and `error` only for the error statuses.
    """
    model_config = ConfigDict(frozen=True)

    status: LookupStatus
    digest: Optional[str] = None
    record: Optional[Record] = None
    error: Optional[str] = None

    @classmethod
    def found(cls, digest: str, record: Record) -> "LookupResult":
        return cls(status=LookupStatus.FOUND, digest=digest, record=record)

    @classmethod
    def not_found(cls, digest: str) -> "LookupResult":
        return cls(status=LookupStatus.NOT_FOUND, digest=digest)

    @classmethod
    def failure(cls, exc, digest: Optional[str] = None) -> "LookupResult":
        """Build an error result from an IdentificationError."""
        return cls(status=exc.status, digest=digest, error=str(exc))

    @property
    def is_found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @property
    def is_error(self) -> bool:
        return self.status in ERROR_STATUSES


class NoticeAction(str, Enum):
    RETAKE_PHOTO = "retake_photo"
    RETRY = "retry"


class Notice(BaseModel):
    """User-facing alert shown when no record could be displayed."""
    title: str
    message: str
    action: NoticeAction


class IdentifyResponse(BaseModel):
    """Response body for the identify endpoints."""
    status: LookupStatus
    digest: Optional[str] = None
    record: Optional[Record] = None
    details: List[Tuple[str, str]] = Field(default_factory=list)
    error: Optional[str] = None
    notice: Optional[Notice] = None


class HealthResponse(BaseModel):
    status: str
    records_url: str
    request_timeout: float
    identifying: bool
