"""Data models for the OceanEye identification service."""
from oceaneye.models.schemas import (
    LookupStatus,
    Record,
    LookupResult,
    NoticeAction,
    Notice,
    IdentifyResponse,
    HealthResponse,
)

__all__ = [
    "LookupStatus",
    "Record",
    "LookupResult",
    "NoticeAction",
    "Notice",
    "IdentifyResponse",
    "HealthResponse",
]
