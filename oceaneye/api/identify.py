"""
Identify API endpoint for the OceanEye identification service.

Handles:
- Photo upload -> canonicalize -> hash -> record lookup
- Lookup by a precomputed digest

Every settled lookup (found, not found, or a failure) returns 200 with
an explicit status; only request-level problems use error codes.
"""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from oceaneye import config
from oceaneye.errors import LookupInProgressError
from oceaneye.models.schemas import IdentifyResponse, LookupResult
from oceaneye.services.identifier import Identifier, get_identifier
from oceaneye.services.presentation import notice_for, record_details
from oceaneye.utils.hashing import is_valid_digest
from oceaneye.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/identify", tags=["identify"])


def build_response(result: LookupResult) -> IdentifyResponse:
    """Convert a settled LookupResult into the response body."""
    return IdentifyResponse(
        status=result.status,
        digest=result.digest,
        record=result.record,
        details=record_details(result.record) if result.record else [],
        error=result.error,
        notice=notice_for(result)
    )


@router.post("/", response_model=IdentifyResponse, response_model_by_alias=False)
async def identify_photo(
    file: UploadFile = File(..., description="Photo of the fish to identify"),
    identifier: Identifier = Depends(get_identifier)
):
    """
    Identify the species in an uploaded photo.

    The photo is re-encoded to PNG, hashed with SHA256, and matched
    exactly against the record document.
    """
    try:
        content = await file.read()
    except Exception as e:
        raise HTTPException(
            status_code=400,
            detail=f"Failed to read file: {e}"
        )

    if not content:
        raise HTTPException(
            status_code=400,
            detail="Uploaded file is empty"
        )

    if len(content) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Upload exceeds {config.MAX_UPLOAD_BYTES} bytes"
        )

    logger.info(f"Identify request: {file.filename} ({len(content)} bytes)")

    try:
        result = await identifier.identify(content)
    except LookupInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return build_response(result)


@router.get("/{digest}", response_model=IdentifyResponse, response_model_by_alias=False)
async def identify_digest(
    digest: str,
    identifier: Identifier = Depends(get_identifier)
):
    """
    Look up a record by a precomputed image digest.

    Args:
        digest: 64-character lowercase SHA256 hex string.
    """
    if not is_valid_digest(digest):
        raise HTTPException(
            status_code=422,
            detail="Digest must be 64 lowercase hex characters"
        )

    try:
        result = await identifier.identify_digest(digest)
    except LookupInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return build_response(result)
