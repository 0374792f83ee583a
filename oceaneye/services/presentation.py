"""
Presentation helpers for the OceanEye identification service.

Turns a LookupResult into what the user sees: record detail rows, or a
notice telling them whether to retake the photo or retry the network.
"""
from typing import List, Optional, Tuple

from oceaneye.models.schemas import (
    LookupResult,
    LookupStatus,
    Notice,
    NoticeAction,
    Record,
)

RETAKE_NOTICE = Notice(
    title="Oops!",
    message="Please submit a higher resolution picture of a fish to be identified.",
    action=NoticeAction.RETAKE_PHOTO,
)

NETWORK_NOTICE = Notice(
    title="Network problem",
    message="Couldn't reach the species database. Check your connection and try again.",
    action=NoticeAction.RETRY,
)


def notice_for(result: LookupResult) -> Optional[Notice]:
    """
    Pick the notice for a settled lookup.

    Connectivity problems get their own notice so the user isn't asked
    to retake a photo when the network is at fault.

    Returns:
        None when a record was found.
    """
    if result.status == LookupStatus.FOUND:
        return None
    if result.status == LookupStatus.TRANSPORT_ERROR:
        return NETWORK_NOTICE
    return RETAKE_NOTICE


def record_details(record: Record) -> List[Tuple[str, str]]:
    """Labelled detail rows for a matched record, in display order."""
    return [
        ("Name", record.name),
        ("Habitat", record.habitat),
        ("Scientific Name", record.scientific_name),
        ("Size", record.size),
        ("Status", record.conservation_status),
    ]
