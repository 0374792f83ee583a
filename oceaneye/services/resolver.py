"""
Record resolver service for the OceanEye identification service.

Responsible for:
- Fetching the full record document from the configured endpoint
- Strictly decoding it into Record objects
- Finding the record whose digest matches exactly

Every call fetches a fresh copy; nothing is cached between lookups.
"""
import asyncio
import json
from typing import Dict, Optional

import requests
from pydantic import ValidationError

from oceaneye import config
from oceaneye.errors import (
    IdentificationError,
    DecodeError,
    TransportError,
    LookupInProgressError,
)
from oceaneye.models.schemas import Record, LookupResult
from oceaneye.utils.logging import get_logger, short_digest

logger = get_logger(__name__)


def decode_collection(
    body: bytes,
    reject_duplicate_digests: bool = True
) -> Dict[str, Record]:
    """
    Decode a record document into a RecordCollection.

    Decoding is all-or-nothing: one bad record fails the whole document.

    Args:
        body: Raw response body (JSON object of key -> record).
        reject_duplicate_digests: Fail if two records share a digest.

    Returns:
        Dict of source key -> Record, in document order.

    Raises:
        DecodeError: If the body is not JSON, not an object, or any
            record does not match the schema.
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        raise DecodeError(f"Record document is not valid JSON: {e}") from e

    # Firebase returns null for an empty node
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise DecodeError(
            f"Record document must be a JSON object, got {type(data).__name__}"
        )

    collection: Dict[str, Record] = {}
    seen: Dict[str, str] = {}

    for key, value in data.items():
        try:
            record = Record.model_validate(value)
        except ValidationError as e:
            raise DecodeError(f"Invalid record '{key}': {e}") from e

        if reject_duplicate_digests and record.digest in seen:
            raise DecodeError(
                f"Records '{seen[record.digest]}' and '{key}' share digest "
                f"{short_digest(record.digest)}"
            )

        seen.setdefault(record.digest, key)
        collection[key] = record

    return collection


def find_record(collection: Dict[str, Record], digest: str) -> Optional[Record]:
    """
    Find the first record whose digest equals `digest` exactly.

    Comparison is case-sensitive, full-length string equality.

    Args:
        collection: Decoded records.
        digest: Digest to look for.

    Returns:
        The matching Record, or None.
    """
    for record in collection.values():
        if record.digest == digest:
            return record
    return None


class RecordResolver:
    """
    Resolves a digest against the remote record document.

    At most one lookup may be outstanding per resolver; a second call
    while one is in flight raises LookupInProgressError before any I/O.
    """

    def __init__(
        self,
        records_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        reject_duplicate_digests: Optional[bool] = None
    ):
        """
        Initialize the resolver.

        Args:
            records_url: Endpoint returning the record document.
            timeout: Request timeout in seconds.
            session: HTTP session (a new requests.Session if None).
            reject_duplicate_digests: Fail lookups on duplicate digests.
        """
        self.records_url = records_url or config.RECORDS_URL
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        if reject_duplicate_digests is None:
            reject_duplicate_digests = config.REJECT_DUPLICATE_DIGESTS
        self.reject_duplicate_digests = reject_duplicate_digests
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        """True while a lookup has been started and not yet settled."""
        return self._in_flight

    def fetch_collection(self) -> Dict[str, Record]:
        """
        Fetch and decode the full record document.

        Returns:
            Dict of source key -> Record.

        Raises:
            TransportError: On connection failure, timeout or non-2xx status.
            DecodeError: If the body does not decode into records.
        """
        try:
            response = self.session.get(self.records_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Failed to fetch records: {e}") from e

        content_type = response.headers.get("Content-Type", "")
        if "application/json" not in content_type.lower():
            logger.warning(
                f"Unexpected Content-Type from {self.records_url}: "
                f"{content_type or '<missing>'}"
            )

        collection = decode_collection(
            response.content,
            reject_duplicate_digests=self.reject_duplicate_digests
        )
        logger.debug(f"Fetched {len(collection)} records from {self.records_url}")
        return collection

    def _resolve_sync(self, digest: str) -> LookupResult:
        """
        Resolve a digest, blocking the calling thread.

        Args:
            digest: Digest of the canonical image bytes.

        Returns:
            LookupResult with status found, not_found, decode_error or
            transport_error.
        """
        try:
            collection = self.fetch_collection()
        except IdentificationError as e:
            logger.warning(f"Lookup for {short_digest(digest)} failed: {e}")
            return LookupResult.failure(e, digest)

        record = find_record(collection, digest)

        if record is None:
            logger.info(f"No record matches {short_digest(digest)}")
            return LookupResult.not_found(digest)

        logger.info(f"Matched {short_digest(digest)} -> {record.name}")
        return LookupResult.found(digest, record)

    async def resolve(self, digest: str) -> LookupResult:
        """
        Resolve a digest without blocking the event loop.

        The fetch runs in a worker thread. The in-flight flag is always
        cleared once the call settles, whatever the outcome.

        Args:
            digest: Digest of the canonical image bytes.

        Returns:
            LookupResult (never raises for lookup failures).

        Raises:
            LookupInProgressError: If another lookup is still in flight.
        """
        if self._in_flight:
            raise LookupInProgressError("A lookup is already in progress")

        self._in_flight = True
        try:
            logger.info(f"Resolving {short_digest(digest)}")
            return await asyncio.to_thread(self._resolve_sync, digest)
        finally:
            self._in_flight = False

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
