"""
Identification service for the OceanEye identification service.

Ties the pieces together: canonicalize -> hash -> resolve.
Holds the state the app's main screen used to keep (identifying flag,
last matched record) so the HTTP layer can stay thin.
"""
import asyncio
from typing import Optional

from oceaneye import config
from oceaneye.errors import EncodingError, LookupInProgressError
from oceaneye.models.schemas import LookupResult
from oceaneye.services.resolver import RecordResolver
from oceaneye.utils.hashing import compute_digest
from oceaneye.utils.image_ops import canonicalize_image
from oceaneye.utils.logging import get_logger, short_digest

logger = get_logger(__name__)


class Identifier:
    """
    Identifies a species from a photo by exact digest match.
    """

    def __init__(
        self,
        resolver: RecordResolver,
        canonicalize: Optional[bool] = None
    ):
        """
        Initialize the identifier.

        Args:
            resolver: Resolver used for digest lookups.
            canonicalize: Re-encode uploads to PNG before hashing.
        """
        self.resolver = resolver
        if canonicalize is None:
            canonicalize = config.CANONICALIZE_UPLOADS
        self.canonicalize = canonicalize
        self.last_result: Optional[LookupResult] = None
        self._hashing = False

    @property
    def is_identifying(self) -> bool:
        """True from the start of hashing until the lookup settles."""
        return self._hashing or self.resolver.in_flight

    def compute_image_digest(self, image_bytes: bytes) -> str:
        """
        Canonicalize (if enabled) and hash uploaded image bytes.

        Raises:
            EncodingError: If the bytes can't be decoded or are empty.
        """
        if self.canonicalize:
            image_bytes = canonicalize_image(image_bytes)
        return compute_digest(image_bytes)

    async def identify(self, image_bytes: bytes) -> LookupResult:
        """
        Identify the species in an uploaded photo.

        Canonicalizing and hashing run in a worker thread, like the fetch.

        Args:
            image_bytes: Raw upload bytes.

        Returns:
            LookupResult. Encoding failures settle as encoding_error
            without touching the network.

        Raises:
            LookupInProgressError: If a lookup is already in flight.
        """
        if self.is_identifying:
            raise LookupInProgressError("A lookup is already in progress")

        self._hashing = True
        try:
            digest = await asyncio.to_thread(self.compute_image_digest, image_bytes)
        except EncodingError as e:
            logger.warning(f"Could not hash upload: {e}")
            result = LookupResult.failure(e)
            self.last_result = result
            return result
        finally:
            self._hashing = False

        logger.debug(f"Upload digest: {short_digest(digest)}")
        return await self.identify_digest(digest)

    async def identify_digest(self, digest: str) -> LookupResult:
        """
        Identify the species for an already computed digest.

        Raises:
            LookupInProgressError: If a lookup is already in flight.
        """
        if self._hashing:
            raise LookupInProgressError("A lookup is already in progress")

        result = await self.resolver.resolve(digest)
        self.last_result = result
        return result


# Singleton instance for the application
_identifier: Optional[Identifier] = None


def get_identifier() -> Identifier:
    """
    Get the singleton identifier instance.

    Returns:
        Identifier built from config.
    """
    global _identifier

    if _identifier is None:
        _identifier = Identifier(RecordResolver())

    return _identifier


def reset_identifier() -> None:
    """Drop the singleton (closing its HTTP session)."""
    global _identifier

    if _identifier is not None:
        _identifier.resolver.close()
        _identifier = None
