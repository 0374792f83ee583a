"""
Hashing utilities for the OceanEye identification service.

Provides cryptographic hashing functions for image identity.
A species record is matched ONLY by the SHA256 hash of canonical image bytes.
"""
import hashlib
from typing import Union

from oceaneye.errors import EncodingError

DIGEST_LENGTH = 64


def compute_digest(image_bytes: Union[bytes, bytearray]) -> str:
    """
    Compute the digest of raw image bytes.

    The bytes are hashed exactly as given: no resizing, no re-encoding.
    Callers must canonicalize first (see image_ops.canonicalize_image)
    or identical pictures in different encodings will not match.

    Args:
        image_bytes: Raw bytes of the canonical image (PNG).

    Returns:
        SHA256 hash as a lowercase hexadecimal string (64 characters).

    Raises:
        EncodingError: If image_bytes is empty or not bytes-like.

    Example:
        >>> digest = compute_digest(png_bytes)
        >>> print(digest)
        'a3f2b8c9d4e5f6...'
    """
    if not isinstance(image_bytes, (bytes, bytearray, memoryview)):
        raise EncodingError(
            f"Cannot compute digest: expected bytes, got {type(image_bytes).__name__}"
        )

    if not image_bytes:
        raise EncodingError("Cannot compute digest: image_bytes is empty")

    return hashlib.sha256(image_bytes).hexdigest()


def compute_file_digest(file_path: str) -> str:
    """
    Compute SHA256 hash of a file on disk.

    Reads file in chunks to handle large files efficiently.
    Used by the catalog builder when canonicalization is disabled.

    Args:
        file_path: Path to the file.

    Returns:
        SHA256 hash as a lowercase hexadecimal string.

    Raises:
        FileNotFoundError: If file doesn't exist.
        EncodingError: If the file is empty.
    """
    sha256 = hashlib.sha256()
    size = 0

    with open(file_path, "rb") as f:
        # Read in 64KB chunks for memory efficiency
        for chunk in iter(lambda: f.read(65536), b""):
            sha256.update(chunk)
            size += len(chunk)

    if size == 0:
        raise EncodingError(f"Cannot compute digest: {file_path} is empty")

    return sha256.hexdigest()


def is_valid_digest(digest: str) -> bool:
    """
    Validate that a string is a well-formed digest (lowercase SHA256 hex).

    Args:
        digest: String to validate.

    Returns:
        True if valid, False otherwise.
    """
    if not isinstance(digest, str):
        return False

    if len(digest) != DIGEST_LENGTH:
        return False

    return all(c in "0123456789abcdef" for c in digest)
