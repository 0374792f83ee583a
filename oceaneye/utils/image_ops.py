"""
Image operations utilities for the OceanEye identification service.

Provides the canonical encoding step that must run before hashing:
- Opening and validating images
- Re-encoding to the canonical format (PNG)
"""
import io
from typing import Optional
from PIL import Image, UnidentifiedImageError

from oceaneye import config
from oceaneye.errors import EncodingError

# Modes PNG stores as-is; anything else is converted to RGBA first
_PNG_NATIVE_MODES = ("RGB", "RGBA")

# What Pillow raises for bytes it cannot (or will not) decode
_DECODE_FAILURES = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    ValueError,
)


def validate_image(image_bytes: bytes) -> bool:
    """
    Check if bytes represent a valid image.

    Args:
        image_bytes: Raw bytes to validate.

    Returns:
        True if valid image, False otherwise.
    """
    if not image_bytes:
        return False

    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.verify()
        return True
    except _DECODE_FAILURES:
        return False


def open_image_from_bytes(image_bytes: bytes) -> Image.Image:
    """
    Open a PIL Image from bytes.

    Args:
        image_bytes: Raw image bytes.

    Returns:
        PIL Image object (caller must close).

    Raises:
        UnidentifiedImageError: If bytes are not a valid image.
    """
    return Image.open(io.BytesIO(image_bytes))


def image_to_canonical_bytes(
    image: Image.Image,
    image_format: Optional[str] = None
) -> bytes:
    """
    Encode a PIL Image in the canonical format.

    Args:
        image: PIL Image in any mode.
        image_format: Target format. Uses config default if None.

    Returns:
        Encoded image as bytes.
    """
    if image_format is None:
        image_format = config.CANONICAL_IMAGE_FORMAT

    if image.mode not in _PNG_NATIVE_MODES:
        image = image.convert("RGBA")

    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


def canonicalize_image(image_bytes: bytes) -> bytes:
    """
    Re-encode uploaded image bytes to the canonical format.

    The same picture uploaded as JPEG or PNG hashes
    differently; stored digests are taken over the PNG encoding of the
    decoded pixels, so uploads go through the same step.

    Args:
        image_bytes: Raw upload bytes in any format Pillow can read.

    Returns:
        PNG bytes.

    Raises:
        EncodingError: If the bytes are empty or not a decodable image.
    """
    if not image_bytes:
        raise EncodingError("Cannot canonicalize image: image_bytes is empty")

    try:
        with open_image_from_bytes(image_bytes) as img:
            img.load()
            return image_to_canonical_bytes(img)
    except _DECODE_FAILURES as e:
        raise EncodingError(f"Cannot canonicalize image: {e}") from e
