"""
Catalog builder for the OceanEye identification service.

Builds the record document the resolver reads, from a folder of
reference images and a metadata file:

    metadata.json:  {"-Nfish01": {"image": "clownfish.png", "name": "Clownfish",
                     "habitat": "Reef", "scientific": "Amphiprioninae",
                     "size": "10cm", "status": "Least Concern"}}

    output:         {"-Nfish01": {"hash": "<sha256>", "name": "Clownfish", ...}}

The digests are computed the same way uploads are, so a photo of a
reference image identifies as its record.
"""
import json
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from oceaneye.errors import EncodingError
from oceaneye.models.schemas import Record
from oceaneye.utils.hashing import compute_digest, compute_file_digest
from oceaneye.utils.image_ops import canonicalize_image, validate_image
from oceaneye.utils.logging import get_logger, short_digest

logger = get_logger(__name__)

IMAGE_KEY = "image"


def digest_reference_image(path: Path, canonicalize: bool = True) -> str:
    """
    Compute the digest a reference image is stored under.

    Args:
        path: Path to the reference image.
        canonicalize: Re-encode to PNG first (must match the service's
            CANONICALIZE_UPLOADS setting).

    Returns:
        SHA256 hex digest.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        EncodingError: If the file is empty or not a decodable image.
    """
    if canonicalize:
        return compute_digest(canonicalize_image(path.read_bytes()))

    if not validate_image(path.read_bytes()):
        raise EncodingError(f"Not a decodable image: {path}")

    return compute_file_digest(str(path))


def build_record_document(
    metadata: Dict[str, Dict[str, Any]],
    image_dir: Path,
    canonicalize: bool = True
) -> Dict[str, Dict[str, str]]:
    """
    Build the wire-format record document.

    Args:
        metadata: Record key -> species fields plus "image" filename.
        image_dir: Folder holding the reference images.
        canonicalize: Re-encode images to PNG before hashing.

    Returns:
        Record key -> wire record ({"hash", "name", ...}).

    Raises:
        ValueError: If an entry lacks an image or a species field, or two
            entries hash to the same digest.
        EncodingError: If a reference image can't be decoded.
    """
    document: Dict[str, Dict[str, str]] = {}
    seen: Dict[str, str] = {}

    for key, entry in metadata.items():
        if not isinstance(entry, dict) or not entry.get(IMAGE_KEY):
            raise ValueError(f"Entry '{key}' has no '{IMAGE_KEY}' filename")

        digest = digest_reference_image(image_dir / entry[IMAGE_KEY], canonicalize)

        if digest in seen:
            raise ValueError(
                f"Entries '{seen[digest]}' and '{key}' share digest {short_digest(digest)}"
            )
        seen[digest] = key

        fields = {k: v for k, v in entry.items() if k != IMAGE_KEY}
        fields["hash"] = digest

        try:
            record = Record.model_validate(fields)
        except ValidationError as e:
            raise ValueError(f"Invalid metadata for '{key}': {e}") from e

        document[key] = record.model_dump(by_alias=True)
        logger.debug(f"{key}: {record.name} -> {short_digest(digest)}")

    logger.info(f"Built record document with {len(document)} records")
    return document


def write_record_document(document: Dict[str, Dict[str, str]], out_path: Path) -> None:
    """Write the document as JSON, ready to import into the database."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2, ensure_ascii=False)
