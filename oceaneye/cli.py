"""OceanEye CLI.

Builds the species record document from reference images.

Example
-------
oceaneye-build-records --images ./reference --metadata ./species.json --out ./records.json
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional, Sequence

from oceaneye import config
from oceaneye.errors import EncodingError
from oceaneye.services.catalog import build_record_document, write_record_document
from oceaneye.utils.logging import get_logger

logger = get_logger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(
        prog="oceaneye-build-records",
        description=(
            "Hash reference images and write the record document the "
            "identification service looks digests up in."
        ),
    )
    p.add_argument(
        "--images",
        required=True,
        type=Path,
        help="Folder holding the reference images named in the metadata file.",
    )
    p.add_argument(
        "--metadata",
        required=True,
        type=Path,
        help="JSON object of record key -> species fields plus an 'image' filename.",
    )
    p.add_argument(
        "--out",
        required=True,
        type=Path,
        help="Where to write the record document (JSON).",
    )
    p.add_argument(
        "--raw",
        action="store_true",
        default=not config.CANONICALIZE_UPLOADS,
        help=(
            "Hash the image files as-is instead of their PNG re-encoding. "
            "Use only when the service runs with canonicalization disabled."
        ),
    )
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point. Returns a process exit code."""
    args = _parse_args(argv)

    try:
        with open(args.metadata, "r", encoding="utf-8") as f:
            metadata = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read metadata {args.metadata}: {e}")
        return 2

    if not isinstance(metadata, dict):
        logger.error("Metadata must be a JSON object of key -> entry")
        return 2

    try:
        document = build_record_document(
            metadata,
            args.images,
            canonicalize=not args.raw
        )
    except (OSError, ValueError, EncodingError) as e:
        logger.error(f"Failed to build record document: {e}")
        return 1

    write_record_document(document, args.out)
    logger.info(f"Wrote {len(document)} records to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
