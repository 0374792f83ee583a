"""Pytest configuration and fixtures."""

import io
import json
import struct
import threading
import zlib
from typing import Any, List, Optional, Tuple

import pytest
import requests
from PIL import Image

from oceaneye.services.identifier import Identifier
from oceaneye.services.resolver import RecordResolver
from oceaneye.utils.hashing import compute_digest
from oceaneye.utils.image_ops import canonicalize_image


TEST_RECORDS_URL = "https://records.test/.json"

CLOWNFISH = {
    "hash": "h1",
    "name": "Clownfish",
    "habitat": "Reef",
    "scientific": "Amphiprioninae",
    "size": "10cm",
    "status": "Least Concern",
}


class FakeSession:
    """Stands in for requests.Session; serves one canned response."""

    def __init__(
        self,
        body: Any = None,
        status_code: int = 200,
        exc: Optional[Exception] = None,
        gate: Optional[threading.Event] = None,
        content_type: str = "application/json; charset=utf-8"
    ):
        if body is not None and not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        self.body = body if body is not None else b"null"
        self.status_code = status_code
        self.exc = exc
        self.gate = gate
        self.content_type = content_type
        self.calls: List[Tuple[str, Any]] = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))

        if self.gate is not None:
            self.gate.wait(timeout=5)

        if self.exc is not None:
            raise self.exc

        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.body
        response.url = url
        if self.content_type:
            response.headers["Content-Type"] = self.content_type
        return response

    def close(self):
        self.closed = True


def make_resolver(session: FakeSession, **kwargs) -> RecordResolver:
    """Build a resolver against the fake endpoint."""
    return RecordResolver(
        records_url=TEST_RECORDS_URL,
        timeout=2,
        session=session,
        **kwargs
    )


def make_png(color=(0, 128, 255), size=(8, 8), mode="RGB") -> bytes:
    """Encode a solid-colour test image as PNG."""
    img = Image.new(mode, size, color)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def make_oversized_png(width: int = 20000, height: int = 20000) -> bytes:
    """1x1 PNG whose IHDR claims width x height (CRC kept valid)."""
    data = bytearray(make_png(size=(1, 1)))
    data[16:24] = struct.pack(">II", width, height)
    data[29:33] = struct.pack(">I", zlib.crc32(bytes(data[12:29])) & 0xFFFFFFFF)
    return bytes(data)


@pytest.fixture
def clownfish_document():
    return {"1": dict(CLOWNFISH)}


@pytest.fixture
def photo_bytes() -> bytes:
    return make_png()


@pytest.fixture
def photo_digest(photo_bytes) -> str:
    return compute_digest(canonicalize_image(photo_bytes))


@pytest.fixture
def photo_document(photo_digest):
    """Record document containing one record for the test photo."""
    return {
        "-Nfish01": {
            "hash": photo_digest,
            "name": "Blue Tang",
            "habitat": "Indo-Pacific reefs",
            "scientific": "Paracanthurus hepatus",
            "size": "30cm",
            "status": "Least Concern",
        },
        "-Nfish02": {
            "hash": "0" * 64,
            "name": "Moorish Idol",
            "habitat": "Lagoons",
            "scientific": "Zanclus cornutus",
            "size": "23cm",
            "status": "Least Concern",
        },
    }


@pytest.fixture
def make_identifier():
    """Factory: Identifier backed by a FakeSession."""
    def _make(session: FakeSession, canonicalize: bool = True) -> Identifier:
        return Identifier(make_resolver(session), canonicalize=canonicalize)
    return _make
