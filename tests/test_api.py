"""Tests for the HTTP API."""

import pytest
import requests
from fastapi.testclient import TestClient

from oceaneye.main import app
from oceaneye.services.identifier import get_identifier

from conftest import TEST_RECORDS_URL, FakeSession, make_oversized_png, make_png


@pytest.fixture
def client_for(make_identifier):
    """Factory: TestClient whose identifier uses the given fake session."""
    def _client(session: FakeSession) -> TestClient:
        identifier = make_identifier(session)
        app.dependency_overrides[get_identifier] = lambda: identifier
        return TestClient(app)

    yield _client

    app.dependency_overrides.clear()


def test_health(client_for):
    response = client_for(FakeSession()).get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["records_url"] == TEST_RECORDS_URL
    assert data["identifying"] is False


def test_identify_photo_found(client_for, photo_bytes, photo_document, photo_digest):
    client = client_for(FakeSession(photo_document))

    response = client.post(
        "/identify/",
        files={"file": ("fish.png", photo_bytes, "image/png")}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "found"
    assert data["digest"] == photo_digest
    assert data["record"]["name"] == "Blue Tang"
    assert data["record"]["scientific_name"] == "Paracanthurus hepatus"
    assert data["details"][0] == ["Name", "Blue Tang"]
    assert data["notice"] is None


def test_identify_photo_not_found(client_for, photo_document):
    client = client_for(FakeSession(photo_document))

    response = client.post(
        "/identify/",
        files={"file": ("other.png", make_png(color=(9, 9, 9)), "image/png")}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "not_found"
    assert data["record"] is None
    assert data["notice"]["action"] == "retake_photo"


def test_identify_photo_network_failure(client_for, photo_bytes):
    client = client_for(FakeSession(exc=requests.ConnectionError("refused")))

    response = client.post(
        "/identify/",
        files={"file": ("fish.png", photo_bytes, "image/png")}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "transport_error"
    assert data["notice"]["action"] == "retry"


def test_identify_not_an_image(client_for):
    session = FakeSession()
    client = client_for(session)

    response = client.post(
        "/identify/",
        files={"file": ("notes.txt", b"hello", "text/plain")}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "encoding_error"
    assert session.calls == []


def test_identify_oversized_image_settles(client_for):
    session = FakeSession()
    client = client_for(session)

    response = client.post(
        "/identify/",
        files={"file": ("huge.png", make_oversized_png(), "image/png")}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "encoding_error"
    assert data["notice"]["action"] == "retake_photo"
    assert session.calls == []


def test_identify_empty_upload_rejected(client_for):
    response = client_for(FakeSession()).post(
        "/identify/",
        files={"file": ("empty.png", b"", "image/png")}
    )
    assert response.status_code == 400


def test_identify_by_digest(client_for, photo_document, photo_digest):
    client = client_for(FakeSession(photo_document))

    response = client.get(f"/identify/{photo_digest}")

    assert response.status_code == 200
    assert response.json()["record"]["name"] == "Blue Tang"


def test_identify_by_digest_decode_error(client_for):
    client = client_for(FakeSession({"1": {"hash": "a" * 64, "name": "Tang"}}))

    response = client.get(f"/identify/{'a' * 64}")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "decode_error"
    assert data["notice"]["action"] == "retake_photo"


def test_identify_by_malformed_digest(client_for):
    session = FakeSession()
    response = client_for(session).get("/identify/NOT-A-DIGEST")
    assert response.status_code == 422
    assert session.calls == []
