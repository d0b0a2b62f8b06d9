"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from docvc.interfaces.api.app import create_app


@pytest.fixture
def app(engine):
    """Falcon ASGI app over an in-memory engine."""
    return create_app(engine)


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def document(client: TestClient) -> dict:
    """doc1 initialized with "Hello"."""
    r = client.simulate_post(
        "/v1/documents",
        json={"document_id": "doc1", "content": "Hello", "author": "alice"},
    )
    assert r.status_code == 201
    return r.json
