"""Test fixtures for the web layer."""

import pytest
from fastapi.testclient import TestClient

from app.auth import TokenAuthenticator
from app.main import create_app

TEST_TOKEN = "test-token"
TEST_USER_ID = "user-123"


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
def client(completion_client):
    """Create a TestClient with the mocked completion client injected."""
    app = create_app(
        completion_client=completion_client,
        authenticator=TokenAuthenticator({TEST_TOKEN: TEST_USER_ID}),
    )
    return TestClient(app)
