"""Shared fixtures: an app wired to an in-memory SQLite database."""

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.security import TokenService
from main import create_app


TEST_SECRET = "test-secret"


@pytest.fixture
def settings():
    return Settings(_env_file=None, database_url="sqlite://", secret_key=TEST_SECRET, log_level="DEBUG")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def auth_headers(client):
    """Register and log in a user, returning headers carrying their token."""
    credentials = {"username": "alice", "password": "secret123"}
    assert client.post("/register", json=credentials).status_code == 201
    response = client.post("/login", json=credentials)
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
