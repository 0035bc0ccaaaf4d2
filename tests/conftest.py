"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Explicit test settings (in-memory store, fast bcrypt, fixed secret)
- Test client setup against the full application
- Factories to register, activate and log in users
"""

from collections.abc import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from postboard.api.main import create_app
from postboard.config.settings import Settings

TEST_SECRET = "test-secret-key-for-signing-tokens-000"


@pytest.fixture
def settings() -> Settings:
    """Settings that never touch a real database and hash quickly."""
    return Settings(
        database_url=None,
        jwt_secret=TEST_SECRET,
        bcrypt_cost=4,
        require_activation=True,
    )


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """Create test client; the context manager runs the app lifespan."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def register(client: TestClient) -> Callable[..., httpx.Response]:
    """Factory posting to /api/v1/users."""

    def _register(
        email: str = "alice@example.com",
        password: str = "password123",
        name: str = "Alice",
        bio: str | None = None,
    ) -> httpx.Response:
        payload = {"name": name, "email": email, "password": password}
        if bio is not None:
            payload["bio"] = bio
        return client.post("/api/v1/users", json=payload)

    return _register


@pytest.fixture
def login(client: TestClient) -> Callable[..., httpx.Response]:
    """Factory posting to /api/v1/login."""

    def _login(email: str = "alice@example.com", password: str = "password123") -> httpx.Response:
        return client.post("/api/v1/login", json={"email": email, "password": password})

    return _login


@pytest.fixture
def auth_headers(client: TestClient, register, login) -> dict:
    """Register, activate and log in a user; return its Authorization header."""
    user_id = register().json()["user"]["id"]
    client.get(f"/api/v1/users/activate/{user_id}")
    token = login().json()["token"]
    return {"Authorization": f"Bearer {token}"}
