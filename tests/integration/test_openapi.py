"""
Integration tests for OpenAPI documentation.

Verifies OpenAPI schema is correctly generated for all endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from postboard.api.main import create_app
from postboard.config.settings import Settings


@pytest.fixture
def docs(settings: Settings) -> TestClient:
    """Create test client for the application (no lifespan needed)."""
    return TestClient(create_app(settings))


@pytest.fixture
def schema(docs: TestClient) -> dict:
    response = docs.get("/openapi.json")
    assert response.status_code == 200
    return response.json()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_title_and_version(self, schema: dict) -> None:
        assert schema["info"]["title"] == "postboard"
        assert schema["info"]["version"] == "0.1.0"

    @pytest.mark.parametrize(
        ("path", "method"),
        [
            ("/api/v1/users", "post"),
            ("/api/v1/users/activate/{user_id}", "get"),
            ("/api/v1/login", "post"),
            ("/api/v1/posts", "post"),
            ("/api/v1/posts", "get"),
            ("/api/v1/posts/{post_id}", "get"),
            ("/api/v1/posts/{post_id}", "patch"),
            ("/api/v1/posts/{post_id}", "delete"),
            ("/api/v1/posts/{post_id}/view", "patch"),
        ],
    )
    def test_endpoint_documented(self, schema: dict, path: str, method: str) -> None:
        assert method in schema["paths"][path]

    def test_post_endpoints_declare_bearer_security(self, schema: dict) -> None:
        assert schema["components"]["securitySchemes"]["HTTPBearer"]["scheme"] == "bearer"
        assert "security" in schema["paths"]["/api/v1/posts"]["get"]
        assert "security" not in schema["paths"]["/api/v1/login"]["post"]

    def test_post_response_uses_camel_case(self, schema: dict) -> None:
        props = schema["components"]["schemas"]["PostResponse"]["properties"]
        assert "createdAt" in props
        assert "updatedAt" in props

    def test_user_response_has_no_password(self, schema: dict) -> None:
        props = schema["components"]["schemas"]["UserResponse"]["properties"]
        assert not any("password" in name.lower() for name in props)

    def test_tags_defined(self, schema: dict) -> None:
        assert {t["name"] for t in schema.get("tags", [])} == {"users", "posts"}


class TestSwaggerUI:
    """Tests for Swagger UI availability."""

    def test_docs_endpoint_accessible(self, docs: TestClient) -> None:
        response = docs.get("/docs")
        assert response.status_code == 200
        assert "swagger" in response.text.lower()
