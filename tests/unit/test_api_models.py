"""
Unit tests for API request/response models.

Tests Pydantic model validation and camelCase serialization.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from postboard.api.models import (
    PostResponse,
    PostUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from postboard.domain.entities import Post, User

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_valid_register_request(self) -> None:
        request = RegisterRequest(name="Alice", email="alice@example.com", password="password123")
        assert request.bio is None

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(name="Alice", email="not-an-email", password="password123")
        assert "email" in str(exc_info.value)

    def test_missing_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(email="alice@example.com", password="password123")  # type: ignore[call-arg]


class TestUserResponse:
    """Tests for UserResponse model."""

    def test_password_hash_not_exposed(self) -> None:
        user = User(id="0" * 24, name="Alice", email="alice@example.com", password_hash="$2b$hash", created_at=NOW)

        dumped = UserResponse.from_entity(user).model_dump(by_alias=True)

        assert "password" not in dumped
        assert "password_hash" not in dumped
        assert "passwordHash" not in dumped
        assert dumped["createdAt"] == NOW


class TestPostUpdateRequest:
    """Tests for PostUpdateRequest model."""

    def test_only_sent_fields_are_set(self) -> None:
        request = PostUpdateRequest.model_validate({"title": "New title"})
        assert request.model_dump(exclude_unset=True) == {"title": "New title"}

    def test_camel_case_keys_accepted(self) -> None:
        request = PostUpdateRequest.model_validate({"updatedAt": "2024-01-01T00:00:00Z"})
        assert request.model_dump(exclude_unset=True) == {"updated_at": NOW}

    def test_naive_timestamp_taken_as_utc(self) -> None:
        request = PostUpdateRequest.model_validate({"createdAt": "2024-01-01T00:00:00"})
        assert request.created_at == NOW
        assert request.created_at.tzinfo is timezone.utc

    def test_offset_timestamp_converted_to_utc(self) -> None:
        request = PostUpdateRequest.model_validate({"createdAt": "2024-01-01T02:00:00+02:00"})
        assert request.created_at == NOW
        assert request.created_at.tzinfo is timezone.utc

    def test_unknown_keys_ignored(self) -> None:
        request = PostUpdateRequest.model_validate({"colour": "red", "views": 3})
        assert request.model_dump(exclude_unset=True) == {"views": 3}

    def test_non_integer_views_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PostUpdateRequest.model_validate({"views": "many"})


class TestPostResponse:
    """Tests for PostResponse model."""

    def test_serializes_camel_case(self) -> None:
        post = Post(
            id="0" * 24,
            title="Hello World",
            text="Some text body",
            author="alice",
            created_at=NOW,
            updated_at=NOW,
        )

        dumped = PostResponse.from_entity(post).model_dump(by_alias=True)

        assert dumped == {
            "id": "0" * 24,
            "title": "Hello World",
            "text": "Some text body",
            "author": "alice",
            "status": "draft",
            "views": 0,
            "createdAt": NOW,
            "updatedAt": NOW,
        }
