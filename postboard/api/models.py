"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
JSON keys are camelCase on the wire (createdAt, updatedAt); attributes
stay snake_case and either name is accepted on input.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from postboard.domain.entities import Post, User


class WireModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(WireModel):
    """Request model for user registration."""

    name: str
    email: EmailStr
    password: str = Field(..., description="User password (8 to 72 bytes)")
    bio: str | None = None


class UserResponse(WireModel):
    """Public view of a user. The password hash is never exposed."""

    id: str
    name: str
    email: str
    bio: str | None = None
    active: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            bio=user.bio,
            active=user.active,
            created_at=user.created_at,
        )


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    """Request model for login."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """Response model for successful login."""

    token: str


class PostCreateRequest(BaseModel):
    """Request model for post creation. Length rules are checked by the domain."""

    title: str
    text: str
    author: str


class PostUpdateRequest(WireModel):
    """
    Request model for partial post updates.

    Only the keys present in the body are merged; unknown keys are ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: str | None = None
    text: str | None = None
    author: str | None = None
    status: str | None = None
    views: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime | None) -> datetime | None:
        """Timestamps without an offset are taken as UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class PostResponse(WireModel):
    """Response model for a post."""

    id: str
    title: str
    text: str
    author: str
    status: str
    views: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            text=post.text,
            author=post.author,
            status=post.status,
            views=post.views,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
    errors: list[FieldErrorResponse] | None = None
