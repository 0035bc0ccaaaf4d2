"""
Domain entities - User and Post records.

Plain dataclasses shared by services and repository adapters.
Identifiers are assigned by the store (see identifiers.py).
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostStatus(str, Enum):
    """
    Publication status of a post.

    Declared states: DRAFT (default), PUBLISHED, ARCHIVED.
    No endpoint transitions between them; a PATCH may set the
    field directly when it is on the mutable-field allow-list.
    """

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


@dataclass
class User:
    """Registered account. Only the bcrypt hash of the password is kept."""

    id: str
    name: str
    email: str
    password_hash: str
    bio: str | None = None
    active: bool = False
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class Post:
    id: str
    title: str
    text: str
    author: str
    status: str = PostStatus.DRAFT.value
    views: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


# Post fields a partial update can address, in wire order
POST_FIELDS = ("title", "text", "author", "status", "views", "created_at", "updated_at")


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, decoded from a bearer token."""

    user_id: str
    email: str
