"""
Entity validation - explicit field rules for users and posts.

Each validator inspects a mapping of field values and returns a
ValidationResult instead of raising, so callers decide how to react.
Services call these before every create and update.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .entities import PostStatus

MIN_TITLE_LENGTH = 5
MIN_TEXT_LENGTH = 5
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt input limit

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    """Outcome of validating one entity."""

    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field_name, message))


def is_encodable(value: str) -> bool:
    """Whether value can be stored as UTF-8 (JSON may carry lone surrogates)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _required_text(
    result: ValidationResult,
    data: Mapping[str, Any],
    name: str,
    min_length: int = 1,
    allow_blank: bool = False,
) -> None:
    value = data.get(name)
    if value is None:
        result.add(name, "is required")
    elif not isinstance(value, str):
        result.add(name, "must be a string")
    elif not is_encodable(value):
        result.add(name, "must be valid UTF-8 text")
    elif not allow_blank and not value.strip():
        result.add(name, "must not be blank")
    elif len(value) < min_length:
        result.add(name, f"must be at least {min_length} characters")


def validate_user(data: Mapping[str, Any]) -> ValidationResult:
    """
    Validate registration fields.

    Rules:
    - name: required, non-blank
    - email: required, address shaped
    - password: required, at least 8 characters, at most 72 bytes
    - bio: optional string
    """
    result = ValidationResult()
    _required_text(result, data, "name")
    _required_text(result, data, "email")
    if "email" not in {e.field for e in result.errors} and not _EMAIL_RE.match(data["email"]):
        result.add("email", "is not a valid email address")
    _required_text(result, data, "password", MIN_PASSWORD_LENGTH)
    password = data.get("password")
    if isinstance(password, str) and is_encodable(password) and len(password.encode()) > MAX_PASSWORD_BYTES:
        result.add("password", f"must be at most {MAX_PASSWORD_BYTES} bytes")

    bio = data.get("bio")
    if bio is not None and not isinstance(bio, str):
        result.add("bio", "must be a string")
    elif bio is not None and not is_encodable(bio):
        result.add("bio", "must be valid UTF-8 text")
    return result


def validate_post(data: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a complete post record (after any partial merge).

    Rules:
    - title, text: required, at least 5 characters (whitespace counts)
    - author: required, non-blank
    - status: one of draft/published/archived
    - views: non-negative integer
    - created_at, updated_at: timezone-aware datetimes
    """
    result = ValidationResult()
    _required_text(result, data, "title", MIN_TITLE_LENGTH, allow_blank=True)
    _required_text(result, data, "text", MIN_TEXT_LENGTH, allow_blank=True)
    _required_text(result, data, "author")

    status = data.get("status", PostStatus.DRAFT.value)
    if status not in [s.value for s in PostStatus]:
        result.add("status", "must be one of draft, published, archived")

    views = data.get("views", 0)
    # bool is an int subclass, reject it explicitly
    if isinstance(views, bool) or not isinstance(views, int) or views < 0:
        result.add("views", "must be a non-negative integer")

    for name in ("created_at", "updated_at"):
        if name not in data:
            continue
        if not isinstance(data[name], datetime):
            result.add(name, "must be a timestamp")
        elif data[name].tzinfo is None:
            result.add(name, "must include a timezone")
    return result
