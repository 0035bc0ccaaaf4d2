"""
Domain exceptions - Semantic error types for users, posts and tokens.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from .validation import FieldError


class PostboardError(Exception):
    """Base class for postboard domain errors."""

    pass


class ValidationFailed(PostboardError):
    """Entity fields violate the validation rules."""

    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__(", ".join(f"{e.field}: {e.message}" for e in errors))
        self.errors = errors


class MalformedIdentifier(PostboardError):
    """Identifier does not have the shape of a store key."""

    pass


class UserNotFound(PostboardError):
    pass


class PostNotFound(PostboardError):
    pass


class EmailAlreadyRegistered(PostboardError):
    """Another user already owns this email."""

    pass


class InvalidCredentials(PostboardError):
    """Unknown email or password mismatch."""

    pass


class AccountNotActivated(PostboardError):
    """Login attempted before activation."""

    pass


class InvalidToken(PostboardError):
    """Bearer token failed signature, expiry or claims verification."""

    pass
