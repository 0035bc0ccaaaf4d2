"""
Domain layer - Pure business logic with zero web or database framework imports.

This package contains the core logic for users and posts: entities,
explicit validation rules, token handling and the services the HTTP layer
calls. It defines its own port interfaces for infrastructure abstraction,
ensuring true hexagonal architecture decoupling.
"""

from .entities import Identity, Post, PostStatus, User
from .exceptions import (
    AccountNotActivated,
    EmailAlreadyRegistered,
    InvalidCredentials,
    InvalidToken,
    MalformedIdentifier,
    PostboardError,
    PostNotFound,
    UserNotFound,
    ValidationFailed,
)
from .ports import ActivationNotifier, PostRepository, UserRepository
from .posts import PostService
from .tokens import TokenService
from .users import UserService

__all__ = [
    "AccountNotActivated",
    "ActivationNotifier",
    "EmailAlreadyRegistered",
    "Identity",
    "InvalidCredentials",
    "InvalidToken",
    "MalformedIdentifier",
    "Post",
    "PostNotFound",
    "PostRepository",
    "PostService",
    "PostStatus",
    "PostboardError",
    "TokenService",
    "User",
    "UserNotFound",
    "UserRepository",
    "UserService",
    "ValidationFailed",
]
