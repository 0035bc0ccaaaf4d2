"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services, settings and the authenticated caller into routes.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from postboard.adapters.notify.console import ConsoleActivationNotifier
from postboard.config.settings import Settings
from postboard.domain.entities import Identity
from postboard.domain.exceptions import InvalidToken
from postboard.domain.ports import PostRepository, UserRepository
from postboard.domain.posts import PostService
from postboard.domain.tokens import TokenService
from postboard.domain.users import UserService

API_V1_PREFIX = "/api/v1"

# Module-level singleton - ConsoleActivationNotifier is stateless
_notifier = ConsoleActivationNotifier()


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_user_repository(request: Request) -> UserRepository:
    """
    Get user repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.user_repository


def get_post_repository(request: Request) -> PostRepository:
    return request.app.state.post_repository


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_notifier() -> ConsoleActivationNotifier:
    """Get console activation notifier (singleton)."""
    return _notifier


def get_user_service(request: Request) -> UserService:
    """
    Create user service with injected dependencies.

    Wires together the repository, notifier and token service
    with the activation policy from settings.
    """
    settings = get_app_settings(request)
    return UserService(
        repository=get_user_repository(request),
        notifier=get_notifier(),
        tokens=get_token_service(request),
        activation_url=f"{settings.public_base_url.rstrip('/')}{API_V1_PREFIX}/users/activate",
        require_activation=settings.require_activation,
        bcrypt_cost=settings.bcrypt_cost,
    )


def get_post_service(request: Request) -> PostService:
    """Create post service with the configured mutable-field allow-list."""
    settings = get_app_settings(request)
    return PostService(
        repository=get_post_repository(request),
        mutable_fields=settings.post_mutable_fields,
    )


# Bearer token security scheme for OpenAPI documentation.
# auto_error is off so a missing token can be answered with 401 here.
http_bearer = HTTPBearer(auto_error=False)


def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> Identity:
    """
    Authenticate the caller from the ``Authorization: Bearer <token>`` header.

    - No header, a non-bearer scheme or an empty token: 401
    - Token with a bad signature, expired, or missing claims: 403

    Returns:
        Identity decoded from the token claims
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        identity = get_token_service(request).verify(credentials.credentials)
    except InvalidToken:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        ) from None

    request.state.identity = identity
    return identity
