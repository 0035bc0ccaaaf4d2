"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, routes and lifespan events.
"""

import logging
import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import psycopg
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from psycopg_pool import ConnectionPool

from postboard.adapters.repository.memory import InMemoryPostRepository, InMemoryUserRepository
from postboard.adapters.repository.postgres import (
    PostgresPostRepository,
    PostgresUserRepository,
    run_migrations,
)
from postboard.api.dependencies import API_V1_PREFIX
from postboard.api.v1 import router as v1_router
from postboard.config.settings import Settings, get_settings
from postboard.domain.exceptions import PostboardError, ValidationFailed
from postboard.domain.tokens import TokenService

logger = logging.getLogger(__name__)

INVALID_DATA_DETAIL = "Invalid data or missing fields"

# OpenAPI tags for documentation grouping
tags_metadata = [
    {"name": "users", "description": "Register, activate and log in user accounts"},
    {"name": "posts", "description": "Create, read, update, delete and view posts (bearer token required)"},
]


def _resolve_secret(settings: Settings) -> str:
    """Return the configured signing secret, or an ephemeral one with a warning."""
    if settings.jwt_secret is not None and settings.jwt_secret.get_secret_value():
        return settings.jwt_secret.get_secret_value()
    logger.warning("JWT_SECRET is not set; using an ephemeral secret, tokens will not survive a restart")
    return secrets.token_urlsafe(32)


def _validation_error_response(errors: list[dict[str, str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": INVALID_DATA_DETAIL, "errors": errors},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())[1:]]
        errors.append({"field": ".".join(location) or "body", "message": error.get("msg", "invalid")})
    return _validation_error_response(errors)


async def domain_validation_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    return _validation_error_response([{"field": e.field, "message": e.message} for e in exc.errors])


async def domain_error_handler(request: Request, exc: PostboardError) -> JSONResponse:
    """Fallback for domain errors a route did not translate itself."""
    logger.info("Unhandled domain error on %s: %s", request.url.path, type(exc).__name__)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": INVALID_DATA_DETAIL})


async def database_error_handler(request: Request, exc: psycopg.Error) -> JSONResponse:
    """Hide store errors from clients; the details only go to the log."""
    logger.error("Database error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": INVALID_DATA_DETAIL})


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application for the given settings.

    Args:
        settings: Explicit configuration; defaults to get_settings()
    """
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        FastAPI lifespan context manager.

        Manages application startup and shutdown:
        - Selects the store: PostgreSQL when DATABASE_URL is set, else in-memory
        - Runs migrations on startup (PostgreSQL only)
        - Closes connection pool on shutdown
        """
        logger.info("Starting application...")
        pool = None

        if settings.database_url:
            logger.info("Connecting to database...")
            pool = ConnectionPool(
                conninfo=settings.database_url,
                min_size=settings.pool_min_size,
                max_size=settings.pool_max_size,
                open=True,
            )

            logger.info("Running database migrations...")
            run_migrations(pool)

            app.state.user_repository = PostgresUserRepository(pool)
            app.state.post_repository = PostgresPostRepository(pool)
        else:
            logger.info("No DATABASE_URL configured, using in-memory store")
            app.state.user_repository = InMemoryUserRepository()
            app.state.post_repository = InMemoryPostRepository()

        logger.info("Application startup complete")

        yield

        # Shutdown
        logger.info("Shutting down application...")
        if pool is not None:
            pool.close()
            logger.info("Database connection pool closed")

    app = FastAPI(
        title="postboard",
        description="User registration with bearer-token authentication and CRUD over posts",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.token_service = TokenService(
        secret=_resolve_secret(settings),
        algorithm=settings.jwt_algorithm,
        ttl_seconds=settings.token_ttl_seconds,
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationFailed, domain_validation_handler)
    app.add_exception_handler(PostboardError, domain_error_handler)
    app.add_exception_handler(psycopg.Error, database_error_handler)

    # Include v1 API routes
    app.include_router(v1_router, prefix=API_V1_PREFIX)

    @app.get("/health")
    async def health_check(request: Request) -> dict[str, str]:
        """
        Health check endpoint with store validation.

        Returns 200 OK if application and store are healthy.
        Returns 503 if the store is unreachable.
        """
        try:
            request.app.state.user_repository.ping()
        except psycopg.Error:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Store unavailable") from None
        return {"status": "healthy"}

    return app


app = create_app()
