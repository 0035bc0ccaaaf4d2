"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic.alias_generators import to_snake
from pydantic_settings import BaseSettings, SettingsConfigDict

from postboard.domain.entities import POST_FIELDS


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    public_base_url: str = "http://localhost:8000"  # Used to build activation links
    log_level: str = "INFO"

    # Database configuration (unset -> in-memory store)
    database_url: str | None = None
    pool_min_size: int = 2  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool

    # Token settings
    jwt_secret: SecretStr | None = None  # Unset -> ephemeral per-process secret
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = 3600

    # Registration settings
    require_activation: bool = True  # New accounts start inactive
    bcrypt_cost: int = 10  # bcrypt work factor

    # Post settings: fields a PATCH may merge (None -> every post field)
    post_mutable_fields: list[str] | None = None

    @field_validator("post_mutable_fields")
    @classmethod
    def _known_post_fields(cls, value: list[str] | None) -> list[str] | None:
        """Accept wire names (createdAt) or attribute names, store attribute names."""
        if value is None:
            return None
        names = [to_snake(name) for name in value]
        unknown = sorted(set(names) - set(POST_FIELDS))
        if unknown:
            raise ValueError(f"unknown post fields: {', '.join(unknown)}")
        return names


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
