"""
Application configuration using Pydantic settings.

Usage:
    from devconnect.config import get_settings
    settings = get_settings()

The settings object is built once by the entry point and handed to
``create_app``; components receive it explicitly instead of importing it.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env file.

    Required for production:
        - JWT_SECRET_KEY (min 32 chars)
        - GITHUB_TOKEN (for the repository listing)
        - DATABASE_URL
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # App settings
    app_name: str = Field(default="DevConnect", validation_alias="APP_NAME")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///devconnect.db", validation_alias="DATABASE_URL"
    )
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # JWT / Authentication
    jwt_secret_key: str = Field(default="CHANGE_ME", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(
        default=360000, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES"
    )

    # GitHub
    github_token: Optional[str] = Field(default=None, validation_alias="GITHUB_TOKEN")
    github_api_url: str = Field(default="https://api.github.com", validation_alias="GITHUB_API_URL")
    github_timeout: float = Field(default=10.0, validation_alias="GITHUB_TIMEOUT")

    # CORS
    cors_allowed_origins: str = Field(
        default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS"
    )

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Validate JWT secret - warns in dev, errors in production."""
        import os
        import warnings

        env = os.getenv("ENV", "development")
        is_production = env.lower() in ("production", "prod")

        forbidden_values = [
            "CHANGE_ME", "changeme", "secret", "your-secret-key",
            "jwt-secret", "mysecrettoken", "development", "test",
        ]

        is_forbidden = v.lower() in [fv.lower() for fv in forbidden_values]
        is_too_short = len(v) < 32

        if is_production:
            if is_forbidden:
                raise ValueError(
                    f"JWT_SECRET_KEY cannot be a default value ('{v}') in production. "
                    "Generate a secure key with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
                )
            if is_too_short:
                raise ValueError(
                    f"JWT_SECRET_KEY must be at least 32 characters in production (got {len(v)})."
                )
        elif is_forbidden:
            warnings.warn(
                f"JWT_SECRET_KEY is set to a default value ('{v}'). "
                "This is insecure - set a proper key for production.",
                UserWarning,
                stacklevel=2,
            )

        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def validate_production_config(self) -> tuple[List[str], List[str]]:
        """
        Validate configuration for production deployment.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings = []

        if self.jwt_secret_key == "CHANGE_ME":
            errors.append("JWT_SECRET_KEY must be set for production")
        elif len(self.jwt_secret_key) < 32:
            errors.append("JWT_SECRET_KEY must be at least 32 characters")

        if not self.github_token:
            warnings.append(
                "GITHUB_TOKEN not set - repository lookups will use unauthenticated "
                "requests and hit GitHub's lower rate limit."
            )

        if self.is_sqlite:
            warnings.append("DATABASE_URL points at SQLite - use PostgreSQL in production")

        return errors, warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
