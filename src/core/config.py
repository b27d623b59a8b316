"""
Configuration management using Pydantic Settings.

Type-safe configuration loaded from environment variables.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Signing secrets are mandatory: a missing secret logs the variable name
  and terminates the process with exit code 1 before any request is served

Usage:
    from src.core.config import settings

    lifetime = settings.access_token_expire_minutes
    if settings.is_production:
        ...
"""

import sys
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment
from src.core.errors import ConfigurationError

DEFAULT_BCRYPT_ROUNDS = 10
MIN_ACCESS_SECRET_LENGTH = 32

SameSitePolicy = Literal["strict", "lax", "none"]


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values (only for non-sensitive config)
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Application metadata
    app_name: str = Field(
        default="Auth Session Service",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # Database configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./auth_sessions.db",
        description="Database connection URL (postgresql+asyncpg://... in production)",
    )
    db_echo: bool = Field(
        default=False,
        description="Log all SQL queries",
    )

    # Token secrets (mandatory, checked by require_secrets)
    access_token_secret: str = Field(
        default="",
        description="HMAC secret for signing access tokens",
    )
    refresh_token_secret: str = Field(
        default="",
        description="HMAC secret for hashing refresh tokens (separate from access secret)",
    )
    access_token_expire_minutes: int = Field(
        default=15,
        description="Access token lifetime in minutes",
    )
    refresh_token_expire_days: int = Field(
        default=7,
        description="Refresh token lifetime in days",
    )
    bcrypt_rounds: int = Field(
        default=DEFAULT_BCRYPT_ROUNDS,
        description="bcrypt cost factor (invalid values fall back to 10)",
    )

    # Cookie overrides (None = derive from environment)
    cookie_secure: bool | None = Field(
        default=None,
        description="Force the Secure cookie attribute on or off",
    )
    cookie_same_site: SameSitePolicy | None = Field(
        default=None,
        description="Force the SameSite cookie attribute (strict, lax, none)",
    )

    # Brute-force guard
    login_max_attempts: int = Field(
        default=5,
        description="Failed logins per IP before lockout",
    )
    login_lockout_minutes: int = Field(
        default=15,
        description="Lockout window in minutes",
    )

    trust_proxy_headers: bool = Field(
        default=False,
        description="Read client IP from X-Forwarded-For / X-Real-IP (behind a trusted proxy)",
    )

    # CORS configuration
    cors_origins: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("bcrypt_rounds", mode="before")
    @classmethod
    def validate_bcrypt_rounds(cls, v: Any) -> int:
        """
        Coerce bcrypt rounds, falling back to the default on bad input.

        Args:
            v: Raw value from the environment.

        Returns:
            int: Rounds between 4 and 31, otherwise 10.
        """
        try:
            rounds = int(v)
        except (TypeError, ValueError):
            return DEFAULT_BCRYPT_ROUNDS
        if not 4 <= rounds <= 31:
            return DEFAULT_BCRYPT_ROUNDS
        return rounds

    @field_validator("cookie_same_site", mode="before")
    @classmethod
    def normalize_same_site(cls, v: Any) -> str | None:
        """Lower-case the SameSite override; unknown values mean no override."""
        if v is None or v == "":
            return None
        value = str(v).strip().lower()
        return value if value in ("strict", "lax", "none") else None

    @property
    def is_development(self) -> bool:
        """True if environment is DEVELOPMENT."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """True if environment is TESTING or CI."""
        return self.environment in (Environment.TESTING, Environment.CI)

    @property
    def is_production(self) -> bool:
        """True if environment is PRODUCTION."""
        return self.environment == Environment.PRODUCTION

    @property
    def cors_origin_list(self) -> list[str]:
        """Parsed CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def require_secrets(self) -> None:
        """
        Verify mandatory signing secrets are present and usable.

        ACCESS_TOKEN_SECRET must hold at least 32 characters (HS256 key size).

        Raises:
            ConfigurationError: Naming the first missing or unusable variable.
        """
        if len(self.access_token_secret) < MIN_ACCESS_SECRET_LENGTH:
            raise ConfigurationError("ACCESS_TOKEN_SECRET")
        if not self.refresh_token_secret:
            raise ConfigurationError("REFRESH_TOKEN_SECRET")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Exits the process with status 1 when a mandatory secret is missing.
    Only the variable name is logged.

    Returns:
        Settings: Cached settings instance.
    """
    loaded = Settings()
    try:
        loaded.require_secrets()
    except ConfigurationError as e:
        structlog.get_logger("config").error(
            "missing_required_config",
            variable=e.variable,
        )
        sys.exit(1)
    return loaded


settings = get_settings()
