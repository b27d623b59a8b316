"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (SQLite / PostgreSQL)
- Password hashing (bcrypt)
- Token generation (JWT access tokens, HMAC-hashed refresh tokens)
- Login attempt limiter (in-memory brute-force guard)
- Logging (console)

Request-scoped:
- Database session
"""

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.login_attempt_limiter_protocol import (
        LoginAttemptLimiterProtocol,
    )
    from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
    from src.domain.protocols.refresh_token_service_protocol import (
        RefreshTokenServiceProtocol,
    )
    from src.infrastructure.security import JWTService


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns Database instance with its engine.
    Use get_db_session() for per-request sessions.

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Get logger singleton (app-scoped).

    Returns ConsoleAdapter:
        - development: colored console output, DEBUG level when DEBUG=true
        - testing/ci/production: JSON lines

    Returns:
        Logger implementing LoggerProtocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=logging.DEBUG if settings.debug else logging.INFO,
        service_name=settings.app_name,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception
        - Always closes session

    Yields:
        Database session for request duration.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Cost factor comes from BCRYPT_ROUNDS (default 10).
    """
    from src.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_token_service() -> "JWTService":
    """Get JWT access token service singleton (app-scoped).

    Returns JWTService signed with ACCESS_TOKEN_SECRET (HS256).
    The concrete type is returned so callers can read ``expires_in_seconds``
    for cookie max-age.
    """
    from src.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.access_token_secret,
        expiration_minutes=settings.access_token_expire_minutes,
    )


@lru_cache()
def get_refresh_token_service() -> "RefreshTokenServiceProtocol":
    """Get refresh token service singleton (app-scoped).

    Hashes tokens with REFRESH_TOKEN_SECRET, never with the access secret.
    """
    from src.infrastructure.security import RefreshTokenService

    return RefreshTokenService(
        secret_key=settings.refresh_token_secret,
        expiration_days=settings.refresh_token_expire_days,
    )


@lru_cache()
def get_login_attempt_limiter() -> "LoginAttemptLimiterProtocol":
    """Get brute-force guard singleton (app-scoped).

    One instance per process; counters are not shared between replicas.
    """
    from src.infrastructure.security import LoginAttemptLimiter

    return LoginAttemptLimiter(
        max_attempts=settings.login_max_attempts,
        window_seconds=settings.login_lockout_minutes * 60,
    )
