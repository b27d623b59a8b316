"""Authentication handler dependency factories.

Request-scoped handler instances for session lifecycle operations:
- Login, refresh (rotation), logout
- Logout from all devices
- Password change

Each factory builds the request's repositories on the request-scoped
database session and wires them with the app-scoped services.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.services import RefreshTokenStore
from src.core.config import settings
from src.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_login_attempt_limiter,
    get_password_service,
    get_refresh_token_service,
    get_token_service,
)
from src.domain.protocols import UserRepository

if TYPE_CHECKING:
    from src.application.commands.handlers.change_password_handler import (
        ChangePasswordHandler,
    )
    from src.application.commands.handlers.login_user_handler import LoginUserHandler
    from src.application.commands.handlers.logout_all_sessions_handler import (
        LogoutAllSessionsHandler,
    )
    from src.application.commands.handlers.logout_user_handler import LogoutUserHandler
    from src.application.commands.handlers.refresh_session_handler import (
        RefreshSessionHandler,
    )


# ============================================================================
# Request-Scoped Collaborators
# ============================================================================


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> UserRepository:
    """Get user repository (request-scoped)."""
    from src.infrastructure.persistence.repositories import (
        UserRepository as SqlUserRepository,
    )

    return SqlUserRepository(session=session)


async def get_refresh_token_store(
    session: AsyncSession = Depends(get_db_session),
) -> RefreshTokenStore:
    """Get refresh token store (request-scoped).

    The store is the only component that reads or writes refresh token
    records; handlers receive it instead of the repository.
    """
    from src.infrastructure.persistence.repositories import RefreshTokenRepository

    return RefreshTokenStore(
        repository=RefreshTokenRepository(session=session),
        token_service=get_refresh_token_service(),
        logger=get_logger(),
        revoked_retention=timedelta(days=settings.refresh_token_expire_days),
    )


# ============================================================================
# Authentication Handler Factories
# ============================================================================


async def get_login_user_handler(
    user_repo: UserRepository = Depends(get_user_repository),
    refresh_token_store: RefreshTokenStore = Depends(get_refresh_token_store),
) -> "LoginUserHandler":
    """Get LoginUser command handler (request-scoped).

    Dependencies:
    - UserRepository (request-scoped, uses session)
    - RefreshTokenStore (request-scoped, uses session)
    - BcryptPasswordService, JWTService, LoginAttemptLimiter (app-scoped)

    Usage:
        @router.post("/auth/login")
        async def login(
            handler: LoginUserHandler = Depends(get_login_user_handler),
        ):
            result = await handler.handle(command)
    """
    from src.application.commands.handlers.login_user_handler import LoginUserHandler

    return LoginUserHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        token_service=get_token_service(),
        refresh_token_store=refresh_token_store,
        login_limiter=get_login_attempt_limiter(),
        logger=get_logger(),
    )


async def get_refresh_session_handler(
    user_repo: UserRepository = Depends(get_user_repository),
    refresh_token_store: RefreshTokenStore = Depends(get_refresh_token_store),
) -> "RefreshSessionHandler":
    """Get RefreshSession command handler (request-scoped)."""
    from src.application.commands.handlers.refresh_session_handler import (
        RefreshSessionHandler,
    )

    return RefreshSessionHandler(
        user_repo=user_repo,
        token_service=get_token_service(),
        refresh_token_store=refresh_token_store,
        logger=get_logger(),
    )


async def get_logout_user_handler(
    refresh_token_store: RefreshTokenStore = Depends(get_refresh_token_store),
) -> "LogoutUserHandler":
    """Get LogoutUser command handler (request-scoped)."""
    from src.application.commands.handlers.logout_user_handler import LogoutUserHandler

    return LogoutUserHandler(
        refresh_token_store=refresh_token_store,
        logger=get_logger(),
    )


async def get_logout_all_sessions_handler(
    refresh_token_store: RefreshTokenStore = Depends(get_refresh_token_store),
) -> "LogoutAllSessionsHandler":
    """Get LogoutAllSessions command handler (request-scoped)."""
    from src.application.commands.handlers.logout_all_sessions_handler import (
        LogoutAllSessionsHandler,
    )

    return LogoutAllSessionsHandler(refresh_token_store=refresh_token_store)


async def get_change_password_handler(
    user_repo: UserRepository = Depends(get_user_repository),
    refresh_token_store: RefreshTokenStore = Depends(get_refresh_token_store),
) -> "ChangePasswordHandler":
    """Get ChangePassword command handler (request-scoped)."""
    from src.application.commands.handlers.change_password_handler import (
        ChangePasswordHandler,
    )

    return ChangePasswordHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        refresh_token_store=refresh_token_store,
        logger=get_logger(),
    )
