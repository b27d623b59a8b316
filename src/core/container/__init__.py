"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_login_user_handler, ...

The container is organized into modules:
- infrastructure: Core services (db, logging, security services)
- auth_handlers: Session lifecycle handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_logger,
    get_login_attempt_limiter,
    get_password_service,
    get_refresh_token_service,
    get_token_service,
)

# Auth handlers
from src.core.container.auth_handlers import (
    get_change_password_handler,
    get_login_user_handler,
    get_logout_all_sessions_handler,
    get_logout_user_handler,
    get_refresh_session_handler,
    get_refresh_token_store,
    get_user_repository,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_logger",
    "get_login_attempt_limiter",
    "get_password_service",
    "get_refresh_token_service",
    "get_token_service",
    # Auth
    "get_change_password_handler",
    "get_login_user_handler",
    "get_logout_all_sessions_handler",
    "get_logout_user_handler",
    "get_refresh_session_handler",
    "get_refresh_token_store",
    "get_user_repository",
]
