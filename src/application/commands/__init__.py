"""Commands (write operations) and their handlers."""

from src.application.commands.auth_commands import (
    ChangePassword,
    LoginUser,
    LogoutAllSessions,
    LogoutUser,
    RefreshSession,
)

__all__ = [
    "ChangePassword",
    "LoginUser",
    "LogoutAllSessions",
    "LogoutUser",
    "RefreshSession",
]
