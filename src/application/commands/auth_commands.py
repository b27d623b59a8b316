"""Authentication commands (CQRS write operations).

All commands are immutable (frozen=True) and use keyword-only arguments
(kw_only=True). Handlers execute them and return Result types.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Log in with email and password.

    Attributes:
        email: Email address as submitted (normalized by the handler).
        password: Plaintext password.
        ip_address: Client IP (brute-force key, device fingerprint).
        user_agent: Client User-Agent (device fingerprint).

    Example:
        >>> command = LoginUser(
        ...     email="a@x.com",
        ...     password="correct",
        ...     ip_address="10.0.0.7",
        ...     user_agent="Mozilla/5.0",
        ... )
        >>> result = await handler.handle(command)
    """

    email: str
    password: str
    ip_address: str
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class RefreshSession:
    """Exchange a refresh token for a new access/refresh pair.

    Attributes:
        refresh_token: Raw refresh token from cookie or body.
        ip_address: Client IP (device fingerprint of the new record).
        user_agent: Client User-Agent.
    """

    refresh_token: str
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """End the session behind one refresh token.

    Attributes:
        refresh_token: Raw refresh token, if the client still has one.
    """

    refresh_token: str | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutAllSessions:
    """Revoke every session of a user ("log out everywhere").

    Attributes:
        user_id: Authenticated user.
    """

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class ChangePassword:
    """Change password and invalidate all existing sessions.

    Attributes:
        user_id: Authenticated user.
        current_password: Must match the stored hash.
        new_password: Replacement password.
    """

    user_id: UUID
    current_password: str
    new_password: str
