"""Logout User handler for User Authentication.

Flow:
1. Look up the presented refresh token (if any)
2. Revoke it when it is still active
3. Return Success(message)

Logout always succeeds: a missing, unknown or already revoked token still
means the client is logged out once its cookies are cleared.

Note: JWT access tokens cannot be revoked (they expire naturally in 15 minutes).
This handler only revokes the refresh token to prevent new access tokens.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- Collaborators are injected via protocols
"""

from __future__ import annotations

from dataclasses import dataclass

from src.application.commands.auth_commands import LogoutUser
from src.core.result import Result, Success
from src.domain.protocols import LoggerProtocol, RefreshTokenStoreProtocol


@dataclass
class LogoutResponse:
    """Response data for successful logout."""

    message: str = "Logged out successfully"


class LogoutUserHandler:
    """Handler for logout user command.

    Revokes the refresh token to prevent new access tokens from being issued.
    The current access token remains valid until it expires.
    """

    def __init__(
        self,
        refresh_token_store: RefreshTokenStoreProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize logout handler with dependencies.

        Args:
            refresh_token_store: Refresh token lookup and revocation.
            logger: Structured logger.
        """
        self._refresh_token_store = refresh_token_store
        self._logger = logger

    async def handle(self, cmd: LogoutUser) -> Result[LogoutResponse, str]:
        """Handle logout user command.

        Args:
            cmd: LogoutUser command with the optional refresh token.

        Returns:
            Success(LogoutResponse), always.
        """
        # Step 1: Nothing presented, nothing to revoke
        if not cmd.refresh_token:
            return Success(value=LogoutResponse())

        record = await self._refresh_token_store.find(cmd.refresh_token)
        if record is None or record.is_revoked:
            return Success(value=LogoutResponse())

        # Step 2: Revoke the session's refresh token
        await self._refresh_token_store.revoke(record.id, reason="logout")
        self._logger.info(
            "logout_succeeded",
            user_id=str(record.user_id),
            token_id=str(record.id),
        )

        # Step 3: Return Success
        return Success(value=LogoutResponse())
