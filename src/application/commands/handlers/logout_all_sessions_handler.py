"""LogoutAllSessions command handler.

Handles the LogoutAllSessions command to revoke every refresh token of the
authenticated user ("sign out everywhere").

Flow:
1. Revoke all active refresh tokens of the user
2. Return Success(revoked_count)

Access tokens already handed out stay valid until they expire.
"""

from src.application.commands.auth_commands import LogoutAllSessions
from src.core.result import Result, Success
from src.domain.protocols import RefreshTokenStoreProtocol


class LogoutAllSessionsHandler:
    """Handler for LogoutAllSessions command."""

    def __init__(self, refresh_token_store: RefreshTokenStoreProtocol) -> None:
        self._refresh_token_store = refresh_token_store

    async def handle(self, cmd: LogoutAllSessions) -> Result[int, str]:
        """Revoke all sessions for the user.

        Returns:
            Success(int): Number of refresh tokens revoked.
        """
        revoked_count = await self._refresh_token_store.revoke_all(
            cmd.user_id, reason="logout_all"
        )
        return Success(value=revoked_count)
