"""Change password handler.

Flow:
1. Load user, require it to exist and be active
2. Verify the current password
3. Hash and store the new password
4. Revoke every refresh token of the user (all devices must log in again)
5. Return Success(revoked_count)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- Collaborators are injected via protocols
"""

from src.application.commands.auth_commands import ChangePassword
from src.core.result import Failure, Result, Success
from src.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    RefreshTokenStoreProtocol,
    UserRepository,
)


class ChangePasswordError:
    """Change password error reasons."""

    INVALID_CREDENTIALS = "invalid_credentials"
    SAME_PASSWORD = "same_password"


class ChangePasswordHandler:
    """Handler for change password command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        refresh_token_store: RefreshTokenStoreProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            user_repo: User lookup and password update.
            password_service: bcrypt hashing and verification.
            refresh_token_store: Session revocation.
            logger: Structured logger.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._refresh_token_store = refresh_token_store
        self._logger = logger

    async def handle(self, cmd: ChangePassword) -> Result[int, str]:
        """Handle change password command.

        Returns:
            Success(int): Number of sessions revoked.
            Failure(ChangePasswordError.*) otherwise.
        """
        # Step 1: Load user
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None or not user.is_active:
            return Failure(error=ChangePasswordError.INVALID_CREDENTIALS)

        # Step 2: Verify current password
        if not self._password_service.verify_password(
            cmd.current_password, user.password_hash
        ):
            self._logger.warning("password_change_failed", user_id=str(user.id))
            return Failure(error=ChangePasswordError.INVALID_CREDENTIALS)

        if cmd.new_password == cmd.current_password:
            return Failure(error=ChangePasswordError.SAME_PASSWORD)

        # Step 3: Store the new hash
        new_hash = self._password_service.hash_password(cmd.new_password)
        await self._user_repo.update_password(user.id, new_hash)

        # Step 4: Revoke every session
        revoked_count = await self._refresh_token_store.revoke_all(
            user.id, reason="password_changed"
        )

        self._logger.info(
            "password_changed",
            user_id=str(user.id),
            revoked_count=revoked_count,
        )

        # Step 5: Return Success
        return Success(value=revoked_count)
