"""Refresh session handler (token rotation).

Flow:
1. Verify the refresh token against the store
2. On a revoked token (replay of an already-rotated token): revoke every
   session of its owner before failing
3. Load user, require it to exist and be active
4. Rotate the refresh token (conditional, atomic)
5. Generate a new JWT access token with the user's current role
6. Return Success(tokens)

Every failure is reported to the caller as SESSION_EXPIRED: an ordinary
expiry and a detected replay look the same from outside, only the
containment differs.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- Collaborators are injected via protocols
"""

from dataclasses import dataclass

from src.application.commands.auth_commands import RefreshSession
from src.core.fingerprinting import generate_device_fingerprint
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError
from src.domain.protocols import (
    LoggerProtocol,
    RefreshTokenStoreProtocol,
    TokenGenerationProtocol,
    UserRepository,
)


class RefreshError:
    """Refresh-specific error reasons."""

    SESSION_EXPIRED = "session_expired"


@dataclass
class RefreshResponse:
    """Response data for successful token refresh."""

    access_token: str
    refresh_token: str


class RefreshSessionHandler:
    """Handler for refresh session command.

    Implements refresh token rotation with reuse detection:
    - Each refresh token can be exchanged exactly once
    - Presenting a rotated/revoked token revokes all of the owner's sessions
    """

    def __init__(
        self,
        user_repo: UserRepository,
        token_service: TokenGenerationProtocol,
        refresh_token_store: RefreshTokenStoreProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize refresh handler with dependencies.

        Args:
            user_repo: User lookup (role and activation state).
            token_service: Access token issuing.
            refresh_token_store: Refresh token verification and rotation.
            logger: Structured logger for security events.
        """
        self._user_repo = user_repo
        self._token_service = token_service
        self._refresh_token_store = refresh_token_store
        self._logger = logger

    async def handle(self, cmd: RefreshSession) -> Result[RefreshResponse, str]:
        """Handle refresh session command.

        Args:
            cmd: RefreshSession command.

        Returns:
            Success(RefreshResponse) with the rotated pair.
            Failure(RefreshError.SESSION_EXPIRED) otherwise.
        """
        # Step 1: Verify refresh token
        verified = await self._refresh_token_store.verify_and_consume(cmd.refresh_token)

        match verified:
            case Failure(error=AuthenticationError.REVOKED_TOKEN):
                # Step 2: Replay of a consumed token, contain the whole account
                record = await self._refresh_token_store.find(cmd.refresh_token)
                if record is not None:
                    self._logger.warning(
                        "refresh_token_reuse_detected",
                        user_id=str(record.user_id),
                        token_id=str(record.id),
                        ip_address=cmd.ip_address,
                        user_agent=cmd.user_agent,
                    )
                    await self._refresh_token_store.revoke_all(
                        record.user_id, reason="token_reuse"
                    )
                return Failure(error=RefreshError.SESSION_EXPIRED)
            case Failure(error=reason):
                self._logger.info(
                    "refresh_failed",
                    reason=reason,
                    ip_address=cmd.ip_address,
                )
                return Failure(error=RefreshError.SESSION_EXPIRED)
            case Success(value=record):
                pass

        # Step 3: User must still exist and be active
        user = await self._user_repo.find_by_id(record.user_id)
        if user is None or not user.is_active:
            await self._refresh_token_store.revoke(record.id, reason="user_inactive")
            self._logger.info(
                "refresh_failed",
                reason="user_unavailable",
                user_id=str(record.user_id),
            )
            return Failure(error=RefreshError.SESSION_EXPIRED)

        # Step 4: Rotate (loses cleanly to a concurrent refresh)
        rotated = await self._refresh_token_store.rotate(
            old_record_id=record.id,
            user_id=user.id,
            device_fingerprint=generate_device_fingerprint(cmd.user_agent, cmd.ip_address),
        )
        match rotated:
            case Failure(error=_):
                return Failure(error=RefreshError.SESSION_EXPIRED)
            case Success(value=issued):
                pass

        # Step 5: Fresh access token with current role
        access_token = self._token_service.generate_access_token(
            user_id=user.id,
            role_id=user.role_id,
        )

        self._logger.info("session_refreshed", user_id=str(user.id))

        # Step 6: Return Success
        return Success(
            value=RefreshResponse(
                access_token=access_token,
                refresh_token=issued.raw_token,
            )
        )
