"""Refresh token store.

Sole owner of refresh token records. Session handlers ask the store to
issue, verify, rotate and revoke; they never see hashes or talk to the
repository themselves.

Verification keeps the three failure modes apart:
    INVALID_TOKEN   no record for this hash
    EXPIRED_TOKEN   record past expires_at
    REVOKED_TOKEN   record already revoked or rotated (possible replay)
"""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError
from src.domain.protocols import (
    IssuedRefreshToken,
    LoggerProtocol,
    RefreshTokenData,
    RefreshTokenRepository,
    RefreshTokenServiceProtocol,
)


class RefreshTokenStore:
    """Refresh token lifecycle on top of a repository and a token service.

    Usage:
        store = RefreshTokenStore(
            repository=RefreshTokenRepository(session),
            token_service=get_refresh_token_service(),
            logger=get_logger(),
        )
        issued = await store.issue(user.id, fingerprint)
        result = await store.verify_and_consume(issued.raw_token)
    """

    def __init__(
        self,
        repository: RefreshTokenRepository,
        token_service: RefreshTokenServiceProtocol,
        logger: LoggerProtocol,
        revoked_retention: timedelta = timedelta(days=7),
    ) -> None:
        """Initialize store.

        Args:
            repository: Persistence for hashed records.
            token_service: Raw token generation and hashing.
            logger: Structured logger for security events.
            revoked_retention: How long revoked records are kept for replay
                detection before ``purge`` may delete them.
        """
        self._repository = repository
        self._token_service = token_service
        self._logger = logger
        self._revoked_retention = revoked_retention

    async def issue(
        self, user_id: UUID, device_fingerprint: str | None
    ) -> IssuedRefreshToken:
        """Create a new active refresh token."""
        raw_token, token_hash = self._token_service.generate_token()
        record = await self._repository.save(
            user_id=user_id,
            token_hash=token_hash,
            device_fingerprint=device_fingerprint,
            expires_at=self._token_service.calculate_expiration(),
        )
        return IssuedRefreshToken(
            raw_token=raw_token,
            record_id=record.id,
            expires_at=record.expires_at,
        )

    async def find(self, raw_token: str) -> RefreshTokenData | None:
        """Record for a raw token in any state (None if unknown)."""
        if not raw_token:
            return None
        return await self._repository.find_by_token_hash(
            self._token_service.hash_token(raw_token)
        )

    async def verify_and_consume(self, raw_token: str) -> Result[RefreshTokenData, str]:
        """Check a raw token is backed by an active, unexpired record.

        The record is not modified here; ``rotate`` consumes it.
        """
        record = await self.find(raw_token)
        if record is None:
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        if record.is_revoked:
            self._logger.warning(
                "revoked_refresh_token_presented",
                user_id=str(record.user_id),
                token_id=str(record.id),
                revoked_reason=record.revoked_reason,
                token_hash_prefix=record.token_hash[:8],
            )
            return Failure(error=AuthenticationError.REVOKED_TOKEN)

        if record.is_expired(datetime.now(UTC)):
            return Failure(error=AuthenticationError.EXPIRED_TOKEN)

        return Success(value=record)

    async def rotate(
        self,
        old_record_id: UUID,
        user_id: UUID,
        device_fingerprint: str | None,
    ) -> Result[IssuedRefreshToken, str]:
        """Replace an active record with a fresh one in one transaction.

        Returns:
            Failure(REVOKED_TOKEN) if another request rotated or revoked the
            record first.
        """
        raw_token, token_hash = self._token_service.generate_token()
        record = await self._repository.rotate(
            old_token_id=old_record_id,
            user_id=user_id,
            token_hash=token_hash,
            device_fingerprint=device_fingerprint,
            expires_at=self._token_service.calculate_expiration(),
        )
        if record is None:
            self._logger.info(
                "refresh_token_rotation_conflict",
                user_id=str(user_id),
                token_id=str(old_record_id),
            )
            return Failure(error=AuthenticationError.REVOKED_TOKEN)

        return Success(
            value=IssuedRefreshToken(
                raw_token=raw_token,
                record_id=record.id,
                expires_at=record.expires_at,
            )
        )

    async def revoke(self, record_id: UUID, reason: str = "logout") -> bool:
        """Revoke one record. Returns True if it was active."""
        return await self._repository.revoke(record_id, reason)

    async def revoke_all(self, user_id: UUID, reason: str = "logout_all") -> int:
        """Revoke every active record of a user."""
        count = await self._repository.revoke_all_for_user(user_id, reason)
        self._logger.info(
            "sessions_revoked",
            user_id=str(user_id),
            reason=reason,
            revoked_count=count,
        )
        return count

    async def purge(self, now: datetime | None = None) -> int:
        """Delete expired records and records revoked past the retention."""
        now = now or datetime.now(UTC)
        deleted = await self._repository.delete_stale(
            now=now, revoked_before=now - self._revoked_retention
        )
        self._logger.info("refresh_tokens_purged", deleted_count=deleted)
        return deleted
