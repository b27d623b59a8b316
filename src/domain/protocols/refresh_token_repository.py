"""RefreshTokenRepository protocol (port) for domain layer.

Persistence contract for hashed refresh token records. The conditional
``rotate`` is the concurrency primitive of the refresh flow: it supersedes
the old record only if it is still active, so two requests racing with the
same token cannot both succeed.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (adapter)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass
class RefreshTokenData:
    """Data transfer object for a refresh token record.

    Keeps infrastructure model classes out of application code.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    device_fingerprint: str | None
    issued_at: datetime
    expires_at: datetime
    revoked_at: datetime | None
    revoked_reason: str | None
    replaced_by_id: UUID | None

    @property
    def is_revoked(self) -> bool:
        """True once the record has been revoked or rotated."""
        return self.revoked_at is not None

    def is_expired(self, now: datetime) -> bool:
        """True when ``now`` is at or past ``expires_at``."""
        return now >= self.expires_at


class RefreshTokenRepository(Protocol):
    """Protocol for refresh token persistence operations.

    Token Lifecycle:
        1. Created during login
        2. Looked up by hash during refresh (any state)
        3. Rotated on every refresh (old revoked + linked, new created)
        4. Revoked on logout, logout-all, password change or replay
        5. Purged once expired or long revoked

    Implementations:
        - RefreshTokenRepository (SQLAlchemy): src/infrastructure/persistence/repositories/
    """

    async def save(
        self,
        user_id: UUID,
        token_hash: str,
        device_fingerprint: str | None,
        expires_at: datetime,
    ) -> RefreshTokenData:
        """Persist a new active record.

        Args:
            user_id: Owner of the token.
            token_hash: Hash of the raw token (never the raw token).
            device_fingerprint: Fingerprint of the issuing device.
            expires_at: Absolute expiry.

        Returns:
            Created RefreshTokenData.
        """
        ...

    async def find_by_token_hash(self, token_hash: str) -> RefreshTokenData | None:
        """Find a record by hash regardless of revoked/expired state.

        Callers need revoked records to detect replays.
        """
        ...

    async def find_by_id(self, token_id: UUID) -> RefreshTokenData | None:
        """Find a record by id."""
        ...

    async def rotate(
        self,
        old_token_id: UUID,
        user_id: UUID,
        token_hash: str,
        device_fingerprint: str | None,
        expires_at: datetime,
    ) -> RefreshTokenData | None:
        """Atomically supersede ``old_token_id`` with a new record.

        In one transaction: revoke the old record only if it is still active,
        link it to the new record via ``replaced_by_id``, insert the new record.

        Returns:
            The new record, or None if the old record was no longer active
            (nothing is written in that case).
        """
        ...

    async def revoke(self, token_id: UUID, reason: str) -> bool:
        """Revoke one record if active.

        Returns:
            True if a record changed state.
        """
        ...

    async def revoke_all_for_user(self, user_id: UUID, reason: str) -> int:
        """Revoke every active record of a user.

        Returns:
            Number of records revoked.
        """
        ...

    async def delete_stale(self, now: datetime, revoked_before: datetime) -> int:
        """Delete records expired at ``now`` or revoked before ``revoked_before``.

        Returns:
            Number of records deleted.
        """
        ...
