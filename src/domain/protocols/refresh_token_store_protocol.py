"""Refresh token store protocol.

The store exclusively owns refresh token records. Session handlers go
through it for every lifecycle step and never touch persistence directly.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.core.result import Result
from src.domain.protocols.refresh_token_repository import RefreshTokenData


@dataclass(frozen=True, slots=True, kw_only=True)
class IssuedRefreshToken:
    """A freshly issued refresh token.

    Attributes:
        raw_token: Value for the client cookie. Never persisted or logged.
        record_id: Id of the stored (hashed) record.
        expires_at: Absolute expiry of the record.
    """

    raw_token: str
    record_id: UUID
    expires_at: datetime


class RefreshTokenStoreProtocol(Protocol):
    """Issue, verify, rotate and revoke refresh tokens."""

    async def issue(
        self, user_id: UUID, device_fingerprint: str | None
    ) -> IssuedRefreshToken:
        """Create a new active refresh token for ``user_id``."""
        ...

    async def verify_and_consume(self, raw_token: str) -> Result[RefreshTokenData, str]:
        """Look up a raw token and check it is usable.

        Returns:
            Success(record) for an active record.
            Failure(INVALID_TOKEN) when no record matches the hash.
            Failure(EXPIRED_TOKEN) when the record has expired.
            Failure(REVOKED_TOKEN) when the record was revoked or rotated.
        """
        ...

    async def rotate(
        self,
        old_record_id: UUID,
        user_id: UUID,
        device_fingerprint: str | None,
    ) -> Result[IssuedRefreshToken, str]:
        """Supersede an active record with a new one, atomically.

        Returns:
            Failure(REVOKED_TOKEN) if the old record was rotated or revoked
            concurrently.
        """
        ...

    async def find(self, raw_token: str) -> RefreshTokenData | None:
        """Look up a raw token's record in any state."""
        ...

    async def revoke(self, record_id: UUID, reason: str = "logout") -> bool:
        """Revoke one record. Returns True if it was active."""
        ...

    async def revoke_all(self, user_id: UUID, reason: str = "logout_all") -> int:
        """Revoke every active record of a user. Returns the count."""
        ...

    async def purge(self, now: datetime | None = None) -> int:
        """Delete expired and long-revoked records. Returns the count."""
        ...
