"""RefreshTokenRepository - SQLAlchemy implementation for refresh token persistence.

Rotation is a conditional UPDATE (``WHERE revoked_at IS NULL``) followed by
the INSERT of the successor, committed together. Under concurrent refreshes
with the same token only one UPDATE matches a row; the others see a
rowcount of 0 and write nothing.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from src.domain.protocols.refresh_token_repository import RefreshTokenData
from src.infrastructure.persistence.base import as_utc
from src.infrastructure.persistence.models.refresh_token import RefreshToken


def _to_data(model: RefreshToken) -> RefreshTokenData:
    """Convert database model to domain DTO."""
    return RefreshTokenData(
        id=model.id,
        user_id=model.user_id,
        token_hash=model.token_hash,
        device_fingerprint=model.device_fingerprint,
        issued_at=as_utc(model.issued_at),  # type: ignore[arg-type]
        expires_at=as_utc(model.expires_at),  # type: ignore[arg-type]
        revoked_at=as_utc(model.revoked_at),
        revoked_reason=model.revoked_reason,
        replaced_by_id=model.replaced_by_id,
    )


class RefreshTokenRepository:
    """SQLAlchemy implementation for refresh token persistence.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = RefreshTokenRepository(session)
        ...     token = await repo.find_by_token_hash(token_hash)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def save(
        self,
        user_id: UUID,
        token_hash: str,
        device_fingerprint: str | None,
        expires_at: datetime,
    ) -> RefreshTokenData:
        """Create new refresh token in database.

        Args:
            user_id: Owner of the token.
            token_hash: Lookup hash of the raw token.
            device_fingerprint: Fingerprint of the issuing device.
            expires_at: Token expiration timestamp.

        Returns:
            Created RefreshTokenData.
        """
        token_model = RefreshToken(
            id=uuid7(),
            user_id=user_id,
            token_hash=token_hash,
            device_fingerprint=device_fingerprint,
            issued_at=datetime.now(UTC),
            expires_at=expires_at,
        )
        self.session.add(token_model)
        await self.session.commit()
        return _to_data(token_model)

    async def find_by_token_hash(self, token_hash: str) -> RefreshTokenData | None:
        """Find refresh token by hash, in any state.

        Args:
            token_hash: Lookup hash of the token.

        Returns:
            RefreshTokenData if found, None otherwise.
        """
        stmt = (
            select(RefreshToken)
            .where(RefreshToken.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model else None

    async def find_by_id(self, token_id: UUID) -> RefreshTokenData | None:
        """Find refresh token by ID."""
        model = await self.session.get(RefreshToken, token_id, populate_existing=True)
        return _to_data(model) if model else None

    async def rotate(
        self,
        old_token_id: UUID,
        user_id: UUID,
        token_hash: str,
        device_fingerprint: str | None,
        expires_at: datetime,
    ) -> RefreshTokenData | None:
        """Supersede an active token with a new one in a single commit.

        Args:
            old_token_id: Record being rotated.
            user_id: Owner (must match the old record).
            token_hash: Hash of the successor token.
            device_fingerprint: Fingerprint of the refreshing device.
            expires_at: Successor expiry.

        Returns:
            Successor RefreshTokenData, or None if the old record was no
            longer active.
        """
        now = datetime.now(UTC)
        new_id = uuid7()

        stmt = (
            update(RefreshToken)
            .where(RefreshToken.id == old_token_id)
            .where(RefreshToken.user_id == user_id)
            .where(RefreshToken.revoked_at.is_(None))
            .values(
                revoked_at=now,
                revoked_reason="rotated",
                replaced_by_id=new_id,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:  # type: ignore[attr-defined]
            await self.session.rollback()
            return None

        token_model = RefreshToken(
            id=new_id,
            user_id=user_id,
            token_hash=token_hash,
            device_fingerprint=device_fingerprint,
            issued_at=now,
            expires_at=expires_at,
        )
        self.session.add(token_model)
        await self.session.commit()
        return _to_data(token_model)

    async def revoke(self, token_id: UUID, reason: str) -> bool:
        """Revoke a single active token.

        Returns:
            True if the token was active and is now revoked.
        """
        now = datetime.now(UTC)
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.id == token_id)
            .where(RefreshToken.revoked_at.is_(None))
            .values(revoked_at=now, revoked_reason=reason, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def revoke_all_for_user(self, user_id: UUID, reason: str) -> int:
        """Revoke all active refresh tokens for a user.

        Args:
            user_id: User's unique identifier.
            reason: Reason for revocation (logout_all, password_changed, token_reuse).

        Returns:
            Number of tokens revoked.
        """
        now = datetime.now(UTC)
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .where(RefreshToken.revoked_at.is_(None))
            .values(revoked_at=now, revoked_reason=reason, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return int(result.rowcount or 0)  # type: ignore[attr-defined]

    async def delete_stale(self, now: datetime, revoked_before: datetime) -> int:
        """Delete expired tokens and tokens revoked before ``revoked_before``.

        Returns:
            Number of tokens deleted.
        """
        stmt = (
            delete(RefreshToken)
            .where(
                or_(
                    RefreshToken.expires_at <= now,
                    RefreshToken.revoked_at < revoked_before,
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return int(result.rowcount or 0)  # type: ignore[attr-defined]
