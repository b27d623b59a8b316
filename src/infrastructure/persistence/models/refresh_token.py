"""Refresh token database model.

Security:
    - token_hash: HMAC-SHA256 of the raw token (NEVER plaintext)
    - expires_at: 7 days from issuance
    - revoked_at: set on logout, rotation, password change or replay detection
    - replaced_by_id: links a rotated record to its successor
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, utc_now


class RefreshToken(BaseMutableModel):
    """Refresh token record.

    Token Lifecycle:
        1. Created on login
        2. Rotated on each refresh: revoked_at set, replaced_by_id points at
           the successor (one-time use)
        3. Revoked on logout / logout-all / password change / replay
        4. Purged after expiry

    Fields:
        user_id: Owner (cascade delete with user)
        token_hash: Lookup hash (unique)
        device_fingerprint: sha256(user-agent + IP) of the issuing device
        issued_at: Issuance timestamp
        expires_at: Expiry timestamp
        revoked_at: Revocation timestamp (NULL while active)
        revoked_reason: logout, logout_all, rotated, password_changed, token_reuse
        replaced_by_id: Successor record after rotation
    """

    __tablename__ = "refresh_tokens"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )

    device_fingerprint: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )

    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    revoked_reason: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    replaced_by_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index(
            "idx_refresh_tokens_cleanup",
            "expires_at",
            "revoked_at",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<RefreshToken("
            f"id={self.id}, "
            f"user_id={self.user_id}, "
            f"expires_at={self.expires_at}, "
            f"revoked={self.revoked_at is not None}"
            f")>"
        )
