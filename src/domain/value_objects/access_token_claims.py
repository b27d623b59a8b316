"""Verified access token identity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessTokenClaims:
    """Identity extracted from a verified access token.

    Attributes:
        user_id: Token subject.
        role_id: Role id embedded at issuance (may be unknown to ``Role``).
        issued_at: ``iat`` claim (epoch seconds).
        expires_at: ``exp`` claim (epoch seconds).
        jti: Unique token id.
    """

    user_id: UUID
    role_id: int
    issued_at: int
    expires_at: int
    jti: str | None = None
