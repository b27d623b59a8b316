"""Token generation protocol (access token codec).

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (JWTService)

Token Strategy:
    - Access tokens: short-lived signed JWT carrying subject + role id
    - Refresh tokens: opaque, stored hashed (see RefreshTokenStoreProtocol)
    - Stateless validation (no database lookup)
"""

from typing import Protocol
from uuid import UUID

from src.core.result import Result
from src.domain.value_objects import AccessTokenClaims


class TokenGenerationProtocol(Protocol):
    """Access token issue/verify interface.

    Usage:
        token = token_service.generate_access_token(user_id=user.id, role_id=user.role_id)

        match token_service.validate_access_token(token):
            case Success(value=claims):
                claims.user_id, claims.role_id
            case Failure(error=AuthenticationError.EXPIRED_TOKEN):
                ...  # refresh and retry
            case Failure(error=_):
                ...  # invalid
    """

    def generate_access_token(self, user_id: UUID, role_id: int) -> str:
        """Issue a signed access token for ``user_id`` with ``role_id``."""
        ...

    def validate_access_token(self, token: str) -> Result[AccessTokenClaims, str]:
        """Verify signature and expiry.

        Returns:
            Success(AccessTokenClaims) for a valid token.
            Failure(AuthenticationError.EXPIRED_TOKEN) for a lapsed token.
            Failure(AuthenticationError.INVALID_TOKEN) for anything else.
        """
        ...
