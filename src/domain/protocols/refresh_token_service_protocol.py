"""RefreshTokenServiceProtocol - refresh token generation and hashing."""

from datetime import datetime
from typing import Protocol


class RefreshTokenServiceProtocol(Protocol):
    """Protocol for opaque refresh token generation.

    Implementations:
        - RefreshTokenService: src/infrastructure/security/refresh_token_service.py
    """

    def generate_token(self) -> tuple[str, str]:
        """Generate a raw token and its storage hash.

        Returns:
            Tuple of (token, token_hash). Only the hash may be persisted.
        """
        ...

    def hash_token(self, token: str) -> str:
        """Deterministic lookup hash for a raw token."""
        ...

    def calculate_expiration(self) -> datetime:
        """Expiration timestamp (UTC) for a token issued now."""
        ...
