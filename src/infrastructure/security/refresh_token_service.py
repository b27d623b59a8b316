"""Refresh token service.

Generates opaque refresh tokens and the deterministic hash they are
stored and looked up under.

Token Strategy:
    - Opaque tokens (NOT JWT), 32 random bytes (urlsafe base64)
    - Stored as HMAC-SHA256(REFRESH_TOKEN_SECRET, token): deterministic, so the
      record can be found by hash, and useless to anyone reading the table
      without the secret
    - 7-day expiration, tracked in the database record
    - Rotated on every use
"""

import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta


class RefreshTokenService:
    """Refresh token generation and hashing service.

    Usage:
        service = RefreshTokenService(secret_key=settings.refresh_token_secret)
        token, token_hash = service.generate_token()
        # persist token_hash, hand token to the client
        lookup_hash = service.hash_token(token_from_cookie)
    """

    def __init__(self, secret_key: str, expiration_days: int = 7) -> None:
        """Initialize refresh token service.

        Args:
            secret_key: HMAC key, distinct from the access token secret.
            expiration_days: Token lifetime in days (default: 7).

        Raises:
            ValueError: If secret_key is empty.
        """
        if not secret_key:
            msg = "Refresh token secret must not be empty"
            raise ValueError(msg)

        self._secret_key = secret_key.encode("utf-8")
        self._expiration_days = expiration_days

    @property
    def expires_in_seconds(self) -> int:
        """Refresh token lifetime in seconds (cookie max-age)."""
        return self._expiration_days * 24 * 60 * 60

    def generate_token(self) -> tuple[str, str]:
        """Generate refresh token and its hash.

        Returns:
            Tuple of (token, token_hash): the raw token for the client and
            the 64-character hex hash for storage.
        """
        token = secrets.token_urlsafe(32)
        return token, self.hash_token(token)

    def hash_token(self, token: str) -> str:
        """Hash a raw token for storage or lookup.

        Example:
            >>> service = RefreshTokenService(secret_key="s" * 32)
            >>> service.hash_token("abc") == service.hash_token("abc")
            True
        """
        return hmac.new(
            self._secret_key, token.encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def calculate_expiration(self) -> datetime:
        """Expiration timestamp (UTC) for a token issued now."""
        return datetime.now(UTC) + timedelta(days=self._expiration_days)
