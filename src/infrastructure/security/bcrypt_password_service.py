"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol using bcrypt.

Security:
    - Default cost factor 10
    - Out-of-range cost factors fall back to the default instead of failing
      startup, matching how BCRYPT_ROUNDS is read from the environment
"""

import secrets

import bcrypt

DEFAULT_COST_FACTOR = 10
MIN_COST_FACTOR = 4
MAX_COST_FACTOR = 31


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service: PasswordHashingProtocol = get_password_service()
        password_hash = password_service.hash_password("SecurePass123!")
        is_valid = password_service.verify_password("SecurePass123!", password_hash)
    """

    def __init__(self, cost_factor: int = DEFAULT_COST_FACTOR) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: bcrypt cost factor. Values outside 4-31 (or non-int)
                fall back to 10.
        """
        if (
            isinstance(cost_factor, bool)
            or not isinstance(cost_factor, int)
            or not MIN_COST_FACTOR <= cost_factor <= MAX_COST_FACTOR
        ):
            cost_factor = DEFAULT_COST_FACTOR

        self._cost_factor = cost_factor
        self._dummy_hash: str | None = None

    @property
    def cost_factor(self) -> int:
        """Effective cost factor."""
        return self._cost_factor

    @property
    def dummy_hash(self) -> str:
        """Hash of a random throwaway password, computed on first use."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash_password(secrets.token_urlsafe(16))
        return self._dummy_hash

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$10$...).
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns:
            True if password matches hash. False on mismatch or when the
            hash is malformed.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False
