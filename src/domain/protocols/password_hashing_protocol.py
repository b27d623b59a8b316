"""Password hashing protocol for domain layer.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (BcryptPasswordService)
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        password_hash = password_service.hash_password("SecurePass123!")
        ok = password_service.verify_password("SecurePass123!", password_hash)
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password (random salt per call)."""
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Returns:
            True if password matches hash. False for a mismatch or a
            malformed hash (never raises).
        """
        ...

    @property
    def dummy_hash(self) -> str:
        """Hash of a throwaway password at the configured cost.

        Verified against when no user matches, so unknown emails cost the
        same time as wrong passwords.
        """
        ...
