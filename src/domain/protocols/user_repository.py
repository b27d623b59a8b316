"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture. The user store is the
credential collaborator of login, refresh and password change.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.user import User


class UserRepository(Protocol):
    """User repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive)."""
        ...

    async def save(self, user: User) -> None:
        """Create new user."""
        ...

    async def update_password(self, user_id: UUID, password_hash: str) -> None:
        """Replace a user's password hash."""
        ...
