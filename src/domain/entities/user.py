"""User domain entity.

The credential collaborator of the session lifecycle: login looks users up
by email, refresh re-reads them to pick up role and activation changes.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.enums import Role


@dataclass
class User:
    """User account as seen by the authentication core.

    Attributes:
        id: Unique user identifier.
        email: Normalized (lower-cased) email address.
        password_hash: bcrypt hash, never plaintext.
        name: Display name.
        role_id: Persisted role id (see ``Role``).
        is_active: Deactivated users cannot log in or refresh.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    id: UUID
    email: str
    password_hash: str
    name: str
    role_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @property
    def role(self) -> Role | None:
        """Role member for ``role_id`` (None if the id is unknown)."""
        return Role.from_id(self.role_id)

    def to_public_dict(self) -> dict[str, object]:
        """Serializable view without the password hash."""
        role = self.role
        return {
            "id": str(self.id),
            "email": self.email,
            "name": self.name,
            "roleId": self.role_id,
            "role": role.name if role is not None else None,
            "isActive": self.is_active,
        }
