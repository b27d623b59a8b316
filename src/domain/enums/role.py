"""Closed set of organization roles.

Role ids travel inside access tokens as integers. Every authorization check
goes through ``Role`` rather than comparing raw numbers, and an id that does
not map to a member is treated as "no role" (always denied).

Usage:
    from src.domain.enums import Role

    role = Role.from_id(claims.role_id)
    if role is None:
        ...  # unknown role id, deny
"""

from enum import IntEnum


class Role(IntEnum):
    """Organization roles, keyed by their persisted id."""

    OWNER = 1
    ADMIN = 2
    MEMBER = 3
    VIEWER = 4
    AUDITOR = 5

    @classmethod
    def from_id(cls, role_id: object) -> "Role | None":
        """Map a raw role id to a member.

        Args:
            role_id: Value taken from a token claim or database row.

        Returns:
            Role | None: Matching role, or None for unknown/non-integer ids.
        """
        if isinstance(role_id, bool) or not isinstance(role_id, int):
            return None
        try:
            return cls(role_id)
        except ValueError:
            return None

    @classmethod
    def ids(cls) -> list[int]:
        """All valid role ids."""
        return [role.value for role in cls]
