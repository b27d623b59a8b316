"""User database model.

Security:
    - password_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - email: stored lower-cased, unique
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class User(BaseMutableModel):
    """User account row.

    Fields:
        email: Unique email address (lowercase, indexed)
        password_hash: bcrypt hash
        name: Display name
        role_id: Role id (1 owner .. 5 auditor)
        is_active: Deactivated users cannot log in or refresh
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    role_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=3,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role_id={self.role_id})>"
