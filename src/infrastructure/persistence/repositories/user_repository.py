"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Maps between the User domain entity and the users table.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import User
from src.infrastructure.persistence.base import as_utc
from src.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("user@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID."""
        user_model = await self.session.get(UserModel, user_id, populate_existing=True)
        if user_model is None:
            return None
        return self._to_domain(user_model)

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive)."""
        stmt = (
            select(UserModel)
            .where(UserModel.email == email.strip().lower())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._to_domain(user_model)

    async def save(self, user: User) -> None:
        """Create new user in database."""
        user_model = UserModel(
            id=user.id,
            email=user.email.strip().lower(),
            password_hash=user.password_hash,
            name=user.name,
            role_id=user.role_id,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.session.add(user_model)
        await self.session.commit()

    async def update_password(self, user_id: UUID, password_hash: str) -> None:
        """Replace a user's password hash."""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash, updated_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            name=user_model.name,
            role_id=user_model.role_id,
            is_active=user_model.is_active,
            created_at=as_utc(user_model.created_at),  # type: ignore[arg-type]
            updated_at=as_utc(user_model.updated_at),  # type: ignore[arg-type]
        )
