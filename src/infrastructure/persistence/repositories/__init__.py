"""Repository implementations (SQLAlchemy adapters)."""

from src.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from src.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = ["RefreshTokenRepository", "UserRepository"]
