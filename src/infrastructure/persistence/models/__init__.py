"""Database models (SQLAlchemy)."""

from src.infrastructure.persistence.models.refresh_token import RefreshToken
from src.infrastructure.persistence.models.user import User

__all__ = ["RefreshToken", "User"]
