"""Domain entities."""

from src.domain.entities.user import User

__all__ = ["User"]
