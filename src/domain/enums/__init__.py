"""Domain enums."""

from src.domain.enums.role import Role

__all__ = ["Role"]
