"""Core enums package.

Usage:
    from src.core.enums import Environment
"""

from src.core.enums.environment import Environment

__all__ = ["Environment"]
