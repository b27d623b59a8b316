"""Domain errors package.

Usage:
    from src.domain.errors import AuthenticationError
"""

from src.domain.errors.authentication_error import AuthenticationError

__all__ = ["AuthenticationError"]
