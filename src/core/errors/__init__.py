"""Core errors package.

Usage:
    from src.core.errors import ConfigurationError
"""

from src.core.errors.configuration_error import ConfigurationError

__all__ = ["ConfigurationError"]
