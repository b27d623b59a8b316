"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Settings and environment detection
- Client identification (IP, device fingerprint)

The core module has NO dependencies on other application layers.
"""

from src.core.result import Failure, Result, Success

__all__ = [
    "Failure",
    "Result",
    "Success",
]
