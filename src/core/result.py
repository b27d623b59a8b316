"""Result types for railway-oriented error handling.

Handlers and services return ``Result`` instead of raising for expected
business failures (bad credentials, expired tokens, replayed refresh tokens).
Exceptions are reserved for programming errors and infrastructure faults.

Usage:
    result = await handler.handle(cmd)
    match result:
        case Success(value=response):
            ...
        case Failure(error=reason):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome carrying ``error`` (usually a reason code string)."""

    error: E


Result: TypeAlias = Success[T] | Failure[E]
