"""Login attempt limiter protocol (brute-force guard port).

The limiter is an injected instance, so the in-memory implementation can be
swapped for a shared one without touching the login handler.
"""

from typing import Protocol

from src.domain.value_objects import LoginAttemptDecision


class LoginAttemptLimiterProtocol(Protocol):
    """Track failed logins per source IP."""

    def check_allowed(self, ip_address: str) -> LoginAttemptDecision:
        """Decide whether ``ip_address`` may attempt a login now."""
        ...

    def record_failure(self, ip_address: str) -> None:
        """Count a failed login for ``ip_address``."""
        ...

    def clear(self, ip_address: str) -> None:
        """Forget failures for ``ip_address`` (after a successful login)."""
        ...
