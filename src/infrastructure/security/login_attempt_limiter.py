"""In-memory brute-force guard for the login endpoint.

Counts failed logins per source IP. Once an IP reaches ``max_attempts``
failures, further attempts are refused until ``window_seconds`` have passed
since the last failure. Expiry is lazy: stale entries are dropped when they
are next read, there is no background sweep.

The counter lives in this instance only (one per process). See DESIGN.md on
multi-instance deployments.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import structlog

from src.domain.value_objects import LoginAttemptDecision


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class _FailedAttempts:
    count: int
    last_attempt: datetime


class LoginAttemptLimiter:
    """Failed-login counter keyed by IP address.

    Usage:
        limiter = LoginAttemptLimiter(max_attempts=5, window_seconds=900)
        decision = limiter.check_allowed(ip)
        if not decision.allowed:
            ...  # 429, Retry-After: decision.retry_after
        limiter.record_failure(ip)   # on bad credentials
        limiter.clear(ip)            # on successful login
    """

    def __init__(
        self,
        max_attempts: int = 5,
        window_seconds: int = 15 * 60,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize limiter.

        Args:
            max_attempts: Failures that trigger a lockout.
            window_seconds: Lockout window, measured from the last failure.
            clock: Source of the current UTC time.
        """
        if max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)

        self._max_attempts = max_attempts
        self._window = timedelta(seconds=window_seconds)
        self._clock = clock
        self._attempts: dict[str, _FailedAttempts] = {}
        self._logger = structlog.get_logger("login_attempt_limiter")

    def _current(self, ip_address: str, now: datetime) -> _FailedAttempts | None:
        entry = self._attempts.get(ip_address)
        if entry is None:
            return None
        if now - entry.last_attempt >= self._window:
            # Stale: treat as reset.
            del self._attempts[ip_address]
            return None
        return entry

    def check_allowed(self, ip_address: str) -> LoginAttemptDecision:
        """Decide whether ``ip_address`` may attempt a login now.

        Returns:
            LoginAttemptDecision with ``retry_after`` in whole seconds
            (rounded up, at least 1) while blocked.
        """
        now = self._clock()
        entry = self._current(ip_address, now)
        if entry is None:
            return LoginAttemptDecision(allowed=True, remaining=self._max_attempts)

        if entry.count >= self._max_attempts:
            remaining_window = (entry.last_attempt + self._window) - now
            retry_after = max(1, math.ceil(remaining_window.total_seconds()))
            return LoginAttemptDecision(
                allowed=False, remaining=0, retry_after=retry_after
            )

        return LoginAttemptDecision(
            allowed=True, remaining=self._max_attempts - entry.count
        )

    def record_failure(self, ip_address: str) -> None:
        """Count a failed login for ``ip_address``."""
        now = self._clock()
        entry = self._current(ip_address, now)
        if entry is None:
            entry = _FailedAttempts(count=0, last_attempt=now)
            self._attempts[ip_address] = entry

        entry.count += 1
        entry.last_attempt = now

        if entry.count == self._max_attempts:
            self._logger.warning(
                "brute_force_lockout",
                ip_address=ip_address,
                attempts=entry.count,
                lockout_seconds=int(self._window.total_seconds()),
            )

    def clear(self, ip_address: str) -> None:
        """Forget failures for ``ip_address``."""
        self._attempts.pop(ip_address, None)

    def failed_attempts(self, ip_address: str) -> int:
        """Current (non-stale) failure count for ``ip_address``."""
        entry = self._current(ip_address, self._clock())
        return entry.count if entry is not None else 0
