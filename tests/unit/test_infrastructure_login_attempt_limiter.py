"""Unit tests for LoginAttemptLimiter (brute-force guard).

Tests cover:
- Lockout after max_attempts failures
- Retry-After rounding (ceil, minimum 1)
- Window expiry (lazy)
- clear() after successful login
- Independent counters per IP and per instance
- brute_force_lockout security log
"""

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from structlog.testing import capture_logs

from src.infrastructure.security import LoginAttemptLimiter

IP = "203.0.113.10"


@pytest.mark.unit
class TestLoginAttemptLimiter:
    def test_fresh_ip_is_allowed(self):
        limiter = LoginAttemptLimiter(max_attempts=5, window_seconds=900)

        decision = limiter.check_allowed(IP)

        assert decision.allowed is True
        assert decision.remaining == 5
        assert decision.retry_after == 0

    def test_remaining_counts_down(self):
        limiter = LoginAttemptLimiter(max_attempts=5, window_seconds=900)

        limiter.record_failure(IP)
        limiter.record_failure(IP)

        assert limiter.check_allowed(IP).remaining == 3
        assert limiter.failed_attempts(IP) == 2

    def test_blocks_after_max_attempts(self):
        with freeze_time("2026-01-01 12:00:00"):
            limiter = LoginAttemptLimiter(max_attempts=5, window_seconds=900)
            for _ in range(5):
                limiter.record_failure(IP)

            decision = limiter.check_allowed(IP)

        assert decision.allowed is False
        assert decision.remaining == 0
        assert decision.retry_after == 900

    def test_retry_after_rounds_up(self):
        with freeze_time("2026-01-01 12:00:00") as frozen:
            limiter = LoginAttemptLimiter(max_attempts=2, window_seconds=60)
            limiter.record_failure(IP)
            limiter.record_failure(IP)

            frozen.tick(timedelta(seconds=30.5))
            decision = limiter.check_allowed(IP)

        assert decision.allowed is False
        assert decision.retry_after == 30

    def test_retry_after_minimum_is_one_second(self):
        now = datetime(2026, 1, 1, tzinfo=UTC)
        clock_values = [now, now, now + timedelta(seconds=59, milliseconds=999)]
        limiter = LoginAttemptLimiter(
            max_attempts=2, window_seconds=60, clock=lambda: clock_values.pop(0)
        )
        limiter.record_failure(IP)
        limiter.record_failure(IP)

        decision = limiter.check_allowed(IP)

        assert decision.allowed is False
        assert decision.retry_after == 1

    def test_window_elapsed_allows_again(self):
        with freeze_time("2026-01-01 12:00:00") as frozen:
            limiter = LoginAttemptLimiter(max_attempts=5, window_seconds=900)
            for _ in range(5):
                limiter.record_failure(IP)

            frozen.tick(timedelta(seconds=900))
            decision = limiter.check_allowed(IP)

        assert decision.allowed is True
        assert decision.remaining == 5

    def test_clear_resets_counter(self):
        limiter = LoginAttemptLimiter(max_attempts=3, window_seconds=900)
        for _ in range(3):
            limiter.record_failure(IP)

        limiter.clear(IP)

        assert limiter.check_allowed(IP).allowed is True
        assert limiter.failed_attempts(IP) == 0

    def test_counters_are_per_ip(self):
        limiter = LoginAttemptLimiter(max_attempts=1, window_seconds=900)

        limiter.record_failure(IP)

        assert limiter.check_allowed(IP).allowed is False
        assert limiter.check_allowed("198.51.100.1").allowed is True

    def test_instances_do_not_share_state(self):
        first = LoginAttemptLimiter(max_attempts=1, window_seconds=900)
        second = LoginAttemptLimiter(max_attempts=1, window_seconds=900)

        first.record_failure(IP)

        assert second.check_allowed(IP).allowed is True

    def test_rejects_non_positive_max_attempts(self):
        with pytest.raises(ValueError):
            LoginAttemptLimiter(max_attempts=0)

    def test_lockout_is_logged_once(self):
        limiter = LoginAttemptLimiter(max_attempts=2, window_seconds=900)

        with capture_logs() as logs:
            for _ in range(4):
                limiter.record_failure(IP)

        lockouts = [log for log in logs if log["event"] == "brute_force_lockout"]
        assert len(lockouts) == 1
        assert lockouts[0]["ip_address"] == IP
        assert lockouts[0]["log_level"] == "warning"
