"""Brute-force guard decision."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginAttemptDecision:
    """Outcome of checking a source IP against the failed-login counter.

    Attributes:
        allowed: False while the IP is locked out.
        remaining: Failures left before lockout (0 when blocked).
        retry_after: Seconds until the lockout window lapses (0 when allowed).
    """

    allowed: bool
    remaining: int
    retry_after: int = 0
