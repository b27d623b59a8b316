"""Domain value objects."""

from src.domain.value_objects.access_token_claims import AccessTokenClaims
from src.domain.value_objects.login_attempt_decision import LoginAttemptDecision

__all__ = ["AccessTokenClaims", "LoginAttemptDecision"]
