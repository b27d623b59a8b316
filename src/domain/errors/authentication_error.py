"""Authentication error constants.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used as ``Failure.error`` values, never raised

Usage:
    from src.domain.errors import AuthenticationError

    match token_service.validate_access_token(token):
        case Success(value=claims):
            ...
        case Failure(error=AuthenticationError.EXPIRED_TOKEN):
            ...  # client may try a refresh
        case Failure(error=_):
            ...
"""


class AuthenticationError:
    """Authentication error constants.

    Token verification keeps INVALID, EXPIRED and REVOKED distinct so callers
    can choose between "refresh and retry", "log in again" and "treat as a
    replay". User-facing messages collapse them into generic text.
    """

    # Token verification
    INVALID_TOKEN = "Invalid token"
    EXPIRED_TOKEN = "Token expired"
    REVOKED_TOKEN = "Token revoked"

    # Credentials
    INVALID_CREDENTIALS = "Invalid email or password"
    TOO_MANY_ATTEMPTS = "Too many login attempts"
    INCORRECT_CURRENT_PASSWORD = "Current password is incorrect"
    SAME_PASSWORD = "New password must differ from the current password"

    # Sessions
    SESSION_EXPIRED = "Session expired"
    NOT_AUTHENTICATED = "Not authenticated"

    # Authorization
    INSUFFICIENT_PERMISSIONS = "Insufficient permissions"
