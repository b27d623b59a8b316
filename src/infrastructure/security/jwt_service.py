"""JWT access token service (adapter).

Implements TokenGenerationProtocol using PyJWT with HMAC-SHA256.

Architecture:
    - Implements TokenGenerationProtocol (no inheritance required)
    - Injected via dependency container

Security:
    - HMAC-SHA256 (HS256), 256-bit secret minimum
    - Signed with ACCESS_TOKEN_SECRET only; refresh tokens use a separate secret
    - Expired and otherwise-invalid tokens are reported distinctly so callers
      know whether a refresh is worth attempting

Claims:
    sub   user id (str UUID)
    role  role id (int)
    iat   issued at (epoch seconds)
    exp   expires at (epoch seconds)
    jti   unique token id (uuid7)
"""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError
from src.domain.value_objects import AccessTokenClaims

REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


class JWTService:
    """Access token generation and validation service.

    Usage:
        token_service = get_token_service()
        token = token_service.generate_access_token(user_id=user.id, role_id=user.role_id)
        result = token_service.validate_access_token(token)
    """

    def __init__(self, secret_key: str, expiration_minutes: int = 15) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret for HMAC-SHA256 signing (at least 32 characters).
            expiration_minutes: Token lifetime in minutes (default: 15).

        Raises:
            ValueError: If secret_key is shorter than 32 characters.
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._algorithm = "HS256"

    @property
    def expires_in_seconds(self) -> int:
        """Access token lifetime in seconds (cookie max-age)."""
        return self._expiration_minutes * 60

    def generate_access_token(self, user_id: UUID, role_id: int) -> str:
        """Generate a signed access token.

        Args:
            user_id: Token subject.
            role_id: Role id of the user at issuance.

        Returns:
            JWT access token string.

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> token = service.generate_access_token(user_id=uuid7(), role_id=3)
            >>> len(token.split("."))
            3
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload = {
            "sub": str(user_id),
            "role": int(role_id),
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(self, token: str) -> Result[AccessTokenClaims, str]:
        """Validate an access token and extract its identity.

        Args:
            token: JWT access token string.

        Returns:
            Success(AccessTokenClaims) if signature, expiry and claims are valid.
            Failure(AuthenticationError.EXPIRED_TOKEN) if ``exp`` has passed.
            Failure(AuthenticationError.INVALID_TOKEN) otherwise (bad
            signature, malformed token, missing or mistyped claims).
        """
        if not token:
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except ExpiredSignatureError:
            return Failure(error=AuthenticationError.EXPIRED_TOKEN)
        except InvalidTokenError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        role_id = payload.get("role")
        if isinstance(role_id, bool) or not isinstance(role_id, int):
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        try:
            user_id = UUID(str(payload["sub"]))
        except ValueError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        return Success(
            value=AccessTokenClaims(
                user_id=user_id,
                role_id=role_id,
                issued_at=int(payload["iat"]),
                expires_at=int(payload["exp"]),
                jti=payload.get("jti"),
            )
        )
