"""Security infrastructure adapters.

- Password hashing (bcrypt)
- Access token generation/validation (JWT, HS256)
- Refresh token generation/hashing (opaque tokens, HMAC-SHA256)
- Brute-force login guard (in-memory, per IP)
"""

from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService
from src.infrastructure.security.jwt_service import JWTService
from src.infrastructure.security.login_attempt_limiter import LoginAttemptLimiter
from src.infrastructure.security.refresh_token_service import RefreshTokenService

__all__ = [
    "BcryptPasswordService",
    "JWTService",
    "LoginAttemptLimiter",
    "RefreshTokenService",
]
