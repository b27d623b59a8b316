"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import PasswordHashingProtocol, TokenGenerationProtocol
    from src.domain.protocols import UserRepository, RefreshTokenRepository
"""

# Service protocols
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.login_attempt_limiter_protocol import (
    LoginAttemptLimiterProtocol,
)
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.refresh_token_service_protocol import (
    RefreshTokenServiceProtocol,
)
from src.domain.protocols.refresh_token_store_protocol import (
    IssuedRefreshToken,
    RefreshTokenStoreProtocol,
)
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol

# Repository protocols
from src.domain.protocols.refresh_token_repository import (
    RefreshTokenData,
    RefreshTokenRepository,
)
from src.domain.protocols.user_repository import UserRepository

__all__ = [
    "IssuedRefreshToken",
    "LoggerProtocol",
    "LoginAttemptLimiterProtocol",
    "PasswordHashingProtocol",
    "RefreshTokenData",
    "RefreshTokenRepository",
    "RefreshTokenServiceProtocol",
    "RefreshTokenStoreProtocol",
    "TokenGenerationProtocol",
    "UserRepository",
]
