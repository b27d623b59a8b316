"""Login handler for User Authentication.

Flow:
1. Check the brute-force guard for the source IP
2. Find user by (normalized) email
3. Verify password and account state
4. Clear the failed-login counter for the IP
5. Generate JWT access token
6. Issue refresh token bound to the device fingerprint
7. Return Success(tokens + user)

On failure:
- Record a failed attempt for the IP
- Return the same INVALID_CREDENTIALS reason whether the email exists,
  the password is wrong or the account is inactive (no user enumeration)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- Collaborators are injected via protocols
"""

from dataclasses import dataclass

from src.application.commands.auth_commands import LoginUser
from src.core.fingerprinting import generate_device_fingerprint, parse_user_agent
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.protocols import (
    LoggerProtocol,
    LoginAttemptLimiterProtocol,
    PasswordHashingProtocol,
    RefreshTokenStoreProtocol,
    TokenGenerationProtocol,
    UserRepository,
)


class LoginError:
    """Login-specific error reasons."""

    INVALID_CREDENTIALS = "invalid_credentials"
    TOO_MANY_ATTEMPTS = "too_many_attempts"


@dataclass(frozen=True, kw_only=True)
class LoginFailure:
    """Failed login.

    Attributes:
        reason: One of LoginError.
        retry_after: Seconds until the lockout lapses (TOO_MANY_ATTEMPTS only).
    """

    reason: str
    retry_after: int | None = None


@dataclass
class LoginResponse:
    """Response data for successful login."""

    access_token: str
    refresh_token: str
    user: User


class LoginUserHandler:
    """Handler for user login command.

    Follows hexagonal architecture:
    - Application layer (this handler)
    - Domain layer (User entity, protocols)
    - Infrastructure layer (repositories, services via dependency injection)
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenGenerationProtocol,
        refresh_token_store: RefreshTokenStoreProtocol,
        login_limiter: LoginAttemptLimiterProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize login handler with dependencies.

        Args:
            user_repo: User lookup (credential collaborator).
            password_service: bcrypt verification.
            token_service: Access token issuing.
            refresh_token_store: Refresh token issuing.
            login_limiter: Per-IP brute-force guard (process-wide instance).
            logger: Structured logger for security events.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._refresh_token_store = refresh_token_store
        self._login_limiter = login_limiter
        self._logger = logger

    async def handle(self, cmd: LoginUser) -> Result[LoginResponse, LoginFailure]:
        """Handle login command.

        Args:
            cmd: LoginUser command.

        Returns:
            Success(LoginResponse) on successful login.
            Failure(LoginFailure) with INVALID_CREDENTIALS or TOO_MANY_ATTEMPTS.
        """
        # Step 1: Brute-force guard (checked before touching credentials)
        decision = self._login_limiter.check_allowed(cmd.ip_address)
        if not decision.allowed:
            self._logger.warning(
                "login_blocked",
                ip_address=cmd.ip_address,
                retry_after=decision.retry_after,
            )
            return Failure(
                error=LoginFailure(
                    reason=LoginError.TOO_MANY_ATTEMPTS,
                    retry_after=decision.retry_after,
                )
            )

        # Step 2: Find user
        email = cmd.email.strip().lower()
        user = await self._user_repo.find_by_email(email)

        # Step 3: Verify password and account state
        # Unknown emails still pay for a bcrypt check.
        password_hash = (
            user.password_hash if user is not None else self._password_service.dummy_hash
        )
        password_ok = self._password_service.verify_password(cmd.password, password_hash)
        if user is None or not password_ok or not user.is_active:
            self._login_limiter.record_failure(cmd.ip_address)
            self._logger.warning(
                "login_failed",
                email=email,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
            )
            return Failure(error=LoginFailure(reason=LoginError.INVALID_CREDENTIALS))

        # Step 4: Reset the counter for this IP
        self._login_limiter.clear(cmd.ip_address)

        # Step 5: Access token
        access_token = self._token_service.generate_access_token(
            user_id=user.id,
            role_id=user.role_id,
        )

        # Step 6: Refresh token
        issued = await self._refresh_token_store.issue(
            user_id=user.id,
            device_fingerprint=generate_device_fingerprint(cmd.user_agent, cmd.ip_address),
        )

        self._logger.info(
            "login_succeeded",
            user_id=str(user.id),
            ip_address=cmd.ip_address,
            device=parse_user_agent(cmd.user_agent),
        )

        # Step 7: Return Success
        return Success(
            value=LoginResponse(
                access_token=access_token,
                refresh_token=issued.raw_token,
                user=user,
            )
        )
