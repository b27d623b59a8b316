"""Unit tests for LoginUserHandler.

Tests cover:
- Successful login (returns tokens + user, clears the IP counter)
- Invalid credentials (user not found, wrong password, inactive) look identical
- Unknown emails still run a password check against a dummy hash
- Failed attempts are recorded against the source IP
- Lockout short-circuits before touching credentials
- Email normalization

Architecture:
- Unit tests for application handler (mocked dependencies)
- Mock repository and service protocols
- Test handler logic, not persistence
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from src.application.commands.auth_commands import LoginUser
from src.application.commands.handlers.login_user_handler import (
    LoginError,
    LoginFailure,
    LoginResponse,
    LoginUserHandler,
)
from src.core.fingerprinting import generate_device_fingerprint
from src.core.result import Failure, Success
from src.domain.protocols import IssuedRefreshToken
from src.domain.value_objects import LoginAttemptDecision
from tests.conftest import make_user

IP = "203.0.113.10"
USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) Firefox/121.0"


def build_handler(
    *,
    user=None,
    password_ok: bool = True,
    decision: LoginAttemptDecision | None = None,
):
    """Create handler with mocked collaborators, returned alongside the mocks."""
    user_repo = AsyncMock()
    user_repo.find_by_email.return_value = user

    password_service = Mock()
    password_service.verify_password.return_value = password_ok
    password_service.dummy_hash = "$2b$04$dummy"

    token_service = Mock()
    token_service.generate_access_token.return_value = "access_token_123"

    refresh_token_store = AsyncMock()
    refresh_token_store.issue.return_value = IssuedRefreshToken(
        raw_token="refresh_token_456",
        record_id=uuid4(),
        expires_at=datetime.now(UTC) + timedelta(days=7),
    )

    login_limiter = Mock()
    login_limiter.check_allowed.return_value = decision or LoginAttemptDecision(
        allowed=True, remaining=5
    )

    logger = Mock()

    handler = LoginUserHandler(
        user_repo=user_repo,
        password_service=password_service,
        token_service=token_service,
        refresh_token_store=refresh_token_store,
        login_limiter=login_limiter,
        logger=logger,
    )
    mocks = Mock(
        user_repo=user_repo,
        password_service=password_service,
        token_service=token_service,
        refresh_token_store=refresh_token_store,
        login_limiter=login_limiter,
        logger=logger,
    )
    return handler, mocks


def login_command(email: str = "user@example.com", password: str = "correct") -> LoginUser:
    return LoginUser(
        email=email,
        password=password,
        ip_address=IP,
        user_agent=USER_AGENT,
    )


@pytest.mark.unit
class TestLoginUserHandlerSuccess:
    """Test successful login scenarios."""

    @pytest.mark.asyncio
    async def test_login_success_returns_login_response(self):
        # Arrange
        user = make_user()
        handler, mocks = build_handler(user=user)

        # Act
        result = await handler.handle(login_command())

        # Assert
        assert isinstance(result, Success)
        assert isinstance(result.value, LoginResponse)
        assert result.value.access_token == "access_token_123"
        assert result.value.refresh_token == "refresh_token_456"
        assert result.value.user is user

    @pytest.mark.asyncio
    async def test_access_token_carries_user_role(self):
        user = make_user(role=2)
        handler, mocks = build_handler(user=user)

        await handler.handle(login_command())

        mocks.token_service.generate_access_token.assert_called_once_with(
            user_id=user.id, role_id=2
        )

    @pytest.mark.asyncio
    async def test_refresh_token_bound_to_device_fingerprint(self):
        user = make_user()
        handler, mocks = build_handler(user=user)

        await handler.handle(login_command())

        mocks.refresh_token_store.issue.assert_awaited_once_with(
            user_id=user.id,
            device_fingerprint=generate_device_fingerprint(USER_AGENT, IP),
        )

    @pytest.mark.asyncio
    async def test_success_clears_ip_counter(self):
        handler, mocks = build_handler(user=make_user())

        await handler.handle(login_command())

        mocks.login_limiter.clear.assert_called_once_with(IP)
        mocks.login_limiter.record_failure.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_is_normalized_before_lookup(self):
        handler, mocks = build_handler(user=make_user())

        await handler.handle(login_command(email="  User@Example.COM "))

        mocks.user_repo.find_by_email.assert_awaited_once_with("user@example.com")

    @pytest.mark.asyncio
    async def test_success_is_logged_without_password(self):
        handler, mocks = build_handler(user=make_user())

        await handler.handle(login_command(password="s3cret-value"))

        mocks.logger.info.assert_called_once()
        event, = mocks.logger.info.call_args.args
        assert event == "login_succeeded"
        assert "s3cret-value" not in str(mocks.logger.info.call_args)


@pytest.mark.unit
class TestLoginUserHandlerInvalidCredentials:
    """Unknown email, wrong password and inactive account are indistinguishable."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "user_kwargs, password_ok",
        [
            (None, True),
            ({}, False),
            ({"is_active": False}, True),
        ],
        ids=["unknown_email", "wrong_password", "inactive_user"],
    )
    async def test_returns_invalid_credentials(self, user_kwargs, password_ok):
        user = make_user(**user_kwargs) if user_kwargs is not None else None
        handler, mocks = build_handler(user=user, password_ok=password_ok)

        result = await handler.handle(login_command())

        assert result == Failure(
            error=LoginFailure(reason=LoginError.INVALID_CREDENTIALS)
        )
        mocks.login_limiter.record_failure.assert_called_once_with(IP)
        mocks.login_limiter.clear.assert_not_called()
        mocks.refresh_token_store.issue.assert_not_awaited()
        mocks.token_service.generate_access_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_email_still_verifies_a_password(self):
        handler, mocks = build_handler(user=None, password_ok=False)

        await handler.handle(login_command(password="guess"))

        mocks.password_service.verify_password.assert_called_once_with(
            "guess", "$2b$04$dummy"
        )

    @pytest.mark.asyncio
    async def test_failure_is_logged(self):
        handler, mocks = build_handler(user=None)

        await handler.handle(login_command(password="wrong-pass"))

        mocks.logger.warning.assert_called_once()
        assert mocks.logger.warning.call_args.args == ("login_failed",)
        assert mocks.logger.warning.call_args.kwargs["ip_address"] == IP
        assert "wrong-pass" not in str(mocks.logger.warning.call_args)


@pytest.mark.unit
class TestLoginUserHandlerLockout:
    """Brute-force guard."""

    @pytest.mark.asyncio
    async def test_blocked_ip_gets_too_many_attempts_with_retry_after(self):
        handler, mocks = build_handler(
            user=make_user(),
            decision=LoginAttemptDecision(allowed=False, remaining=0, retry_after=540),
        )

        result = await handler.handle(login_command())

        assert result == Failure(
            error=LoginFailure(reason=LoginError.TOO_MANY_ATTEMPTS, retry_after=540)
        )

    @pytest.mark.asyncio
    async def test_blocked_ip_does_not_check_credentials(self):
        handler, mocks = build_handler(
            user=make_user(),
            decision=LoginAttemptDecision(allowed=False, remaining=0, retry_after=10),
        )

        await handler.handle(login_command())

        mocks.user_repo.find_by_email.assert_not_awaited()
        mocks.password_service.verify_password.assert_not_called()
        mocks.login_limiter.record_failure.assert_not_called()
