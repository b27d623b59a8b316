"""Unit tests for RefreshSessionHandler.

Tests cover:
- Successful rotation (new access + refresh token, current role)
- Unknown and expired tokens -> SESSION_EXPIRED, no escalation
- Replayed (revoked) token -> revoke every session of the owner
- Missing/inactive user -> SESSION_EXPIRED and the record is revoked
- Lost rotation race -> SESSION_EXPIRED without revoking other sessions
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from src.application.commands.auth_commands import RefreshSession
from src.application.commands.handlers.refresh_session_handler import (
    RefreshError,
    RefreshResponse,
    RefreshSessionHandler,
)
from src.core.result import Failure, Success
from src.domain.errors import AuthenticationError
from src.domain.protocols import IssuedRefreshToken, RefreshTokenData
from tests.conftest import make_user


def make_record(user_id, *, revoked: bool = False) -> RefreshTokenData:
    now = datetime.now(UTC)
    return RefreshTokenData(
        id=uuid4(),
        user_id=user_id,
        token_hash="f" * 64,
        device_fingerprint="fp",
        issued_at=now,
        expires_at=now + timedelta(days=7),
        revoked_at=now if revoked else None,
        revoked_reason="rotated" if revoked else None,
        replaced_by_id=None,
    )


def build_handler(*, user, verify_result, rotate_result=None, found_record=None):
    user_repo = AsyncMock()
    user_repo.find_by_id.return_value = user

    token_service = Mock()
    token_service.generate_access_token.return_value = "new_access"

    store = AsyncMock()
    store.verify_and_consume.return_value = verify_result
    store.rotate.return_value = rotate_result or Success(
        value=IssuedRefreshToken(
            raw_token="new_refresh",
            record_id=uuid4(),
            expires_at=datetime.now(UTC) + timedelta(days=7),
        )
    )
    store.find.return_value = found_record

    logger = Mock()

    handler = RefreshSessionHandler(
        user_repo=user_repo,
        token_service=token_service,
        refresh_token_store=store,
        logger=logger,
    )
    return handler, Mock(user_repo=user_repo, token_service=token_service, store=store, logger=logger)


COMMAND = RefreshSession(refresh_token="raw_refresh", ip_address="10.0.0.1", user_agent="UA")


@pytest.mark.unit
class TestRefreshSessionSuccess:
    @pytest.mark.asyncio
    async def test_rotates_and_returns_new_pair(self):
        # Arrange
        user = make_user(role=4)
        record = make_record(user.id)
        handler, mocks = build_handler(user=user, verify_result=Success(value=record))

        # Act
        result = await handler.handle(COMMAND)

        # Assert
        assert result == Success(
            value=RefreshResponse(access_token="new_access", refresh_token="new_refresh")
        )
        mocks.store.rotate.assert_awaited_once()
        assert mocks.store.rotate.call_args.kwargs["old_record_id"] == record.id
        assert mocks.store.rotate.call_args.kwargs["user_id"] == user.id
        mocks.token_service.generate_access_token.assert_called_once_with(
            user_id=user.id, role_id=4
        )


@pytest.mark.unit
class TestRefreshSessionFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reason", [AuthenticationError.INVALID_TOKEN, AuthenticationError.EXPIRED_TOKEN]
    )
    async def test_invalid_or_expired_token(self, reason):
        handler, mocks = build_handler(user=make_user(), verify_result=Failure(error=reason))

        result = await handler.handle(COMMAND)

        assert result == Failure(error=RefreshError.SESSION_EXPIRED)
        mocks.store.revoke_all.assert_not_awaited()
        mocks.store.rotate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_replayed_token_revokes_all_sessions(self):
        user = make_user()
        revoked_record = make_record(user.id, revoked=True)
        handler, mocks = build_handler(
            user=user,
            verify_result=Failure(error=AuthenticationError.REVOKED_TOKEN),
            found_record=revoked_record,
        )

        result = await handler.handle(COMMAND)

        assert result == Failure(error=RefreshError.SESSION_EXPIRED)
        mocks.store.revoke_all.assert_awaited_once_with(user.id, reason="token_reuse")
        mocks.logger.warning.assert_called_once()
        assert mocks.logger.warning.call_args.args == ("refresh_token_reuse_detected",)
        mocks.store.rotate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_inactive_user_revokes_record(self):
        user = make_user(is_active=False)
        record = make_record(user.id)
        handler, mocks = build_handler(user=user, verify_result=Success(value=record))

        result = await handler.handle(COMMAND)

        assert result == Failure(error=RefreshError.SESSION_EXPIRED)
        mocks.store.revoke.assert_awaited_once_with(record.id, reason="user_inactive")
        mocks.store.rotate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_deleted_user(self):
        record = make_record(uuid4())
        handler, mocks = build_handler(user=None, verify_result=Success(value=record))

        result = await handler.handle(COMMAND)

        assert result == Failure(error=RefreshError.SESSION_EXPIRED)
        mocks.token_service.generate_access_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_lost_rotation_race_does_not_escalate(self):
        user = make_user()
        record = make_record(user.id)
        handler, mocks = build_handler(
            user=user,
            verify_result=Success(value=record),
            rotate_result=Failure(error=AuthenticationError.REVOKED_TOKEN),
        )

        result = await handler.handle(COMMAND)

        assert result == Failure(error=RefreshError.SESSION_EXPIRED)
        mocks.store.revoke_all.assert_not_awaited()
        mocks.token_service.generate_access_token.assert_not_called()
