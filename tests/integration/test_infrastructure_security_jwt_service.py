"""Integration tests for JWT token service.

Tests the JWTService implementation with real cryptographic operations.

Architecture:
- Tests against real PyJWT library (no mocking)
- Verifies Result type error handling
- Tests security properties (uniqueness, expiration, tampering)
"""

import jwt
import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from src.core.result import Failure, Success
from src.domain.errors import AuthenticationError
from src.infrastructure.security.jwt_service import JWTService

SECRET = "x" * 32


@pytest.mark.integration
class TestJWTServiceGeneration:
    def test_token_has_three_segments(self):
        token = JWTService(secret_key=SECRET).generate_access_token(user_id=uuid7(), role_id=3)

        assert len(token.split(".")) == 3

    def test_claims_round_trip(self):
        service = JWTService(secret_key=SECRET, expiration_minutes=15)
        user_id = uuid7()

        with freeze_time("2026-05-01 08:00:00"):
            token = service.generate_access_token(user_id=user_id, role_id=2)
            result = service.validate_access_token(token)

        assert isinstance(result, Success)
        claims = result.value
        assert claims.user_id == user_id
        assert claims.role_id == 2
        assert claims.expires_at - claims.issued_at == 15 * 60
        assert claims.jti

    def test_payload_is_hs256_with_expected_claims(self):
        token = JWTService(secret_key=SECRET).generate_access_token(user_id=uuid7(), role_id=1)

        header = jwt.get_unverified_header(token)
        payload = jwt.decode(token, options={"verify_signature": False})

        assert header["alg"] == "HS256"
        assert set(payload) == {"sub", "role", "iat", "exp", "jti"}

    def test_jti_is_unique(self):
        service = JWTService(secret_key=SECRET)
        user_id = uuid7()

        first = service.generate_access_token(user_id=user_id, role_id=3)
        second = service.generate_access_token(user_id=user_id, role_id=3)

        assert jwt.decode(first, options={"verify_signature": False})["jti"] != jwt.decode(
            second, options={"verify_signature": False}
        )["jti"]

    def test_short_secret_rejected(self):
        with pytest.raises(ValueError):
            JWTService(secret_key="short")


@pytest.mark.integration
class TestJWTServiceValidation:
    def test_expired(self):
        service = JWTService(secret_key=SECRET, expiration_minutes=15)
        with freeze_time("2026-05-01 08:00:00"):
            token = service.generate_access_token(user_id=uuid7(), role_id=3)

        with freeze_time("2026-05-01 08:15:01"):
            result = service.validate_access_token(token)

        assert result == Failure(error=AuthenticationError.EXPIRED_TOKEN)

    def test_wrong_secret(self):
        token = JWTService(secret_key=SECRET).generate_access_token(user_id=uuid7(), role_id=3)

        result = JWTService(secret_key="y" * 32).validate_access_token(token)

        assert result == Failure(error=AuthenticationError.INVALID_TOKEN)

    def test_tampered_payload(self):
        service = JWTService(secret_key=SECRET)
        header, _, signature = service.generate_access_token(
            user_id=uuid7(), role_id=5
        ).split(".")
        forged_payload = jwt.encode(
            {"sub": str(uuid7()), "role": 1, "iat": 0, "exp": 9999999999},
            "other" * 8,
            algorithm="HS256",
        ).split(".")[1]

        result = service.validate_access_token(f"{header}.{forged_payload}.{signature}")

        assert result == Failure(error=AuthenticationError.INVALID_TOKEN)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed(self, token):
        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert result == Failure(error=AuthenticationError.INVALID_TOKEN)

    @pytest.mark.parametrize(
        "payload",
        [
            {"role": 1, "iat": 0, "exp": 9999999999},
            {"sub": "not-a-uuid", "role": 1, "iat": 0, "exp": 9999999999},
            {"sub": "0191c2a0-0000-7000-8000-000000000000", "role": "1", "iat": 0, "exp": 9999999999},
            {"sub": "0191c2a0-0000-7000-8000-000000000000", "role": True, "iat": 0, "exp": 9999999999},
        ],
        ids=["missing_sub", "bad_sub", "string_role", "bool_role"],
    )
    def test_bad_claims(self, payload):
        token = jwt.encode(payload, SECRET, algorithm="HS256")

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert result == Failure(error=AuthenticationError.INVALID_TOKEN)

    def test_none_algorithm_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid7()), "role": 1, "iat": 0, "exp": 9999999999},
            None,
            algorithm="none",
        )

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert result == Failure(error=AuthenticationError.INVALID_TOKEN)
