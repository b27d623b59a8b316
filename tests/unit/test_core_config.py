"""
Unit tests for configuration management (flat Settings).

Tests cover:
- Settings loading from environment variables
- Environment detection
- bcrypt rounds fallback
- Cookie override normalization
- Fail-fast on missing signing secrets (exit code 1, variable name logged)
"""

import os
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs

from src.core.config import Settings, get_settings
from src.core.enums import Environment
from src.core.errors import ConfigurationError


@pytest.fixture
def base_test_env():
    """Minimal environment with both mandatory secrets."""
    return {
        "ACCESS_TOKEN_SECRET": "a" * 32,
        "REFRESH_TOKEN_SECRET": "r" * 32,
    }


@pytest.fixture(autouse=True)
def reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.unit
class TestEnvironmentEnum:
    """Test Environment enum."""

    def test_environment_values(self):
        assert Environment.DEVELOPMENT == "development"
        assert Environment.TESTING == "testing"
        assert Environment.CI == "ci"
        assert Environment.PRODUCTION == "production"


@pytest.mark.unit
class TestSettingsDefaults:
    """Test default values."""

    def test_defaults(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.access_token_expire_minutes == 15
        assert settings.refresh_token_expire_days == 7
        assert settings.bcrypt_rounds == 10
        assert settings.login_max_attempts == 5
        assert settings.login_lockout_minutes == 15
        assert settings.trust_proxy_headers is False
        assert settings.cookie_secure is None
        assert settings.cookie_same_site is None
        assert settings.database_url.startswith("sqlite+aiosqlite://")

    def test_environment_flags(self, base_test_env):
        with patch.dict(os.environ, base_test_env | {"ENVIRONMENT": "ci"}, clear=True):
            settings = Settings()

        assert settings.is_testing is True
        assert settings.is_production is False
        assert settings.is_development is False

    def test_cors_origin_list_parsing(self, base_test_env):
        env = base_test_env | {"CORS_ORIGINS": "https://a.com, https://b.com,,"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.cors_origin_list == ["https://a.com", "https://b.com"]


@pytest.mark.unit
class TestBcryptRounds:
    """BCRYPT_ROUNDS falls back to 10 on bad input."""

    @pytest.mark.parametrize("raw, expected", [("12", 12), ("4", 4), ("31", 31)])
    def test_valid_values(self, base_test_env, raw, expected):
        with patch.dict(os.environ, base_test_env | {"BCRYPT_ROUNDS": raw}, clear=True):
            assert Settings().bcrypt_rounds == expected

    @pytest.mark.parametrize("raw", ["abc", "3", "32", "-1", ""])
    def test_invalid_values_fall_back(self, base_test_env, raw):
        with patch.dict(os.environ, base_test_env | {"BCRYPT_ROUNDS": raw}, clear=True):
            assert Settings().bcrypt_rounds == 10


@pytest.mark.unit
class TestCookieOverrides:
    """COOKIE_SAME_SITE normalization."""

    def test_same_site_is_lowercased(self, base_test_env):
        env = base_test_env | {"COOKIE_SAME_SITE": "Strict"}
        with patch.dict(os.environ, env, clear=True):
            assert Settings().cookie_same_site == "strict"

    def test_unknown_same_site_means_no_override(self, base_test_env):
        env = base_test_env | {"COOKIE_SAME_SITE": "sometimes"}
        with patch.dict(os.environ, env, clear=True):
            assert Settings().cookie_same_site is None

    def test_cookie_secure_parsed_as_bool(self, base_test_env):
        env = base_test_env | {"COOKIE_SECURE": "true"}
        with patch.dict(os.environ, env, clear=True):
            assert Settings().cookie_secure is True


@pytest.mark.unit
class TestRequiredSecrets:
    """Missing signing secrets stop the process."""

    def test_require_secrets_names_missing_access_secret(self):
        with patch.dict(os.environ, {"REFRESH_TOKEN_SECRET": "r" * 32}, clear=True):
            settings = Settings()

        with pytest.raises(ConfigurationError) as exc_info:
            settings.require_secrets()

        assert exc_info.value.variable == "ACCESS_TOKEN_SECRET"

    def test_require_secrets_names_missing_refresh_secret(self):
        with patch.dict(os.environ, {"ACCESS_TOKEN_SECRET": "a" * 32}, clear=True):
            settings = Settings()

        with pytest.raises(ConfigurationError) as exc_info:
            settings.require_secrets()

        assert exc_info.value.variable == "REFRESH_TOKEN_SECRET"

    def test_get_settings_exits_with_code_1_and_logs_variable_name(self):
        """Missing ACCESS_TOKEN_SECRET exits 1, logging only the name."""
        with patch.dict(os.environ, {"REFRESH_TOKEN_SECRET": "r" * 32}, clear=True):
            with capture_logs() as logs:
                with pytest.raises(SystemExit) as exc_info:
                    get_settings()

        assert exc_info.value.code == 1
        assert logs == [
            {
                "event": "missing_required_config",
                "variable": "ACCESS_TOKEN_SECRET",
                "log_level": "error",
            }
        ]

    def test_get_settings_returns_cached_instance(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            first = get_settings()
            second = get_settings()

        assert first is second

    def test_require_secrets_rejects_short_access_secret(self):
        env = {"ACCESS_TOKEN_SECRET": "short-secret", "REFRESH_TOKEN_SECRET": "r" * 32}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()

        with pytest.raises(ConfigurationError) as exc_info:
            settings.require_secrets()

        assert exc_info.value.variable == "ACCESS_TOKEN_SECRET"

    def test_get_settings_exits_on_short_access_secret(self):
        """A secret too short for HS256 stops startup instead of failing requests."""
        env = {"ACCESS_TOKEN_SECRET": "a" * 31, "REFRESH_TOKEN_SECRET": "r" * 32}
        with patch.dict(os.environ, env, clear=True):
            with capture_logs() as logs:
                with pytest.raises(SystemExit) as exc_info:
                    get_settings()

        assert exc_info.value.code == 1
        assert logs[0]["event"] == "missing_required_config"
        assert logs[0]["variable"] == "ACCESS_TOKEN_SECRET"
        assert "a" * 31 not in str(logs)
