"""Tests for application configuration management."""

import os
import tempfile
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from loan_calculator.config import (
    Settings,
    get_global_settings,
    get_settings,
    reset_global_settings,
)


class TestSettings:
    """Test cases for Settings class."""

    def test_settings_loads_from_env_file(self):
        """Test that settings can load from a .env file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".env", delete=False) as f:
            f.write("APP_ENV=testing\n")
            f.write("SECRET_KEY=test-secret-key-123\n")
            f.write("DEFAULT_CURRENCY=ALL\n")
            f.write("MAX_TERM_MONTHS=360\n")
            f.write("LOG_LEVEL=DEBUG\n")
            temp_env_file = f.name

        try:
            with patch.dict(os.environ, {}, clear=True):
                settings = get_settings(env_file=temp_env_file)

                assert settings.app_env == "testing"
                assert settings.secret_key == "test-secret-key-123"
                assert settings.default_currency == "ALL"
                assert settings.max_term_months == 360
                assert settings.log_level == "DEBUG"
        finally:
            os.unlink(temp_env_file)

    def test_missing_secret_key_raises_exception(self):
        """Test that missing SECRET_KEY raises ValidationError."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "SECRET_KEY" in str(exc_info.value)

    def test_placeholder_secret_key_raises_exception(self):
        """Test that placeholder SECRET_KEY raises ValidationError."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "your-secret-key-here-change-in-production"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)

    def test_app_env_validation(self):
        """Test APP_ENV validation."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "invalid-env"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "APP_ENV must be one of" in str(exc_info.value)

    def test_log_level_case_insensitive(self):
        """Test that LOG_LEVEL is case insensitive."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "LOG_LEVEL": "debug"},
            clear=True,
        ):
            settings = Settings(_env_file=None)
            assert settings.log_level == "DEBUG"

    def test_log_level_validation(self):
        """Test LOG_LEVEL validation."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "LOG_LEVEL": "CHATTY"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "LOG_LEVEL must be one of" in str(exc_info.value)

    def test_default_currency_validation(self):
        """Test DEFAULT_CURRENCY validation and normalization."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "DEFAULT_CURRENCY": "all"},
            clear=True,
        ):
            assert Settings(_env_file=None).default_currency == "ALL"

        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "DEFAULT_CURRENCY": "USD"},
            clear=True,
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

            assert "DEFAULT_CURRENCY must be one of" in str(exc_info.value)

    def test_max_term_months_must_be_positive(self):
        """Test MAX_TERM_MONTHS lower bound."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "MAX_TERM_MONTHS": "0"},
            clear=True,
        ):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_default_values(self):
        """Test default values when environment variables are not set."""
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_env == "development"
            assert settings.default_currency == "EUR"
            assert settings.max_term_months == 600
            assert settings.log_level == "INFO"


class TestGlobalSettings:
    """Test cases for the cached global settings."""

    def test_global_settings_cached(self):
        """The same instance is returned until reset."""
        reset_global_settings()

        first = get_global_settings()
        second = get_global_settings()

        assert first is second

    def test_reset_global_settings(self):
        """Resetting picks up environment changes."""
        reset_global_settings()
        with patch.dict(os.environ, {"MAX_TERM_MONTHS": "120"}):
            first = get_global_settings()
            assert first.max_term_months == 120

        reset_global_settings()
        with patch.dict(os.environ, {"MAX_TERM_MONTHS": "240"}):
            assert get_global_settings().max_term_months == 240
