"""Unit tests for src/core/config.py."""

import pytest
import pytest_check
from pydantic import ValidationError

from src.core.config import LogConfig, RegistryConfig, Settings, get_settings


@pytest.mark.unit
class TestSettings:
    """Test the Settings defaults and environment overrides."""

    def test_default_application_settings(self) -> None:
        """Defaults describe a local development service."""
        settings = Settings()

        with pytest_check.check:
            assert settings.app_name == "User Registry"
        with pytest_check.check:
            assert settings.app_version
        with pytest_check.check:
            assert settings.environment == "development"
        with pytest_check.check:
            assert settings.debug is True
        with pytest_check.check:
            assert settings.api_host == "127.0.0.1"
        with pytest_check.check:
            assert settings.api_port == 8000
        with pytest_check.check:
            assert settings.docs_url == "/docs"

    def test_default_log_config(self) -> None:
        """Passwords and tax IDs are redacted by default."""
        settings = Settings()

        assert isinstance(settings.log_config, LogConfig)
        assert settings.log_config.log_level == "INFO"
        assert settings.log_config.log_formatter_type == "console"
        assert "password" in settings.log_config.sensitive_fields
        assert "tax_id" in settings.log_config.sensitive_fields

    def test_default_registry_config(self) -> None:
        """Self-exclusion on update is off by default."""
        settings = Settings()

        assert isinstance(settings.registry_config, RegistryConfig)
        assert settings.registry_config.exclude_self_on_update is False

    def test_nested_environment_overrides(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Nested settings are read with the __ delimiter."""
        monkeypatch.setenv("REGISTRY_CONFIG__EXCLUDE_SELF_ON_UPDATE", "true")
        monkeypatch.setenv("LOG_CONFIG__LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("APP_NAME", "Registry Test")

        settings = Settings()

        assert settings.registry_config.exclude_self_on_update is True
        assert settings.log_config.log_level == "DEBUG"
        assert settings.app_name == "Registry Test"

    @pytest.mark.parametrize(
        ("environment", "expected"),
        [("development", "console"), ("staging", "json"), ("production", "json")],
    )
    def test_formatter_follows_environment(
        self, monkeypatch: pytest.MonkeyPatch, environment: str, expected: str
    ) -> None:
        """Console in development, JSON elsewhere, unless set explicitly."""
        monkeypatch.setenv("ENVIRONMENT", environment)

        assert Settings().log_config.log_formatter_type == expected

    def test_explicit_formatter_is_kept(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An explicit formatter wins over the environment default."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_CONFIG__LOG_FORMATTER_TYPE", "console")

        assert Settings().log_config.log_formatter_type == "console"

    def test_empty_docs_urls_disable_endpoints(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Empty strings become None."""
        monkeypatch.setenv("DOCS_URL", "")
        monkeypatch.setenv("REDOC_URL", "")
        monkeypatch.setenv("OPENAPI_URL", "")

        settings = Settings()

        assert settings.docs_url is None
        assert settings.redoc_url is None
        assert settings.openapi_url is None

    @pytest.mark.parametrize(
        ("variable", "value"),
        [
            ("ENVIRONMENT", "qa"),
            ("LOG_CONFIG__LOG_LEVEL", "VERBOSE"),
            ("LOG_CONFIG__SLOW_REQUEST_THRESHOLD_MS", "0"),
        ],
    )
    def test_invalid_values_are_rejected(
        self, monkeypatch: pytest.MonkeyPatch, variable: str, value: str
    ) -> None:
        """Values outside their allowed range fail validation."""
        monkeypatch.setenv(variable, value)

        with pytest.raises(ValidationError):
            Settings()


@pytest.mark.unit
class TestGetSettings:
    """Test the cached settings accessor."""

    def test_returns_cached_instance(self) -> None:
        """Repeated calls return the same object until the cache is cleared."""
        first = get_settings()

        assert get_settings() is first

        get_settings.cache_clear()
        assert get_settings() is not first
