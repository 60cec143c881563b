"""Unit tests for helperkit/core/config.py."""

from pathlib import Path

import pydantic
import pytest
import pytest_check

from helperkit.core.config import (
    HttpConfig,
    I18nConfig,
    LogConfig,
    Settings,
    StorageConfig,
    get_settings,
)
from helperkit.core.exceptions import ConfigurationError, ErrorCode, Severity


@pytest.mark.unit
class TestSettingsDefaults:
    """Test default values of the Settings class."""

    def test_default_application_settings(self) -> None:
        settings = Settings()

        with pytest_check.check:
            assert settings.app_name == "MyApp"
        with pytest_check.check:
            assert settings.app_version == "0.1.0"
        with pytest_check.check:
            assert settings.environment == "development"  # pytest-env sets this
        with pytest_check.check:
            assert settings.debug is True
        with pytest_check.check:
            assert settings.port == 3000
        with pytest_check.check:
            assert settings.frontend_url == "http://localhost:3000"
        with pytest_check.check:
            assert settings.backend_url is None

    def test_default_nested_configs(self) -> None:
        settings = Settings()

        with pytest_check.check:
            assert settings.auth_config.jwt_secret == "secret"
        with pytest_check.check:
            assert settings.auth_config.login_path == "/auth/login"
        with pytest_check.check:
            assert settings.auth_config.verify_path == "/auth/verify"
        with pytest_check.check:
            assert settings.auth_config.logout_path == "/auth/logout"
        with pytest_check.check:
            assert settings.api_versions.version_one == "/v1"
        with pytest_check.check:
            assert settings.api_versions.version_two == "/v2"
        with pytest_check.check:
            assert settings.http_config.timeout_seconds == 10.0
        with pytest_check.check:
            assert settings.http_config.credential_key == "auth"
        with pytest_check.check:
            assert settings.storage_config.key_prefix == "my_app_"
        with pytest_check.check:
            assert settings.storage_config.durable_path == Path(
                ".helperkit/storage.json"
            )

    def test_default_log_config(self) -> None:
        settings = Settings()

        with pytest_check.check:
            assert isinstance(settings.log_config, LogConfig)
        with pytest_check.check:
            assert settings.log_config.log_level == "WARNING"  # Set by pytest-env
        with pytest_check.check:
            assert settings.log_config.log_formatter_type is None
        with pytest_check.check:
            assert "authorization" in settings.log_config.sensitive_fields

    def test_default_i18n_config(self) -> None:
        config = I18nConfig()

        assert config.fallback_language == "en"
        assert config.supported_languages == ["en", "fr", "hi", "zh"]
        assert config.load_path == "/locales/{lng}/translation.json"


@pytest.mark.unit
class TestSettingsEnvironment:
    """Test environment variable overrides."""

    def test_backend_url_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BACKEND_URL", "https://api.example.com")

        assert Settings().backend_url == "https://api.example.com"

    def test_base_url_alias(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BASE_URL", "https://alias.example.com")

        assert Settings().backend_url == "https://alias.example.com"

    def test_front_url_alias(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRONT_URL", "https://app.example.com")

        assert Settings().frontend_url == "https://app.example.com"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_backend_url_is_none(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("BACKEND_URL", value)

        assert Settings().backend_url is None

    def test_nested_delimiter(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTTP_CONFIG__TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("STORAGE_CONFIG__KEY_PREFIX", "other_")
        monkeypatch.setenv("LOG_CONFIG__LOG_FORMATTER_TYPE", "json")

        settings = Settings()

        with pytest_check.check:
            assert settings.http_config.timeout_seconds == 2.5
        with pytest_check.check:
            assert settings.storage_config.key_prefix == "other_"
        with pytest_check.check:
            assert settings.log_config.log_formatter_type == "json"

    def test_invalid_environment_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "qa")

        with pytest.raises(pydantic.ValidationError):
            Settings()

    def test_env_file_is_read(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("BACKEND_URL=https://from-file.example.com\n")
        monkeypatch.chdir(tmp_path)

        assert Settings().backend_url == "https://from-file.example.com"


@pytest.mark.unit
class TestSettingsBehavior:
    """Test Settings methods and immutability."""

    def test_settings_are_frozen(self) -> None:
        settings = Settings()

        with pytest.raises(pydantic.ValidationError):
            settings.app_name = "Changed"  # type: ignore[misc]

    def test_nested_config_is_frozen(self) -> None:
        config = HttpConfig()

        with pytest.raises(pydantic.ValidationError):
            config.timeout_seconds = 1.0  # type: ignore[misc]

    def test_require_backend_url_returns_value(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BACKEND_URL", "https://api.example.com")

        assert Settings().require_backend_url() == "https://api.example.com"

    def test_require_backend_url_missing_raises(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Settings().require_backend_url()

        assert exc_info.value.error_code == ErrorCode.CONFIGURATION_ERROR.value
        assert exc_info.value.severity == Severity.CRITICAL
        assert exc_info.value.context == {"setting": "backend_url"}

    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("v1", "https://api.example.com/v1"),
            ("v2", "https://api.example.com/v2"),
        ],
    )
    def test_api_url(
        self, monkeypatch: pytest.MonkeyPatch, version: str, expected: str
    ) -> None:
        monkeypatch.setenv("BACKEND_URL", "https://api.example.com/")

        assert Settings().api_url(version) == expected  # type: ignore[arg-type]

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            HttpConfig(timeout_seconds=0)

    def test_supported_languages_lowercased(self) -> None:
        config = I18nConfig(supported_languages=["EN", "Fr"])

        assert config.supported_languages == ["en", "fr"]

    def test_storage_path_coerced(self) -> None:
        config = StorageConfig(durable_path="data/store.json")  # type: ignore[arg-type]

        assert config.durable_path == Path("data/store.json")


@pytest.mark.unit
class TestGetSettings:
    """Test the cached settings accessor."""

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_creates_new_instance(self) -> None:
        first = get_settings()
        get_settings.cache_clear()

        assert get_settings() is not first
