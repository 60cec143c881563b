"""Centralized configuration management with environment-aware defaults.

This module implements the configuration system using Pydantic Settings,
providing a single immutable settings object that is constructed once at
process start and passed explicitly to every consumer.

Features:
- **Type safety**: All configuration values are validated and typed
- **Environment variables**: Supports .env files and environment overrides
- **Nested configuration**: Uses __ delimiter for grouped options
- **Immutability**: Settings and nested groups are frozen after construction
- **Fail fast**: The backend URL has no default and is required at startup

Configuration sources (in order of precedence):
1. Environment variables
2. .env file in project root
3. Default values in model definitions
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from helperkit.core.exceptions import ConfigurationError


class LogConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = (
        Field(
            default="INFO",
            description="Logging level",
        )
    )
    log_formatter_type: Literal["console", "json"] | None = Field(
        default=None,
        description="Log output formatter. Auto-detected if not specified.",
    )
    sensitive_fields: list[str] = Field(
        default_factory=lambda: [
            "password",
            "token",
            "secret",
            "api_key",
            "authorization",
        ],
        description="Field names to redact",
    )


class AuthConfig(BaseModel):
    """Authentication-related settings: signing secret and redirect paths."""

    model_config = ConfigDict(frozen=True)

    jwt_secret: str = Field(default="secret", description="JWT signing secret")
    login_path: str = Field(default="/auth/login", description="Login redirect")
    verify_path: str = Field(default="/auth/verify", description="Verify redirect")
    logout_path: str = Field(default="/auth/logout", description="Logout redirect")


class ApiVersions(BaseModel):
    """API version path segments."""

    model_config = ConfigDict(frozen=True)

    version_one: str = Field(default="/v1", description="Version one prefix")
    version_two: str = Field(default="/v2", description="Version two prefix")


class HttpConfig(BaseModel):
    """Outbound HTTP request pipeline configuration."""

    model_config = ConfigDict(frozen=True)

    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=300,
        description="Per-request timeout in seconds",
    )
    credential_key: str = Field(
        default="auth",
        min_length=1,
        description="Storage key holding the bearer credential",
    )


class StorageConfig(BaseModel):
    """Key-value storage configuration."""

    model_config = ConfigDict(frozen=True)

    key_prefix: str = Field(
        default="my_app_",
        description="Prefix applied to every stored key",
    )
    durable_path: Path = Field(
        default=Path(".helperkit/storage.json"),
        description="File backing the durable (local) namespace",
    )


class I18nConfig(BaseModel):
    """Internationalization configuration."""

    model_config = ConfigDict(frozen=True)

    fallback_language: str = Field(
        default="en",
        min_length=2,
        description="Language used when the requested one is unsupported",
    )
    supported_languages: list[str] = Field(
        default_factory=lambda: ["en", "fr", "hi", "zh"],
        description="Languages with a translation catalog",
    )
    load_path: str = Field(
        default="/locales/{lng}/translation.json",
        description="Translation file location; {lng} is the language code",
    )

    @field_validator("supported_languages", mode="after")
    @classmethod
    def normalize_languages(cls, v: list[str]) -> list[str]:
        """Lowercase language codes so lookups are case-insensitive."""
        return [language.lower() for language in v]


class Settings(BaseSettings):
    """Main settings class for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    # Application settings
    app_name: str = Field(default="MyApp", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment the application is running in",
    )
    debug: bool = Field(default=True, description="Debug mode flag")
    port: int = Field(default=3000, ge=1, le=65535, description="Listen port")

    # URLs
    frontend_url: str = Field(
        default="http://localhost:3000",
        validation_alias=AliasChoices("frontend_url", "front_url"),
        description="Base frontend URL",
    )
    backend_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("backend_url", "base_url"),
        description="Base backend URL. Required; there is no safe default.",
    )

    auth_config: AuthConfig = Field(
        default_factory=AuthConfig, description="Authentication settings"
    )
    api_versions: ApiVersions = Field(
        default_factory=ApiVersions, description="API version path segments"
    )
    log_config: LogConfig = Field(
        default_factory=LogConfig, description="Logging configuration"
    )
    http_config: HttpConfig = Field(
        default_factory=HttpConfig, description="HTTP pipeline configuration"
    )
    storage_config: StorageConfig = Field(
        default_factory=StorageConfig, description="Storage configuration"
    )
    i18n_config: I18nConfig = Field(
        default_factory=I18nConfig, description="Internationalization settings"
    )

    @field_validator("backend_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty or blank strings to None."""
        _ = cls
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def require_backend_url(self) -> str:
        """Return the backend URL or fail startup.

        Returns:
            str: The configured backend base URL.

        Raises:
            ConfigurationError: If no backend URL is configured.
        """
        if self.backend_url is None:
            msg = "BACKEND_URL environment variable is not set"
            raise ConfigurationError(msg, context={"setting": "backend_url"})
        return self.backend_url

    def api_url(self, version: Literal["v1", "v2"] = "v1") -> str:
        """Build the versioned backend API base URL.

        Args:
            version: Which API version prefix to append.

        Returns:
            str: Backend URL joined with the version path segment.
        """
        prefix = (
            self.api_versions.version_one
            if version == "v1"
            else self.api_versions.version_two
        )
        return self.require_backend_url().rstrip("/") + prefix


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
