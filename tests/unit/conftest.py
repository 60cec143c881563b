"""Shared fixtures for unit tests."""

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from helperkit.core.config import Settings, get_settings
from helperkit.storage.backends import MemoryBackend
from helperkit.storage.store import KeyValueStore


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Settings:
    """Provide a real Settings object with test values.

    Returns:
        Settings: Settings with a backend URL and an isolated storage file.
    """
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("APP_VERSION", "1.0.0")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("BACKEND_URL", "https://api.example.com")
    monkeypatch.setenv(
        "STORAGE_CONFIG__DURABLE_PATH", str(tmp_path / "storage.json")
    )
    return Settings()


@pytest.fixture
def memory_store() -> KeyValueStore:
    """Provide a store whose namespaces are both held in memory."""
    return KeyValueStore(durable=MemoryBackend(), session=MemoryBackend())


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Clear the LRU cache before and after each test to ensure isolation.

    This fixture is autouse to ensure all tests start with a fresh cache
    and don't interfere with each other.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[pytest.MonkeyPatch]:
    """Backup and restore environment variables to prevent test interference.

    Variables set by pytest-env (ENVIRONMENT, LOG_CONFIG__LOG_LEVEL) are kept.
    Cloud detection variables are kept too; tests set them explicitly through
    ``mock_cloud_env``.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        pytest.MonkeyPatch: The monkeypatch instance for env manipulation.
    """
    original_env = os.environ.copy()

    env_prefixes = [
        "APP_",
        "DEBUG",
        "PORT",
        "BACKEND_URL",
        "BASE_URL",
        "FRONTEND_URL",
        "FRONT_URL",
        "AUTH_CONFIG__",
        "API_VERSIONS__",
        "HTTP_CONFIG__",
        "STORAGE_CONFIG__",
        "I18N_CONFIG__",
    ]
    for key in list(os.environ.keys()):
        if any(key.upper().startswith(prefix) for prefix in env_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield monkeypatch

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_cloud_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Mock cloud environment detection (GCP/AWS).

    Returns:
        dict[str, Any]: Helpers for setting and clearing cloud variables.
    """

    def set_gcp() -> None:
        monkeypatch.setenv("K_SERVICE", "test-service")

    def set_aws() -> None:
        monkeypatch.setenv("AWS_EXECUTION_ENV", "AWS_Lambda_python3.13")

    def clear_all() -> None:
        for key in ["K_SERVICE", "AWS_EXECUTION_ENV"]:
            monkeypatch.delenv(key, raising=False)

    return {"set_gcp": set_gcp, "set_aws": set_aws, "clear_all": clear_all}
