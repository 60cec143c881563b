"""Unit tests for the logging module.

Covers field formatting, the console and JSON renderers, stdlib
interception and the one-time setup.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from datetime import UTC, datetime
from typing import Any

import pytest
from loguru import logger
from pytest_mock import MockerFixture

from helperkit.core.config import LogConfig, Settings
from helperkit.core.constants import REDACTED
from helperkit.core.logging import (
    DEFAULT_LOG_FORMAT,
    MAX_FIELD_VALUE_LENGTH,
    InterceptHandler,
    _format_context_fields,
    _format_extra_field,
    _format_priority_field,
    _LoggingState,
    _state,
    detect_formatter,
    make_console_formatter,
    serialize_for_json,
    setup_logging,
)


@pytest.fixture
def isolated_logging_state() -> Generator[_LoggingState]:
    """Reset the module logging state around a test."""
    original = _state.configured
    _state.configured = False
    yield _state
    _state.configured = original


@pytest.fixture
def log_record() -> dict[str, Any]:
    """Provide a minimal Loguru-like record."""
    level = type("Level", (), {"name": "INFO"})()
    return {
        "time": datetime(2024, 1, 1, 12, 30, 45, 123456, tzinfo=UTC),
        "level": level,
        "message": "Request completed",
        "name": "helperkit.http.steps",
        "function": "log_response",
        "module": "steps",
        "line": 42,
        "extra": {},
        "exception": None,
    }


def make_settings(formatter: str | None, level: str = "INFO") -> Settings:
    return Settings(
        log_config=LogConfig(log_formatter_type=formatter, log_level=level)  # type: ignore[arg-type]
    )


@pytest.mark.unit
class TestFieldFormatting:
    """Test formatting of individual context fields."""

    def test_logging_state_initialization(self) -> None:
        assert _LoggingState().configured is False

    @pytest.mark.parametrize(
        ("field", "value", "expected"),
        [
            ("request_id", "req-1234567890abcdef", "req-12345678"),
            ("correlation_id", "short", "short"),
            ("duration_ms", 150, "150ms"),
            ("status", 200, "<green>200</green>"),
            ("status", 301, "<yellow>301</yellow>"),
            ("status", 404, "<red>404</red>"),
            ("status", 500, "<red><bold>500</bold></red>"),
            ("method", "GET", "GET"),
            ("url", "/items?q={x}", "/items?q={{x}}"),
        ],
    )
    def test_format_priority_field(
        self, field: str, value: object, expected: str
    ) -> None:
        assert _format_priority_field(field, value) == expected

    def test_format_priority_field_failure(self) -> None:
        class BadObject:
            def __str__(self) -> str:
                raise ValueError("Cannot convert to string")

        assert _format_priority_field("method", BadObject()) is None

    @pytest.mark.parametrize(
        ("key", "value", "expected"),
        [
            ("key", "value", "key=value"),
            ("user_id", 123, "user_id=123"),
            ("long_field", "x" * 200, f"long_field={'x' * (MAX_FIELD_VALUE_LENGTH - 3)}..."),
            ("field", "test{value}", "field=test{{value}}"),
            ("token", "abc", f"token={REDACTED}"),
        ],
    )
    def test_format_extra_field(self, key: str, value: object, expected: str) -> None:
        assert _format_extra_field(key, value, ["token"]) == expected

    def test_format_context_fields_order(self) -> None:
        extra = {
            "custom": "value",
            "status": 200,
            "request_id": "req-abc",
            "_private": "hidden",
            "empty": None,
        }

        parts = _format_context_fields(extra)

        assert parts == [
            "<yellow>req-abc</yellow>",
            "<yellow><green>200</green></yellow>",
            "<dim>custom=value</dim>",
        ]


@pytest.mark.unit
class TestRenderers:
    """Test the console and JSON renderers."""

    def test_console_formatter_includes_context(self, log_record: dict[str, Any]) -> None:
        log_record["extra"] = {"method": "GET", "password": "hunter2"}
        formatter = make_console_formatter(["password"])

        output = formatter(log_record)

        assert output.startswith("<green>2024-01-01 12:30:45.123</green>")
        assert "helperkit.http.steps:log_response:42" in output
        assert "<yellow>GET</yellow>" in output
        assert f"password={REDACTED}" in output
        assert "hunter2" not in output
        assert output.endswith("Request completed\n")

    def test_console_formatter_with_exception(self, log_record: dict[str, Any]) -> None:
        log_record["exception"] = object()

        output = make_console_formatter()(log_record)

        assert "\n{exception}" in output

    def test_console_formatter_fallback(self) -> None:
        assert make_console_formatter()({}) == DEFAULT_LOG_FORMAT + "\n"

    def test_serialize_for_json(self, log_record: dict[str, Any]) -> None:
        log_record["extra"] = {"status": 201, "_internal": True}

        entry = json.loads(serialize_for_json(log_record))

        assert entry["level"] == "INFO"
        assert entry["message"] == "Request completed"
        assert entry["logger"] == "helperkit.http.steps"
        assert entry["line"] == 42
        assert entry["status"] == 201
        assert "_internal" not in entry
        assert "exception" not in entry

    def test_serialize_for_json_redacts_sensitive_fields(
        self, log_record: dict[str, Any]
    ) -> None:
        log_record["extra"] = {"password": "hunter2", "user": "jd"}

        entry = json.loads(serialize_for_json(log_record, ["password"]))

        assert entry["password"] == REDACTED
        assert entry["user"] == "jd"

    def test_serialize_for_json_exception(self, log_record: dict[str, Any]) -> None:
        log_record["exception"] = type(
            "Exc", (), {"type": ValueError, "value": ValueError("bad")}
        )()

        entry = json.loads(serialize_for_json(log_record))

        assert entry["exception"] == {"type": "ValueError", "value": "bad"}


@pytest.mark.unit
class TestInterceptHandler:
    """Test forwarding of stdlib records to Loguru."""

    def test_emit_forwards_message(self, mocker: MockerFixture) -> None:
        mock_opt = mocker.patch.object(logger, "opt")
        record = logging.LogRecord(
            "httpx", logging.INFO, __file__, 10, "HTTP Request: %s", ("GET",), None
        )

        InterceptHandler().emit(record)

        mock_opt.return_value.log.assert_called_once_with("INFO", "HTTP Request: GET")

    def test_emit_unknown_level_uses_number(self, mocker: MockerFixture) -> None:
        mock_opt = mocker.patch.object(logger, "opt")
        record = logging.LogRecord("lib", 15, __file__, 10, "custom", None, None)
        record.levelname = "CUSTOM"

        InterceptHandler().emit(record)

        mock_opt.return_value.log.assert_called_once_with(15, "custom")


@pytest.mark.unit
class TestSetupLogging:
    """Test formatter detection and setup."""

    @pytest.mark.parametrize(
        ("environment", "cloud", "expected"),
        [
            ("development", None, "console"),
            ("staging", None, "json"),
            ("production", None, "json"),
            ("development", "set_gcp", "json"),
            ("development", "set_aws", "json"),
        ],
    )
    def test_detect_formatter(
        self,
        mock_cloud_env: dict[str, Any],
        environment: str,
        cloud: str | None,
        expected: str,
    ) -> None:
        mock_cloud_env["clear_all"]()
        if cloud:
            mock_cloud_env[cloud]()

        assert detect_formatter(environment) == expected

    def test_setup_logging_console(
        self,
        mocker: MockerFixture,
        isolated_logging_state: _LoggingState,
    ) -> None:
        mock_remove = mocker.patch.object(logger, "remove")
        mock_add = mocker.patch.object(logger, "add")
        mock_info = mocker.patch.object(logger, "info")
        mock_basicconfig = mocker.patch("logging.basicConfig")

        setup_logging(make_settings("console"))

        assert isolated_logging_state.configured is True
        mock_remove.assert_called_once()
        add_kwargs = mock_add.call_args.kwargs
        assert callable(add_kwargs["format"])
        assert add_kwargs["level"] == "INFO"
        assert add_kwargs["enqueue"] is True
        assert add_kwargs["colorize"] is True

        handlers = mock_basicconfig.call_args.kwargs["handlers"]
        assert len(handlers) == 1
        assert isinstance(handlers[0], InterceptHandler)

        mock_info.assert_called_once_with(
            "Logging configured with {} formatter",
            "console",
            formatter_type="console",
            log_level="INFO",
        )

    def test_setup_logging_json_sink(
        self,
        mocker: MockerFixture,
        log_record: dict[str, Any],
        isolated_logging_state: _LoggingState,
    ) -> None:
        mocker.patch.object(logger, "remove")
        mock_add = mocker.patch.object(logger, "add")
        mocker.patch.object(logger, "info")
        mocker.patch("logging.basicConfig")
        mock_stdout = mocker.patch("sys.stdout")

        setup_logging(make_settings("json", "DEBUG"))

        structured_sink = mock_add.call_args.args[0]
        assert mock_add.call_args.kwargs["level"] == "DEBUG"

        log_record["extra"] = {"password": "hunter2"}
        structured_sink(type("Message", (), {"record": log_record})())

        written = json.loads(mock_stdout.write.call_args.args[0])
        assert written["message"] == "Request completed"
        assert written["password"] == REDACTED
        assert isolated_logging_state.configured is True

    def test_setup_logging_auto_detects(
        self,
        mocker: MockerFixture,
        mock_cloud_env: dict[str, Any],
        isolated_logging_state: _LoggingState,
    ) -> None:
        mock_cloud_env["clear_all"]()
        mocker.patch.object(logger, "remove")
        mocker.patch.object(logger, "add")
        mock_info = mocker.patch.object(logger, "info")
        mocker.patch("logging.basicConfig")

        setup_logging(make_settings(None))

        assert mock_info.call_args.kwargs["formatter_type"] == "console"
        assert isolated_logging_state.configured is True

    def test_setup_logging_subsequent_calls(
        self,
        mocker: MockerFixture,
        isolated_logging_state: _LoggingState,
    ) -> None:
        isolated_logging_state.configured = True
        mock_remove = mocker.patch.object(logger, "remove")
        mock_add = mocker.patch.object(logger, "add")

        setup_logging(make_settings("console"))

        mock_remove.assert_not_called()
        mock_add.assert_not_called()
