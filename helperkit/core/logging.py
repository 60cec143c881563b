"""Structured logging setup built on Loguru.

Modules in helperkit log through ``from loguru import logger`` and attach
structured keyword context to each record. This module decides how those
records are rendered:

- **console**: Human-readable with inline context (development)
- **json**: One JSON document per line (staging and production)

Standard library logging (used by HTTPX and other libraries) is intercepted
and forwarded to Loguru so every record shares the same format.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Iterable
from typing import Any, Final, Protocol, cast

import orjson
from loguru import logger

from helperkit.core.constants import REDACTED

type FormatterFunc = Callable[[dict[str, Any]], str]


class _LoggingState:
    """Simple state holder to track if logging has been configured."""

    def __init__(self) -> None:
        self.configured = False


_state = _LoggingState()


class LogConfigProtocol(Protocol):
    """Protocol for log configuration objects."""

    @property
    def log_level(self) -> str:
        """Logging level."""
        ...

    @property
    def log_formatter_type(self) -> str | None:
        """Log formatter type."""
        ...

    @property
    def sensitive_fields(self) -> list[str]:
        """Field names whose values are redacted."""
        ...


class SettingsProtocol(Protocol):
    """Protocol for settings objects that setup_logging can accept."""

    @property
    def debug(self) -> bool:
        """Debug mode flag."""
        ...

    @property
    def environment(self) -> str:
        """Deployment environment name."""
        ...

    @property
    def log_config(self) -> LogConfigProtocol:
        """Log configuration."""
        ...


DEFAULT_LOG_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{message}"
)
REQUEST_ID_DISPLAY_LENGTH: Final[int] = 12
MAX_FIELD_VALUE_LENGTH: Final[int] = 100

# Fields rendered first, in this order, by the console formatter
PRIORITY_FIELDS: Final[tuple[str, ...]] = (
    "request_id",
    "correlation_id",
    "method",
    "url",
    "status",
    "duration_ms",
)


def _escape(value: str) -> str:
    """Escape braces so Loguru does not treat them as format fields."""
    return value.replace("{", "{{").replace("}", "}}")


def _format_priority_field(field: str, value: object) -> str | None:
    """Format a priority field for display.

    Args:
        field: The field name.
        value: The field value.

    Returns:
        str | None: Formatted value or None if formatting fails.
    """
    try:
        if field in {"request_id", "correlation_id"}:
            value = str(value)[:REQUEST_ID_DISPLAY_LENGTH]
        elif field == "duration_ms":
            value = f"{value}ms"
        elif field == "status":
            status_str = str(value)
            if status_str.startswith("2"):
                value = f"<green>{value}</green>"
            elif status_str.startswith("3"):
                value = f"<yellow>{value}</yellow>"
            elif status_str.startswith("4"):
                value = f"<red>{value}</red>"
            elif status_str.startswith("5"):
                value = f"<red><bold>{value}</bold></red>"
        return _escape(str(value))
    except (AttributeError, TypeError, ValueError) as e:
        logger.trace(f"Failed to format priority field {field}: {e}")
        return None


def _format_extra_field(
    key: str, value: object, sensitive_fields: Iterable[str]
) -> str | None:
    """Format an extra field for display, redacting sensitive ones.

    Args:
        key: The field name.
        value: The field value.
        sensitive_fields: Field names whose values must not be shown.

    Returns:
        str | None: Formatted field or None if formatting fails.
    """
    try:
        str_value = str(value)
        if key in sensitive_fields:
            str_value = REDACTED
        elif len(str_value) > MAX_FIELD_VALUE_LENGTH:
            str_value = str_value[: MAX_FIELD_VALUE_LENGTH - 3] + "..."
    except (AttributeError, TypeError, ValueError) as e:
        logger.trace(f"Failed to format extra field {key}: {e}")
        return None
    else:
        return f"{_escape(str(key))}={_escape(str_value)}"


def _format_context_fields(
    extra: dict[str, Any], sensitive_fields: Iterable[str] = ()
) -> list[str]:
    """Format all context fields from extra data.

    Args:
        extra: Extra fields from the log record.
        sensitive_fields: Field names whose values must not be shown.

    Returns:
        list[str]: List of formatted context parts.
    """
    context_parts = []
    fields = tuple(sensitive_fields)

    for field in PRIORITY_FIELDS:
        if extra.get(field) is not None:
            formatted = _format_priority_field(field, extra[field])
            if formatted:
                context_parts.append(f"<yellow>{formatted}</yellow>")

    for key, value in extra.items():
        if key not in PRIORITY_FIELDS and not key.startswith("_") and value is not None:
            formatted = _format_extra_field(key, value, fields)
            if formatted:
                context_parts.append(f"<dim>{formatted}</dim>")

    return context_parts


def make_console_formatter(sensitive_fields: Iterable[str] = ()) -> FormatterFunc:
    """Build a console formatter that shows every context field inline.

    Args:
        sensitive_fields: Field names whose values are redacted.

    Returns:
        FormatterFunc: A Loguru format callable.
    """
    fields = tuple(sensitive_fields)

    def format_console_with_context(record: dict[str, Any]) -> str:
        try:
            timestamp = record["time"].strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            parts = [
                f"<green>{timestamp}</green>",
                f"<level>{record['level'].name: <8}</level>",
                f"<cyan>{record['name']}:{record['function']}:{record['line']}</cyan>",
            ]

            context_parts = _format_context_fields(record.get("extra", {}), fields)
            if context_parts:
                parts.append(" ".join(f"[{part}]" for part in context_parts))

            parts.append(_escape(str(record.get("message", ""))))

            if record.get("exception"):
                parts.append("\n{exception}")

            return " | ".join(parts) + "\n"
        except (AttributeError, TypeError, ValueError, KeyError) as e:
            logger.trace(f"Failed to format log record: {e}")
            return DEFAULT_LOG_FORMAT + "\n"

    return format_console_with_context


def serialize_for_json(
    record: dict[str, Any], sensitive_fields: Iterable[str] = ()
) -> str:
    """Format log record as a single JSON line.

    Args:
        record: Loguru record to format.
        sensitive_fields: Field names whose values are redacted.

    Returns:
        str: JSON-formatted log entry with newline.
    """
    log_entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "module": record["module"],
        "line": record["line"],
    }

    if extra := record.get("extra", {}):
        fields = set(sensitive_fields)
        filtered_extra = {
            k: REDACTED if k in fields else v
            for k, v in extra.items()
            if not k.startswith("_")
        }
        if filtered_extra:
            log_entry.update(filtered_extra)

    if exc := record.get("exception"):
        log_entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return orjson.dumps(log_entry, default=str).decode() + "\n"


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Forward log record to Loguru.

        Args:
            record: Standard library LogRecord to forward.
        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def detect_formatter(environment: str) -> str:
    """Pick a formatter for the deployment environment.

    Args:
        environment: Configured environment name.

    Returns:
        str: "console" for development terminals, "json" otherwise.
    """
    if os.getenv("K_SERVICE") or os.getenv("AWS_EXECUTION_ENV"):
        return "json"
    if environment == "development":
        return "console"
    return "json"


def setup_logging(settings: SettingsProtocol) -> None:
    """Configure Loguru once for the whole process.

    Args:
        settings: Application settings containing log configuration.
    """
    if _state.configured:
        return

    logger.remove()

    log_config = settings.log_config
    sensitive_fields = tuple(log_config.sensitive_fields)
    formatter_type = log_config.log_formatter_type or detect_formatter(
        settings.environment
    )

    if formatter_type == "json":

        def structured_sink(message: object) -> None:
            """Sink that writes one JSON document per record."""
            record = getattr(message, "record", None)
            if record is not None:
                sys.stdout.write(serialize_for_json(record, sensitive_fields))
                sys.stdout.flush()

        logger.add(
            structured_sink,
            level=log_config.log_level,
            enqueue=True,
            diagnose=False,
            backtrace=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=cast("Any", make_console_formatter(sensitive_fields)),
            level=log_config.log_level,
            enqueue=True,
            colorize=True,
            diagnose=settings.debug,
            backtrace=settings.debug,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logger.info(
        "Logging configured with {} formatter",
        formatter_type,
        formatter_type=formatter_type,
        log_level=log_config.log_level,
    )

    _state.configured = True
