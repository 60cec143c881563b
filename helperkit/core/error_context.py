"""Sensitive data sanitization for secure logging.

The request pipeline logs every outbound call, and those calls carry bearer
credentials. This module makes sure such values never reach a log sink.

Key features:
- **Pattern matching**: Regex-based detection of sensitive field names
- **Configurable fields**: Additional sensitive fields from LogConfig
- **Deep sanitization**: Recursive handling of nested data structures
- **Header protection**: Special handling for sensitive HTTP headers

Sanitization is applied to logged copies only; the original data is never
modified.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from re import Pattern
from typing import Any, Final

from helperkit.core.constants import REDACTED

# Type alias for values we can sanitize
SanitizableValue = (
    str | int | float | bool | None | dict[str, Any] | list[Any] | tuple[Any, ...]
)

SENSITIVE_HEADERS = {
    "authorization",
    "cookie",
    "x-api-key",
    "x-auth-token",
    "x-csrf-token",
    "set-cookie",
    "x-secret-key",
    "proxy-authorization",
}

DEFAULT_SENSITIVE_PATTERN: Final[Pattern[str]] = re.compile(
    r"(password|passwd|pwd|secret|token|api[_-]?key|apikey|auth|authorization|"
    r"credential|private[_-]?key|access[_-]?key|secret[_-]?key|session|"
    r"ssn|social[_-]?security|pin|cvv|cvc|card[_-]?number|connection[_-]?string)",
    re.IGNORECASE,
)

# Maximum depth for nested structure sanitization
MAX_DEPTH: Final[int] = 10


def is_sensitive_field(field_name: str, extra_fields: Iterable[str] = ()) -> bool:
    """Check if a field name indicates sensitive data.

    Checks against both the default regex pattern and the configured
    sensitive fields list.

    Args:
        field_name: The field name to check.
        extra_fields: Additional field names to treat as sensitive.

    Returns:
        bool: True if the field appears to contain sensitive data.
    """
    if DEFAULT_SENSITIVE_PATTERN.search(field_name):
        return True

    field_lower = field_name.lower()
    return any(sensitive.lower() in field_lower for sensitive in extra_fields)


def is_sensitive_header(header_name: str) -> bool:
    """Check if a header name is sensitive (case-insensitive)."""
    return header_name.lower() in SENSITIVE_HEADERS


def sanitize_value(
    value: SanitizableValue,
    field_name: str = "",
    depth: int = 0,
    extra_fields: Iterable[str] = (),
) -> SanitizableValue:
    """Sanitize a value if it appears to be sensitive.

    Nested dicts, lists and tuples are sanitized recursively up to MAX_DEPTH.

    Args:
        value: The value to potentially sanitize.
        field_name: The field name for context.
        depth: Current recursion depth.
        extra_fields: Additional field names to treat as sensitive.

    Returns:
        SanitizableValue: Sanitized value or original if not sensitive.
    """
    if depth > MAX_DEPTH:
        return REDACTED

    fields = tuple(extra_fields)
    if field_name and is_sensitive_field(field_name, fields):
        return REDACTED

    if isinstance(value, dict):
        return {k: sanitize_value(v, k, depth + 1, fields) for k, v in value.items()}

    if isinstance(value, list):
        return [sanitize_value(item, "", depth + 1, fields) for item in value]

    if isinstance(value, tuple):
        return tuple(sanitize_value(item, "", depth + 1, fields) for item in value)

    return value


def sanitize_dict(
    data: Mapping[str, Any], extra_fields: Iterable[str] = ()
) -> dict[str, Any]:
    """Sanitize a dictionary by redacting sensitive fields.

    Args:
        data: Dictionary to sanitize.
        extra_fields: Additional field names to treat as sensitive.

    Returns:
        dict[str, Any]: New dictionary with sensitive values redacted.
    """
    fields = tuple(extra_fields)
    return {key: sanitize_value(value, key, 0, fields) for key, value in data.items()}


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Sanitize HTTP headers.

    Args:
        headers: Headers mapping.

    Returns:
        dict[str, str]: Copy of the headers with sensitive values redacted.
    """
    return {k: REDACTED if is_sensitive_header(k) else v for k, v in headers.items()}


def sanitize_error_context(
    error: Exception,
    context: Mapping[str, Any] | None = None,
    extra_fields: Iterable[str] = (),
) -> dict[str, Any]:
    """Create sanitized error context for logging.

    Args:
        error: The exception to create context for.
        context: Additional context to include (will be sanitized).
        extra_fields: Additional field names to treat as sensitive.

    Returns:
        dict[str, Any]: Sanitized error context safe for logging.
    """
    error_context: dict[str, Any] = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_context.update(sanitize_dict(context, extra_fields))

    return error_context
