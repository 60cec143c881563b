"""Type aliases for dynamic data structures throughout the toolkit.

All types defined here should be JSON-serializable to support logging,
storage, and request bodies.
"""

from typing import Any

# JSON-compatible type that represents any valid JSON value
# Used for stored values, request bodies and decoded response bodies
type JsonValue = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)

# Context dictionary for error details and debugging information
type ErrorContext = dict[str, Any]  # flexible error context

# HTTP header mapping as sent on the wire
type Headers = dict[str, str]

# Query string parameters
type QueryParams = dict[str, str | int | float | bool | None]
