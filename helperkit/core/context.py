"""Correlation and request identifiers for outbound calls.

A correlation ID bound with ``correlation_scope`` is forwarded on every
request sent from the same task, so backend logs can be joined with ours.
"""

import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Generator[str]:
    """Bind a correlation ID for the duration of the block.

    Args:
        correlation_id: ID to bind; a new UUID4 string when omitted.

    Yields:
        Generator[str]: The bound correlation ID.
    """
    value = correlation_id or str(uuid.uuid4())
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)


def generate_request_id() -> str:
    """Generate a unique ID for a single outbound request.

    Examples:
        >>> generate_request_id().startswith("req-")
        True
    """
    return f"req-{uuid.uuid4()}"
