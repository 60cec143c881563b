"""JSON safe-parse helpers.

``parse_json`` reports its outcome as a value instead of raising: either
``Parsed(value)`` or ``Unparsed(raw)``. The remaining helpers are thin
conveniences over the same idea for call sites that only need a boolean or
an optional value.
"""

from collections.abc import Callable
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict

from helperkit.core.types import JsonValue


class Parsed(BaseModel):
    """Outcome of a successful parse."""

    model_config = ConfigDict(frozen=True)

    value: Any


class Unparsed(BaseModel):
    """Outcome of a failed parse, carrying the untouched input."""

    model_config = ConfigDict(frozen=True)

    raw: Any


type ParseResult = Parsed | Unparsed


def parse_json(text: object) -> ParseResult:
    """Parse JSON text without raising.

    Args:
        text: JSON text as ``str`` or ``bytes``.

    Returns:
        ParseResult: ``Parsed`` with the decoded value, or ``Unparsed`` with
        the original input when it is not valid JSON.

    Examples:
        >>> parse_json('{"a": 1}')
        Parsed(value={'a': 1})
        >>> parse_json("Alice")
        Unparsed(raw='Alice')
    """
    if not isinstance(text, (str, bytes, bytearray)):
        return Unparsed(raw=text)
    try:
        return Parsed(value=orjson.loads(text))
    except orjson.JSONDecodeError:
        return Unparsed(raw=text)


def is_valid_json(text: object) -> bool:
    """Check whether a value is valid JSON text."""
    return isinstance(parse_json(text), Parsed)


def safe_parse_json(text: object) -> JsonValue:
    """Parse JSON text, returning None when it is invalid.

    A valid ``"null"`` also yields None; use ``parse_json`` when the two
    cases must be told apart.
    """
    result = parse_json(text)
    return result.value if isinstance(result, Parsed) else None


def safe_parse[T](text: str, parser: Callable[[str], T]) -> T | None:
    """Apply any parser to a string, returning None when it fails.

    Args:
        text: The input string.
        parser: Callable converting the string, e.g. ``int`` or ``float``.

    Returns:
        T | None: The parsed value, or None if the parser raised
        ``ValueError`` or ``TypeError``.

    Examples:
        >>> safe_parse("123", int)
        123
        >>> safe_parse("abc", int) is None
        True
    """
    try:
        return parser(text)
    except (ValueError, TypeError):
        return None
