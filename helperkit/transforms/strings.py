"""String formatting and validation helpers.

Transforms return ``""`` and predicates return ``False`` for non-string
input, so callers never have to guard a call site. Character classes are
ASCII-only: ``slugify`` drops accented letters rather than keeping them.

``camel_to_snake`` and ``snake_to_camel`` are not inverses. Each applies its
own literal rule, so strings that already contain underscores or capitals
do not round-trip: ``snake_to_camel(camel_to_snake("my_var"))`` is
``"myVar"`` and ``camel_to_snake(snake_to_camel("Snake_case"))`` is
``"_snake_case"``.
"""

import re
from typing import Final

WHITESPACE_RUN: Final[re.Pattern[str]] = re.compile(r"\s+")
NON_SLUG_CHARS: Final[re.Pattern[str]] = re.compile(r"[^\w-]+", re.ASCII)
REPEATED_DASHES: Final[re.Pattern[str]] = re.compile(r"--+")
WORD_START: Final[re.Pattern[str]] = re.compile(r"\b(\w)", re.ASCII)
UPPERCASE_LETTER: Final[re.Pattern[str]] = re.compile(r"[A-Z]")
UNDERSCORE_LOWER: Final[re.Pattern[str]] = re.compile(r"_([a-z])")
NON_FILENAME_CHARS: Final[re.Pattern[str]] = re.compile(r"[^a-zA-Z0-9_]")

EMAIL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}"
)
PHONE_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9]{10}")
ALPHABETIC_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z]+")
ALPHANUMERIC_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9]+")


def capitalize_first_letter(value: object) -> str:
    """Uppercase the first character and leave the rest untouched."""
    if not isinstance(value, str) or not value:
        return ""
    return value[0].upper() + value[1:]


def trim_spaces(value: object) -> str:
    """Strip whitespace from both ends."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def to_lower_case(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.lower()


def to_upper_case(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.upper()


def replace_spaces_with_underscores(value: object) -> str:
    """Replace every whitespace run with a single underscore."""
    if not isinstance(value, str):
        return ""
    return WHITESPACE_RUN.sub("_", value)


def slugify(value: object) -> str:
    """Convert a string into a URL-friendly slug.

    Lowercases, trims, turns whitespace runs into ``-``, drops every
    character that is not an ASCII letter, digit, ``_`` or ``-`` and
    collapses repeated dashes. Applying it twice gives the same result as
    applying it once.

    Args:
        value: The input string.

    Returns:
        str: The slug.

    Examples:
        >>> slugify("Hello   World!!")
        'hello-world'
    """
    if not isinstance(value, str):
        return ""
    slug = WHITESPACE_RUN.sub("-", value.lower().strip())
    slug = NON_SLUG_CHARS.sub("", slug)
    return REPEATED_DASHES.sub("-", slug)


def to_title_case(value: object) -> str:
    """Lowercase a string, then capitalize the first letter of each word.

    Examples:
        >>> to_title_case("hELLO wORLD-wide")
        'Hello World-Wide'
    """
    if not isinstance(value, str):
        return ""
    return WORD_START.sub(lambda match: match.group(1).upper(), value.lower())


def is_valid_email(value: object) -> bool:
    """Check for a ``local@domain.tld`` shape with a 2-6 letter TLD."""
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_phone_number(value: object) -> bool:
    """Check for exactly 10 decimal digits.

    Examples:
        >>> is_valid_phone_number("1234567890")
        True
        >>> is_valid_phone_number("12345")
        False
    """
    return isinstance(value, str) and PHONE_PATTERN.fullmatch(value) is not None


def is_empty_or_whitespace(value: object) -> bool:
    """Check if a value is missing, empty, or only whitespace."""
    if not isinstance(value, str):
        return True
    return not value.strip()


def is_alphabetic(value: object) -> bool:
    """Check that a non-empty string holds only ASCII letters."""
    return isinstance(value, str) and ALPHABETIC_PATTERN.fullmatch(value) is not None


def is_alphanumeric(value: object) -> bool:
    """Check that a non-empty string holds only ASCII letters and digits."""
    return (
        isinstance(value, str) and ALPHANUMERIC_PATTERN.fullmatch(value) is not None
    )


def camel_to_snake(value: object) -> str:
    """Prefix every uppercase ASCII letter with ``_`` and lowercase it.

    Examples:
        >>> camel_to_snake("userFirstName")
        'user_first_name'
        >>> camel_to_snake("UserID")
        '_user_i_d'
    """
    if not isinstance(value, str):
        return ""
    return UPPERCASE_LETTER.sub(lambda match: "_" + match.group().lower(), value)


def snake_to_camel(value: object) -> str:
    """Replace every ``_`` followed by a lowercase letter with that letter uppercased.

    Examples:
        >>> snake_to_camel("user_first_name")
        'userFirstName'
        >>> snake_to_camel("user__name_2")
        'user_Name_2'
    """
    if not isinstance(value, str):
        return ""
    return UNDERSCORE_LOWER.sub(lambda match: match.group(1).upper(), value)


def sanitize_file_name(value: object) -> str:
    """Make a file name safe: whitespace to ``_``, drop all other symbols.

    Examples:
        >>> sanitize_file_name("my report (final).pdf")
        'my_report_finalpdf'
    """
    if not isinstance(value, str):
        return ""
    return NON_FILENAME_CHARS.sub("", WHITESPACE_RUN.sub("_", value))
