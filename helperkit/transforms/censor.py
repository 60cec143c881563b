"""PII censoring helpers for partially redacted display values.

Each helper masks the interior of a value while keeping its boundary
characters, so a user can recognise their own data without the full value
being exposed on screen or in a log line.

Policy for a single unit (word, email local part, domain label, phone digits):

=========  ===============================
length     output
=========  ===============================
0          ``""``
1          ``"*"``
2          first character + ``"*"``
>= 3       first + ``"*" * (len - 2)`` + last
=========  ===============================

All helpers are total: non-string input yields ``""`` instead of raising
(``censor_phone`` coerces numbers with ``str()`` first).
"""

import re
from typing import Final

from helperkit.core.constants import MASK_CHAR

COUNTRY_CODE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\+\d+", re.ASCII)
WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s+")


def censor_word(value: object) -> str:
    """Mask every character of a word except the first and the last.

    Args:
        value: The word to censor.

    Returns:
        str: The censored word, always the same length as the input.

    Examples:
        >>> censor_word("hello")
        'h***o'
        >>> censor_word("hi")
        'h*'
    """
    if not isinstance(value, str) or not value:
        return ""
    if len(value) == 1:
        return MASK_CHAR
    if len(value) == 2:  # noqa: PLR2004 - policy table boundary
        return value[0] + MASK_CHAR
    return value[0] + MASK_CHAR * (len(value) - 2) + value[-1]


def censor_phone(value: object) -> str:
    """Censor a phone number, keeping its country code prefix.

    A leading ``+digits`` run is kept as the country code when something
    follows it (``"+44 7911123456"``). When the run covers the whole number
    there is no way to tell the code from the subscriber digits, so only the
    ``+`` sign is kept.

    Args:
        value: The phone number, as a string or a number. ``None`` gives
            an empty string.

    Returns:
        str: The censored phone number.

    Examples:
        >>> censor_phone("+1234567890")
        '+1********0'
        >>> censor_phone(9876543210)
        '9********0'
    """
    if value is None:
        return ""
    number = value if isinstance(value, str) else str(value)

    prefix = ""
    match = COUNTRY_CODE_PATTERN.match(number)
    if match and match.end() < len(number):
        prefix = match.group()
    elif number.startswith("+"):
        prefix = "+"

    return prefix + censor_word(number[len(prefix) :])


def censor_email(value: object) -> str:
    """Censor an email's local part and domain name, keeping the suffix.

    Only the first label of the domain is masked; everything after it
    (``.com``, ``.co.uk``) stays readable.

    Args:
        value: The email address to censor.

    Returns:
        str: The censored address. Strings without exactly one ``@`` are
        returned unchanged.

    Examples:
        >>> censor_email("john.doe@example.com")
        'j******e@e*****e.com'
        >>> censor_email("not-an-email")
        'not-an-email'
    """
    if not isinstance(value, str):
        return ""
    if value.count("@") != 1:
        return value

    local, domain = value.split("@")
    domain_name, dot, suffix = domain.partition(".")

    return censor_word(local) + "@" + censor_word(domain_name) + dot + suffix


def censor_full_name(value: object) -> str:
    """Censor every word of a full name separately.

    Args:
        value: The full name to censor.

    Returns:
        str: Censored words joined by a single space.

    Examples:
        >>> censor_full_name("John   Doe")
        'J**n D*e'
    """
    if not isinstance(value, str):
        return ""
    parts = WHITESPACE_PATTERN.split(value.strip())
    return " ".join(censor_word(part) for part in parts)
