"""Pure string transforms and validators.

- **censor**: PII masking for display (words, phones, emails, names)
- **strings**: Case conversion, slugs, and format predicates
- **parsing**: JSON parsing that reports failure as a value
- **user_agent**: Mobile browser detection

Nothing in this package raises for any input.
"""

from helperkit.transforms.censor import (
    censor_email,
    censor_full_name,
    censor_phone,
    censor_word,
)
from helperkit.transforms.parsing import (
    Parsed,
    ParseResult,
    Unparsed,
    is_valid_json,
    parse_json,
    safe_parse,
    safe_parse_json,
)
from helperkit.transforms.strings import (
    camel_to_snake,
    capitalize_first_letter,
    is_alphabetic,
    is_alphanumeric,
    is_empty_or_whitespace,
    is_valid_email,
    is_valid_phone_number,
    replace_spaces_with_underscores,
    sanitize_file_name,
    slugify,
    snake_to_camel,
    to_lower_case,
    to_title_case,
    to_upper_case,
    trim_spaces,
)
from helperkit.transforms.user_agent import is_mobile

__all__ = [
    "ParseResult",
    "Parsed",
    "Unparsed",
    "camel_to_snake",
    "capitalize_first_letter",
    "censor_email",
    "censor_full_name",
    "censor_phone",
    "censor_word",
    "is_alphabetic",
    "is_alphanumeric",
    "is_empty_or_whitespace",
    "is_mobile",
    "is_valid_email",
    "is_valid_json",
    "is_valid_phone_number",
    "parse_json",
    "replace_spaces_with_underscores",
    "safe_parse",
    "safe_parse_json",
    "sanitize_file_name",
    "slugify",
    "snake_to_camel",
    "to_lower_case",
    "to_title_case",
    "to_upper_case",
    "trim_spaces",
]
