"""Mobile browser detection from a User-Agent header."""

import re
from typing import Final

MOBILE_USER_AGENT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"android|bb\d+|meego|mobile|avantgo|blackberry|blazer|compal|elaine|fennec|"
    r"hiptop|iemobile|iphone|ipod|iris|kindle|lge|maemo|midp|mmp|opera m(ob|in)i|"
    r"palm|phone|plucker|pocket|psp|series(4|6)0|symbian|treo|up\.(browser|link)|"
    r"vodafone|wap|windows ce|xda|xiino|ipad|playbook|silk",
    re.IGNORECASE,
)


def is_mobile(user_agent: object) -> bool:
    """Check whether a User-Agent string belongs to a mobile browser.

    Args:
        user_agent: The raw User-Agent header value.

    Returns:
        bool: True for mobile and tablet browsers; False for desktop
        browsers, empty values and non-string input.
    """
    if not isinstance(user_agent, str) or not user_agent:
        return False
    return MOBILE_USER_AGENT_PATTERN.search(user_agent) is not None
