"""User-facing message lookup with language fallback.

Lookup order for ``show_message(key, language)``:

1. the catalog for ``language``, or the default-language catalog when there
   is no catalog for ``language``
2. ``UNKNOWN_MESSAGE`` when that catalog has no (non-empty) entry for ``key``

The requested language's catalog is not merged with the default one: a key
missing from the Hindi catalog yields the sentinel, not the English text.
"""

from collections.abc import Mapping

from loguru import logger

from helperkit.core.constants import UNKNOWN_MESSAGE
from helperkit.messages.catalogs import CATALOGS

type Catalog = Mapping[str, str]


class MessageCatalog:
    """Read-only set of per-language message catalogs.

    Args:
        catalogs: Messages keyed by language code, then message key.
        default_language: Language used when the requested one is missing.
    """

    def __init__(
        self,
        catalogs: Mapping[str, Catalog],
        default_language: str = "en",
    ) -> None:
        self._catalogs = dict(catalogs)
        self.default_language = default_language

    @property
    def languages(self) -> list[str]:
        return list(self._catalogs)

    def catalog_for(self, language: object) -> Catalog:
        """Return the catalog for a language, or the default catalog."""
        if isinstance(language, str) and language in self._catalogs:
            return self._catalogs[language]
        return self._catalogs.get(self.default_language, {})

    def lookup(self, message: object, language: object = "en") -> str:
        if not isinstance(message, str):
            return UNKNOWN_MESSAGE
        text = self.catalog_for(language).get(message)
        if not text:
            logger.trace("No message for key {!r} in language {!r}", message, language)
            return UNKNOWN_MESSAGE
        return text


default_catalog = MessageCatalog(CATALOGS)


def show_message(message: object, language: object = "en") -> str:
    """Return the user-facing text for a message key.

    Args:
        message: Message key, e.g. ``"login_failed"``.
        language: Language code; unknown languages use English.

    Returns:
        str: The message text, or ``"Unknown message"``.
    """
    return default_catalog.lookup(message, language)
