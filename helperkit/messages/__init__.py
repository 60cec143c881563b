"""Message catalog lookup and language resolution."""

from helperkit.messages.catalog import MessageCatalog, default_catalog, show_message
from helperkit.messages.i18n import resolve_language, translation_path

__all__ = [
    "MessageCatalog",
    "default_catalog",
    "resolve_language",
    "show_message",
    "translation_path",
]
