"""Language negotiation for translation loading."""

from helperkit.core.config import I18nConfig


def resolve_language(requested: object, i18n_config: I18nConfig) -> str:
    """Map a requested language tag to a supported language.

    The tag is matched case-insensitively, first as a whole (``"zh"``) and then
    by its primary subtag (``"fr"`` for ``"fr-CA"`` or ``"fr_CA"``).

    Args:
        requested: Language tag such as ``"HI"`` or ``"fr-CA"``.
        i18n_config: Supported languages and fallback.

    Returns:
        str: A supported language code, or the fallback language.
    """
    if not isinstance(requested, str) or not requested.strip():
        return i18n_config.fallback_language

    tag = requested.strip().lower().replace("_", "-")
    if tag in i18n_config.supported_languages:
        return tag

    primary = tag.split("-", 1)[0]
    if primary in i18n_config.supported_languages:
        return primary
    return i18n_config.fallback_language


def translation_path(language: str, i18n_config: I18nConfig) -> str:
    """Render the translation file location for a language."""
    return i18n_config.load_path.replace("{lng}", resolve_language(language, i18n_config))
