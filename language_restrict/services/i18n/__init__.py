"""i18n services."""

from language_restrict.services.i18n.language_manager import (
    Language,
    LanguageManager,
    LANGCODE_NOT_SPECIFIED,
    LANGCODE_NOT_APPLICABLE,
)

__all__ = [
    "Language",
    "LanguageManager",
    "LANGCODE_NOT_SPECIFIED",
    "LANGCODE_NOT_APPLICABLE",
]
