"""
Language manager service.

Manages configurable languages, the locked special-purpose languages and
the default language. Supports the built-in list or the languages
collection as source.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)

# Special language codes
LANGCODE_NOT_SPECIFIED = "und"
LANGCODE_NOT_APPLICABLE = "zxx"


@dataclass(frozen=True)
class Language:
    """A language known to the site."""
    code: str
    name: str
    locked: bool = False
    is_default: bool = False
    weight: int = 0

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "locked": self.locked,
            "isDefault": self.is_default,
            "weight": self.weight,
        }


class LanguageManager:
    """
    Language list and default/current language lookup.

    Configurable languages keep their configured order and are followed by
    the locked languages.
    """

    LANGUAGES = [
        {"code": "en", "name": "English", "isDefault": True},
        {"code": "sv", "name": "Swedish", "isDefault": False},
        {"code": "de", "name": "German", "isDefault": False},
        {"code": "fr", "name": "French", "isDefault": False},
        {"code": "es", "name": "Spanish", "isDefault": False},
        {"code": "it", "name": "Italian", "isDefault": False},
    ]

    LOCKED_LANGUAGES = [
        {"code": LANGCODE_NOT_SPECIFIED, "name": "Not specified"},
        {"code": LANGCODE_NOT_APPLICABLE, "name": "Not applicable"},
    ]

    def __init__(
        self,
        db: Optional[AsyncIOMotorDatabase] = None,
        source_mode: str = "file",
        supported_languages: Optional[List[str]] = None,
        default_language: Optional[str] = None,
    ):
        """
        Initialize LanguageManager.

        Args:
            db: MongoDB database connection (for database mode)
            source_mode: "file" or "database"
            supported_languages: Codes to keep from the built-in list, in order
            default_language: Code overriding the built-in default flag
        """
        self._db = db
        self._source_mode = source_mode
        self._supported_languages = supported_languages
        self._default_language = default_language
        self._languages_collection = db["languages"] if source_mode == "database" and db is not None else None
        self._languages: List[Language] = self._from_records(self.LANGUAGES)

    def _from_records(self, records: List[dict]) -> List[Language]:
        if self._supported_languages:
            by_code = {record["code"]: record for record in records}
            records = [by_code[code] for code in self._supported_languages if code in by_code]

        languages = []
        for index, record in enumerate(records):
            code = record["code"]
            if self._default_language:
                is_default = code == self._default_language
            else:
                is_default = bool(record.get("isDefault", False))
            languages.append(
                Language(
                    code=code,
                    name=record.get("name", code),
                    locked=False,
                    is_default=is_default,
                    weight=record.get("weight", index),
                )
            )
        return languages

    def _locked(self) -> List[Language]:
        offset = len(self._languages)
        return [
            Language(code=record["code"], name=record["name"], locked=True, weight=offset + index)
            for index, record in enumerate(self.LOCKED_LANGUAGES)
        ]

    def get_languages(self, include_locked: bool = True) -> List[Language]:
        """
        Get languages in display order.

        Args:
            include_locked: Append the locked languages (und, zxx)

        Returns:
            List of Language
        """
        languages = list(self._languages)
        if include_locked:
            languages.extend(self._locked())
        return languages

    def get_languages_by_code(self, include_locked: bool = True) -> Dict[str, Language]:
        return {language.code: language for language in self.get_languages(include_locked)}

    def get_language(self, code: str) -> Optional[Language]:
        """Get a language by code, locked languages included."""
        return self.get_languages_by_code().get(code)

    def get_default_language(self) -> Language:
        """
        Get the site default language.

        Returns:
            The flagged default, else the first configurable language,
            else English
        """
        for language in self._languages:
            if language.is_default:
                return language
        if self._languages:
            return self._languages[0]
        return Language(code="en", name="English", is_default=True)

    def get_current_language(self, langcode: Optional[str] = None) -> Language:
        """
        Get the interface language of the current request.

        Args:
            langcode: Language negotiated for the request

        Returns:
            The matching configurable language, or the default language
        """
        if langcode:
            for language in self._languages:
                if language.code == langcode:
                    return language
        return self.get_default_language()

    def is_supported(self, code: str) -> bool:
        """Check if a code names a configurable language."""
        return any(language.code == code for language in self._languages)

    async def reload(self) -> None:
        """
        Reload language configuration from source.
        Used when the languages collection is updated.
        """
        if self._languages_collection is not None:
            cursor = self._languages_collection.find({"enabled": True})
            cursor = cursor.sort("weight", 1)
            records = await cursor.to_list(length=None)
            self._languages = self._from_records(records)
            logger.info(f"Reloaded {len(self._languages)} languages from database")
        else:
            self._languages = self._from_records(self.LANGUAGES)
            logger.info("Reloaded languages from config")
