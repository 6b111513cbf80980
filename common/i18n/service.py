"""
Generic internationalization (i18n) service.

Provides translation loading and lookup with support for:
- Multiple languages with fallback to the default language
- Nested translation keys (dot notation)
- Variable interpolation, also applied to caller-supplied defaults

Translations are loaded at startup from JSON files.

Example:
    # Directory structure:
    # locales/
    #   en/
    #     selection.json
    #   sv/
    #     selection.json

    from common.i18n import I18nService

    i18n = I18nService(
        locales_dir="./locales",
        default_language="en",
    )

    # Simple translation
    title = i18n.t("selection.language_restriction.title", language="sv")

    # With interpolation and an inline default
    label = i18n.t(
        "selection.language_restriction.site_default",
        language="en",
        default="Site's default language ({language_name})",
        language_name="English",
    )

    # Bound to one language, for injection into presentation code
    localize = i18n.localizer("sv")
    localize("selection.language_restriction.none", {})
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class I18nService:
    """
    Generic internationalization service.

    Loads translations from JSON files at startup and provides
    fast lookup with fallback to default language.
    """

    def __init__(
        self,
        locales_dir: str,
        default_language: str = "en",
        supported_languages: Optional[List[str]] = None,
        fallback_to_key: bool = True,
    ):
        """
        Initialize i18n service.

        Args:
            locales_dir: Path to the locales directory
            default_language: Default language code for fallback
            supported_languages: List of supported language codes.
                If None, auto-detects from directory structure.
            fallback_to_key: If True, return the key when translation not found
        """
        self.locales_dir = Path(locales_dir)
        self.default_language = default_language
        self.fallback_to_key = fallback_to_key
        self.translations: Dict[str, Dict[str, Any]] = {}
        self._configured_languages = supported_languages

        if supported_languages:
            self.supported_languages = list(supported_languages)
        else:
            self.supported_languages = self._detect_languages()

        self._load_translations()

    def _detect_languages(self) -> List[str]:
        """Detect available languages from directory structure."""
        if not self.locales_dir.exists():
            return [self.default_language]

        languages = []
        for path in sorted(self.locales_dir.iterdir()):
            if path.is_dir() and not path.name.startswith("."):
                languages.append(path.name)

        return languages if languages else [self.default_language]

    def _load_translations(self) -> None:
        """Load all translation files at startup."""
        for lang in self.supported_languages:
            self.translations[lang] = {}
            lang_dir = self.locales_dir / lang

            if not lang_dir.exists():
                logger.debug(f"Locales directory not found: {lang_dir}")
                continue

            for file_path in lang_dir.glob("*.json"):
                namespace = file_path.stem
                try:
                    with open(file_path, "r", encoding="utf-8") as f:
                        self.translations[lang][namespace] = json.load(f)
                except json.JSONDecodeError as e:
                    logger.warning(f"Failed to parse {file_path}: {e}")
                except IOError as e:
                    logger.warning(f"Failed to read {file_path}: {e}")

        logger.info(
            f"Loaded translations for {len(self.supported_languages)} languages from {self.locales_dir}"
        )

    def _get_nested(
        self,
        data: Dict[str, Any],
        path: List[str],
    ) -> Optional[Any]:
        """Navigate nested dictionary using path list."""
        current = data
        for key in path:
            if not isinstance(current, dict):
                return None
            if key not in current:
                return None
            current = current[key]
        return current

    def _lookup(self, lang: str, key: str) -> Optional[Any]:
        parts = key.split(".")
        if len(parts) < 2:
            return None
        namespace, path = parts[0], parts[1:]
        return self._get_nested(self.translations.get(lang, {}).get(namespace, {}), path)

    @staticmethod
    def _interpolate(text: str, params: Dict[str, Any]) -> str:
        result = text
        for var_name, var_value in params.items():
            # Support both {{var}} and {var} formats
            result = result.replace(f"{{{{{var_name}}}}}", str(var_value))
            result = result.replace(f"{{{var_name}}}", str(var_value))
        return result

    def t(
        self,
        key: str,
        language: Optional[str] = None,
        **options: Any,
    ) -> str:
        """
        Get translation by dot-notation key.

        Args:
            key: Dot notation key (e.g., 'selection.language_restriction.title')
                First part is the namespace (filename without .json)
            language: Language code (falls back to default if not supported)
            **options: Interpolation values. The special key ``default`` is
                used when the key is not found in any language.

        Returns:
            Translated string, the interpolated default, or the key
        """
        default = options.pop("default", None)
        return self._translate(key, language, options, default)

    def _translate(
        self,
        key: str,
        language: Optional[str],
        params: Dict[str, Any],
        default: Optional[str] = None,
    ) -> str:
        lang = language if language in self.supported_languages else self.default_language

        value = self._lookup(lang, key)

        if value is None and lang != self.default_language:
            value = self._lookup(self.default_language, key)

        if value is None:
            if default is not None:
                return self._interpolate(default, params)
            logger.debug(f"Translation not found: {key} ({lang})")
            return key if self.fallback_to_key else ""

        if not isinstance(value, str):
            return str(value)

        return self._interpolate(value, params)

    def localizer(
        self,
        language: Optional[str] = None,
        defaults: Optional[Dict[str, str]] = None,
    ) -> Callable[[str, Dict[str, Any]], str]:
        """
        Bind lookups to one language.

        Args:
            language: Language code for every lookup
            defaults: Fallback templates keyed by translation key

        Returns:
            Function ``localize(key, params) -> str``
        """
        defaults = defaults or {}

        def localize(key: str, params: Optional[Dict[str, Any]] = None) -> str:
            return self._translate(key, language, dict(params or {}), defaults.get(key))

        return localize

    def reload(self) -> None:
        """Reload all translations from disk."""
        self.translations.clear()
        if self._configured_languages:
            self.supported_languages = list(self._configured_languages)
        else:
            self.supported_languages = self._detect_languages()
        self._load_translations()
