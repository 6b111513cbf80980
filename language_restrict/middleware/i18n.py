"""
i18n middleware for request-scoped language detection and translation.

Attaches the interface language and a translation helper to requests.
"""

import logging
from typing import Optional, Callable

from fastapi import Request

from common.i18n.service import I18nService
from language_restrict.services.i18n.language_manager import LanguageManager
from language_restrict.services.selection.messages import MESSAGES

logger = logging.getLogger(__name__)


class I18nMiddleware:
    """
    FastAPI middleware for request-scoped i18n.
    Attaches request.state.language and request.state.t to all requests.
    """

    def __init__(
        self,
        i18n_service: I18nService,
        language_manager: LanguageManager
    ):
        """
        Initialize I18nMiddleware.

        Args:
            i18n_service: Translation service instance
            language_manager: For supported language lookup
        """
        self._i18n_service = i18n_service
        self._language_manager = language_manager

    async def __call__(self, request: Request, call_next: Callable):
        """
        Middleware function that attaches language to request.

        Attaches:
            - request.state.language: negotiated interface language code
            - request.state.t: localize(key, params) bound to that language
        """
        language = self.get_language_from_request(request)
        request.state.language = language
        request.state.t = self._i18n_service.localizer(language, defaults=MESSAGES)

        response = await call_next(request)
        response.headers["Content-Language"] = language
        return response

    def get_language_from_request(self, request: Request) -> str:
        """
        Negotiate the interface language for a request.

        Args:
            request: HTTP request object

        Returns:
            Language code (e.g., 'en', 'sv')

        Priority:
            1. ?language= query parameter
            2. request.state.user.profile.preferredLanguage (if authenticated)
            3. Accept-Language header (primary language)
            4. Site default language
        """
        requested = request.query_params.get("language")
        if requested and self._language_manager.is_supported(requested):
            return requested

        user = getattr(request.state, "user", None)
        if user:
            profile = user.get("profile", {}) or {}
            preferred = profile.get("preferredLanguage")
            if preferred and self._language_manager.is_supported(preferred):
                return preferred

        accept_language = request.headers.get("Accept-Language")
        if accept_language:
            parsed = self._parse_accept_language(accept_language)
            if parsed and self._language_manager.is_supported(parsed):
                return parsed

        return self._language_manager.get_default_language().code

    def _parse_accept_language(self, header: str) -> Optional[str]:
        """
        Parse Accept-Language header to extract primary language.

        Args:
            header: Accept-Language header value
                e.g., "sv-SE,sv;q=0.9,en;q=0.8"

        Returns:
            Primary language code (e.g., 'sv'), or None if invalid
        """
        if not header:
            return None

        primary = header.split(",")[0].strip()
        lang = primary.split(";")[0].strip()
        lang = lang.split("-")[0].strip()

        return lang.lower() if lang else None
