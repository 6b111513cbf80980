"""
Acting user wrapper.

Wraps the user dict attached to the request (``request.state.user``) and
answers the questions selection handlers ask about it.
"""

import logging
from typing import Any, Dict, Optional

from language_restrict.services.i18n.language_manager import LanguageManager

logger = logging.getLogger(__name__)


class AccountProxy:
    """
    Request-scoped view of the acting user.

    An empty or missing user dict is the anonymous user.
    """

    def __init__(
        self,
        user: Optional[Dict[str, Any]],
        language_manager: LanguageManager,
    ):
        self._user = user or {}
        self._language_manager = language_manager

    @property
    def id(self) -> Optional[str]:
        user_id = self._user.get("_id") or self._user.get("id")
        return str(user_id) if user_id is not None else None

    @property
    def is_authenticated(self) -> bool:
        return self.id is not None

    def get_preferred_langcode(self) -> str:
        """
        Get the user's preferred language code.

        Returns:
            profile.preferredLanguage when it names a known language,
            otherwise an empty string
        """
        profile = self._user.get("profile") or {}
        preferred = profile.get("preferredLanguage") or ""

        if preferred and self._language_manager.get_language(preferred) is None:
            logger.debug(f"Ignoring unknown preferred language '{preferred}' for user {self.id}")
            return ""

        return preferred
