"""
Entity reference selection with language restriction.

Wraps DefaultSelection and adds the ``language_restriction`` setting:
referenceable entities are limited to the language the setting resolves
to for the current request.
"""

import logging
from typing import Any, Dict, List, Optional

from language_restrict.services.entity.query import EntityQuery
from language_restrict.services.i18n.language_manager import LanguageManager
from language_restrict.services.selection.base import Localize, SelectionHandler
from language_restrict.services.selection.default_selection import DefaultSelection
from language_restrict.services.selection.language_restriction import (
    NO_RESTRICTION,
    ResolutionContext,
    apply_language_filter,
    list_restriction_options,
    resolve_language_code,
)
from language_restrict.services.selection.messages import default_localize
from language_restrict.services.user.account_proxy import AccountProxy

logger = logging.getLogger(__name__)


class LanguageRestrictSelection(SelectionHandler):
    """
    Selection handler restricting referenceable entities by language.

    Bundle, label match and sort handling come from the wrapped
    DefaultSelection.
    """

    def __init__(
        self,
        base: DefaultSelection,
        language_manager: LanguageManager,
        current_user: AccountProxy,
        localize: Optional[Localize] = None,
        interface_langcode: Optional[str] = None,
    ):
        """
        Initialize LanguageRestrictSelection.

        Args:
            base: Default selection built from the same configuration
            language_manager: Language list and default language
            current_user: Acting user of the request
            localize: Translation function for form labels
            interface_langcode: Interface language negotiated for the request
        """
        self._base = base
        self._language_manager = language_manager
        self._current_user = current_user
        self._localize = localize or default_localize
        self._interface_langcode = interface_langcode

    def default_configuration(self) -> Dict[str, Any]:
        return {
            **self._base.default_configuration(),
            "language_restriction": NO_RESTRICTION,
        }

    def get_configuration(self) -> Dict[str, Any]:
        return {"language_restriction": NO_RESTRICTION, **self._base.get_configuration()}

    def get_language_restriction_options(self) -> Dict[str, str]:
        """Options for the language_restriction select, in display order."""
        return list_restriction_options(
            self._language_manager.get_languages(include_locked=True),
            self._language_manager.get_default_language().name,
            self._localize,
        )

    def build_configuration_form(self) -> Dict[str, Dict[str, Any]]:
        form = self._base.build_configuration_form()
        form["language_restriction"] = {
            "type": "select",
            "title": self._localize("selection.language_restriction.title", {}),
            "options": self.get_language_restriction_options(),
            "defaultValue": self.get_configuration()["language_restriction"],
        }
        return form

    def get_resolution_context(self) -> ResolutionContext:
        """Languages of the current request, read fresh from the collaborators."""
        return ResolutionContext(
            current_interface_langcode=self._language_manager.get_current_language(
                self._interface_langcode
            ).code,
            site_default_langcode=self._language_manager.get_default_language().code,
            preferred_langcode=self._current_user.get_preferred_langcode(),
        )

    def get_language_restriction(self) -> str:
        """
        Resolve the configured restriction for this request.

        Returns:
            Language code to filter on, or "" for no restriction
        """
        configured = self.get_configuration().get("language_restriction") or NO_RESTRICTION
        if not configured:
            return ""

        langcode = resolve_language_code(configured, self.get_resolution_context())
        logger.debug(f"Language restriction '{configured}' resolved to '{langcode}'")
        return langcode

    def build_entity_query(
        self,
        match: Optional[str] = None,
        match_operator: str = "CONTAINS",
    ) -> EntityQuery:
        query = self._base.build_entity_query(match, match_operator)
        target_type = self.get_configuration()["target_type"]
        langcode = self.get_language_restriction()
        langcode_key = self._base.entity_type_manager.get_language_attribute_key(target_type)
        return apply_language_filter(query, langcode_key, langcode)

    async def get_referenceable_entities(
        self,
        match: Optional[str] = None,
        match_operator: str = "CONTAINS",
        limit: int = 0,
    ) -> Dict[str, Dict[str, str]]:
        return await self._base.load_referenceable(self.build_entity_query(match, match_operator), limit)

    async def count_referenceable_entities(
        self,
        match: Optional[str] = None,
        match_operator: str = "CONTAINS",
    ) -> int:
        return await self._base.count_query(self.build_entity_query(match, match_operator))

    async def validate_referenceable_entities(self, ids: List[str]) -> List[str]:
        return await self._base.validate_with_query(self.build_entity_query(), ids)
