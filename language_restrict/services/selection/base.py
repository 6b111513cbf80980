"""
Abstract selection handler interface.

Defines the contract for entity reference selection handlers: what a
reference field may point to, how candidates are listed for autocomplete
and how submitted references are validated.

Example:
    from language_restrict.services.selection import create_selection_handler

    handler = create_selection_handler(configuration, handler="default", ...)
    matches = await handler.get_referenceable_entities("news", "CONTAINS", limit=10)
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from language_restrict.services.entity.query import EntityQuery

# localize(key, params) -> translated string
Localize = Callable[[str, Dict[str, Any]], str]


class SelectionHandler(ABC):
    """
    Abstract selection handler.

    Implementations own a configuration dict and build entity queries from it.
    """

    @abstractmethod
    def default_configuration(self) -> Dict[str, Any]:
        """
        Default handler settings.

        Returns:
            Settings dict used for keys missing from the stored configuration
        """
        pass

    @abstractmethod
    def get_configuration(self) -> Dict[str, Any]:
        """Effective configuration: defaults overlaid with stored settings."""
        pass

    @abstractmethod
    def build_configuration_form(self) -> Dict[str, Dict[str, Any]]:
        """
        Describe the admin form for this handler.

        Returns:
            Mapping of setting name to form element
            ({type, title, options, defaultValue})
        """
        pass

    @abstractmethod
    def build_entity_query(
        self,
        match: Optional[str] = None,
        match_operator: str = "CONTAINS",
    ) -> EntityQuery:
        """
        Build the query selecting referenceable entities.

        Args:
            match: Text to match against entity labels
            match_operator: Operator used for the label match

        Returns:
            EntityQuery ready to execute
        """
        pass

    @abstractmethod
    async def get_referenceable_entities(
        self,
        match: Optional[str] = None,
        match_operator: str = "CONTAINS",
        limit: int = 0,
    ) -> Dict[str, Dict[str, str]]:
        """
        List referenceable entities grouped by bundle.

        Returns:
            {bundle: {entity_id: label}}
        """
        pass

    @abstractmethod
    async def count_referenceable_entities(
        self,
        match: Optional[str] = None,
        match_operator: str = "CONTAINS",
    ) -> int:
        pass

    @abstractmethod
    async def validate_referenceable_entities(self, ids: List[str]) -> List[str]:
        """
        Filter ids down to those this handler allows.

        Returns:
            Ids from the input that match the handler's query
        """
        pass
