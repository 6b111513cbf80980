"""
Default entity reference selection.

Selects entities of one target type, optionally narrowed to some bundles,
matched on the label and sorted by a configured field.
"""

import html
import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import ValidationException
from language_restrict.services.entity.entity_type_manager import (
    EntityTypeDefinition,
    EntityTypeManager,
)
from language_restrict.services.entity.query import EntityQuery
from language_restrict.services.selection.base import Localize, SelectionHandler
from language_restrict.services.selection.messages import default_localize

logger = logging.getLogger(__name__)

SORT_NONE = "_none"


class DefaultSelection(SelectionHandler):
    """
    Generic selection handler for any entity type.

    Query execution helpers take a prebuilt query so that handlers
    composing this one can run their own query through them.
    """

    def __init__(
        self,
        configuration: Optional[Dict[str, Any]],
        entity_type_manager: EntityTypeManager,
        db: Optional[AsyncIOMotorDatabase] = None,
        localize: Optional[Localize] = None,
    ):
        """
        Initialize DefaultSelection.

        Args:
            configuration: Stored handler settings
            entity_type_manager: Entity type definitions
            db: MongoDB connection used to execute queries
            localize: Translation function for form labels
        """
        self._entity_type_manager = entity_type_manager
        self._db = db
        self._localize = localize or default_localize
        self._configuration = {**self.default_configuration(), **(configuration or {})}

    @property
    def entity_type_manager(self) -> EntityTypeManager:
        return self._entity_type_manager

    def default_configuration(self) -> Dict[str, Any]:
        return {
            "target_type": None,
            "target_bundles": None,
            "sort": {"field": SORT_NONE, "direction": "ASC"},
            "auto_create": False,
            "auto_create_bundle": None,
        }

    def get_configuration(self) -> Dict[str, Any]:
        return dict(self._configuration)

    def get_target_type(self) -> EntityTypeDefinition:
        """
        Get the definition of the configured target type.

        Raises:
            ValidationException: If no target type is configured
            NotFoundException: If the target type is not registered
        """
        target_type = self._configuration.get("target_type")
        if not target_type:
            raise ValidationException(
                message="Selection handler has no target type",
                code="TARGET_TYPE_REQUIRED",
            )
        return self._entity_type_manager.get_definition(target_type)

    def build_configuration_form(self) -> Dict[str, Dict[str, Any]]:
        entity_type = self.get_target_type()
        configuration = self._configuration
        sort = configuration.get("sort") or {}
        form: Dict[str, Dict[str, Any]] = {}

        if entity_type.has_key("bundle"):
            form["target_bundles"] = {
                "type": "checkboxes",
                "title": self._localize("selection.default.target_bundles", {}),
                "options": dict(entity_type.bundles),
                "defaultValue": configuration.get("target_bundles") or [],
            }

        sort_options = {SORT_NONE: self._localize("selection.default.sort_none", {})}
        for key in ("label", "langcode", "bundle"):
            field_name = entity_type.get_key(key)
            if field_name:
                sort_options[field_name] = field_name
        sort_options.setdefault("created_at", "created_at")

        form["sort_field"] = {
            "type": "select",
            "title": self._localize("selection.default.sort_field", {}),
            "options": sort_options,
            "defaultValue": sort.get("field", SORT_NONE),
        }
        form["sort_direction"] = {
            "type": "select",
            "title": self._localize("selection.default.sort_direction", {}),
            "options": {
                "ASC": self._localize("selection.default.sort_asc", {}),
                "DESC": self._localize("selection.default.sort_desc", {}),
            },
            "defaultValue": sort.get("direction", "ASC"),
        }
        form["auto_create"] = {
            "type": "checkbox",
            "title": self._localize("selection.default.auto_create", {}),
            "options": {},
            "defaultValue": bool(configuration.get("auto_create")),
        }
        return form

    def build_entity_query(
        self,
        match: Optional[str] = None,
        match_operator: str = "CONTAINS",
    ) -> EntityQuery:
        entity_type = self.get_target_type()
        configuration = self._configuration
        collection = self._db[entity_type.collection] if self._db is not None else None
        query = EntityQuery(entity_type, collection)

        target_bundles = configuration.get("target_bundles")
        if target_bundles is not None:
            # An empty bundle list allows nothing
            if not target_bundles:
                query.condition(entity_type.get_key("id") or "_id", None)
                return query
            bundle_key = entity_type.get_key("bundle")
            if bundle_key:
                query.condition(bundle_key, list(target_bundles), "IN")

        label_key = entity_type.get_key("label")
        if match is not None and label_key:
            query.condition(label_key, match, match_operator)

        sort = configuration.get("sort") or {}
        sort_field = sort.get("field", SORT_NONE)
        if sort_field and sort_field != SORT_NONE:
            query.sort(sort_field, sort.get("direction", "ASC"))

        return query

    async def load_referenceable(
        self,
        query: EntityQuery,
        limit: int = 0,
    ) -> Dict[str, Dict[str, str]]:
        """
        Execute a query and group results by bundle.

        Args:
            query: Query to execute
            limit: Maximum number of entities, 0 for no limit

        Returns:
            {bundle: {entity_id: escaped_label}}
        """
        if limit > 0:
            query.range(0, limit)

        entity_type = query.entity_type
        id_key = entity_type.get_key("id") or "_id"
        bundle_key = entity_type.get_key("bundle")
        label_key = entity_type.get_key("label")

        documents = await query.execute()

        options: Dict[str, Dict[str, str]] = {}
        for document in documents:
            bundle = (document.get(bundle_key) if bundle_key else None) or entity_type.id
            label = document.get(label_key, "") if label_key else ""
            options.setdefault(bundle, {})[str(document.get(id_key))] = html.escape(str(label or ""))

        logger.debug(f"Loaded {len(documents)} referenceable {entity_type.id} entities")
        return options

    async def count_query(self, query: EntityQuery) -> int:
        return await query.count()

    async def validate_with_query(self, query: EntityQuery, ids: List[str]) -> List[str]:
        """
        Keep the ids that also satisfy a query.

        Args:
            query: Handler query to intersect with
            ids: Candidate entity ids

        Returns:
            Ids from the input, in input order, that the query returns
        """
        if not ids:
            return []

        id_key = query.entity_type.get_key("id") or "_id"
        query.condition(id_key, [str(entity_id) for entity_id in ids], "IN")
        documents = await query.execute()

        found = {str(document.get(id_key)) for document in documents}
        return [entity_id for entity_id in ids if str(entity_id) in found]

    async def get_referenceable_entities(
        self,
        match: Optional[str] = None,
        match_operator: str = "CONTAINS",
        limit: int = 0,
    ) -> Dict[str, Dict[str, str]]:
        return await self.load_referenceable(self.build_entity_query(match, match_operator), limit)

    async def count_referenceable_entities(
        self,
        match: Optional[str] = None,
        match_operator: str = "CONTAINS",
    ) -> int:
        return await self.count_query(self.build_entity_query(match, match_operator))

    async def validate_referenceable_entities(self, ids: List[str]) -> List[str]:
        return await self.validate_with_query(self.build_entity_query(), ids)
