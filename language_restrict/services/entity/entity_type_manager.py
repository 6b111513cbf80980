"""
Entity type definitions.

An entity type maps to one MongoDB collection and declares which document
fields hold its id, bundle, label and language code.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from common.utils.exceptions import NotFoundException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityTypeDefinition:
    """Metadata for one entity type."""
    id: str
    collection: str
    label: str = ""
    keys: Dict[str, str] = field(default_factory=dict)
    bundles: Dict[str, str] = field(default_factory=dict)

    def get_key(self, key: str) -> Optional[str]:
        """
        Get the document field backing an entity key.

        Args:
            key: Entity key name ('id', 'bundle', 'label', 'langcode')

        Returns:
            Field name, or None when the entity type has no such key
        """
        return self.keys.get(key) or None

    def has_key(self, key: str) -> bool:
        return self.get_key(key) is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label or self.id,
            "collection": self.collection,
            "keys": dict(self.keys),
            "bundles": dict(self.bundles),
        }


DEFAULT_ENTITY_TYPES = [
    EntityTypeDefinition(
        id="node",
        collection="nodes",
        label="Content",
        keys={"id": "_id", "bundle": "type", "label": "title", "langcode": "langcode"},
        bundles={"article": "Article", "page": "Basic page"},
    ),
    EntityTypeDefinition(
        id="taxonomy_term",
        collection="taxonomy_terms",
        label="Taxonomy term",
        keys={"id": "_id", "bundle": "vid", "label": "name", "langcode": "langcode"},
        bundles={"tags": "Tags", "categories": "Categories"},
    ),
    EntityTypeDefinition(
        id="media",
        collection="media",
        label="Media",
        keys={"id": "_id", "bundle": "bundle", "label": "name", "langcode": "langcode"},
        bundles={"image": "Image", "document": "Document"},
    ),
    EntityTypeDefinition(
        id="user",
        collection="users",
        label="User",
        keys={"id": "_id", "label": "name", "langcode": "langcode"},
    ),
    EntityTypeDefinition(
        id="redirect",
        collection="redirects",
        label="Redirect",
        keys={"id": "_id", "bundle": "type", "label": "source"},
        bundles={"redirect": "Redirect"},
    ),
]


class EntityTypeManager:
    """
    Registry of entity type definitions.
    """

    def __init__(self, definitions: Optional[List[EntityTypeDefinition]] = None):
        """
        Initialize EntityTypeManager.

        Args:
            definitions: Definitions to register; defaults to the built-in types
        """
        self._definitions: Dict[str, EntityTypeDefinition] = {}
        for definition in definitions if definitions is not None else DEFAULT_ENTITY_TYPES:
            self.register(definition)

    def register(self, definition: EntityTypeDefinition) -> None:
        """Register or replace an entity type definition."""
        if definition.id in self._definitions:
            logger.debug(f"Replacing entity type definition: {definition.id}")
        self._definitions[definition.id] = definition

    def has_definition(self, entity_type_id: str) -> bool:
        return entity_type_id in self._definitions

    def get_definition(self, entity_type_id: str) -> EntityTypeDefinition:
        """
        Get an entity type definition.

        Args:
            entity_type_id: Entity type id (e.g., 'node')

        Returns:
            EntityTypeDefinition

        Raises:
            NotFoundException: If the entity type is not registered
        """
        definition = self._definitions.get(entity_type_id)
        if definition is None:
            raise NotFoundException(
                message=f"Entity type '{entity_type_id}' does not exist",
                code="ENTITY_TYPE_NOT_FOUND",
            )
        return definition

    def get_definitions(self) -> List[EntityTypeDefinition]:
        return list(self._definitions.values())

    def get_language_attribute_key(self, entity_type_id: str) -> Optional[str]:
        """
        Get the field storing an entity type's language code.

        Returns:
            Field name, or None when the entity type is not translatable
            or not registered
        """
        definition = self._definitions.get(entity_type_id)
        if definition is None:
            return None
        return definition.get_key("langcode")
