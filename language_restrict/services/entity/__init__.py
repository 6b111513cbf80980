"""Entity services."""

from language_restrict.services.entity.entity_type_manager import (
    EntityTypeDefinition,
    EntityTypeManager,
    DEFAULT_ENTITY_TYPES,
)
from language_restrict.services.entity.query import EntityQuery, Condition, OPERATORS

__all__ = [
    "EntityTypeDefinition",
    "EntityTypeManager",
    "DEFAULT_ENTITY_TYPES",
    "EntityQuery",
    "Condition",
    "OPERATORS",
]
