"""
Entity query builder.

Collects conditions against one entity type and compiles them into a
MongoDB filter executed through Motor. Conditions are ANDed together.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId

from common.utils.exceptions import ValidationException
from language_restrict.services.entity.entity_type_manager import EntityTypeDefinition

logger = logging.getLogger(__name__)

OPERATORS = (
    "=",
    "<>",
    "IN",
    "NOT IN",
    "CONTAINS",
    "STARTS_WITH",
    "ENDS_WITH",
    ">",
    ">=",
    "<",
    "<=",
)

_COMPARISONS = {">": "$gt", ">=": "$gte", "<": "$lt", "<=": "$lte"}


@dataclass(frozen=True)
class Condition:
    field: str
    value: Any
    operator: str = "="


class EntityQuery:
    """
    Conditions, sort and range for one entity type.

    Identical conditions are stored once, so adding the same condition
    again leaves the query unchanged.
    """

    def __init__(self, entity_type: EntityTypeDefinition, collection=None):
        """
        Initialize EntityQuery.

        Args:
            entity_type: Entity type being queried
            collection: Motor collection for execution (optional for building only)
        """
        self._entity_type = entity_type
        self._collection = collection
        self._conditions: List[Condition] = []
        self._sort: List[Tuple[str, int]] = []
        self._start = 0
        self._length: Optional[int] = None

    @property
    def entity_type(self) -> EntityTypeDefinition:
        return self._entity_type

    @property
    def conditions(self) -> Tuple[Condition, ...]:
        return tuple(self._conditions)

    def condition(self, field: str, value: Any, operator: str = "=") -> "EntityQuery":
        """
        Add a condition.

        Args:
            field: Document field name
            value: Value to compare against (a list for IN / NOT IN)
            operator: One of OPERATORS

        Returns:
            This query, for chaining

        Raises:
            ValidationException: If the operator is not supported
        """
        operator = (operator or "=").upper()
        if operator not in OPERATORS:
            raise ValidationException(
                message=f"Unsupported query operator '{operator}'",
                code="INVALID_QUERY_OPERATOR",
                details={"operators": list(OPERATORS)},
            )

        condition = Condition(field=field, value=value, operator=operator)
        if condition not in self._conditions:
            self._conditions.append(condition)
        return self

    def sort(self, field: str, direction: str = "ASC") -> "EntityQuery":
        self._sort.append((field, -1 if direction.upper() == "DESC" else 1))
        return self

    def range(self, start: int = 0, length: Optional[int] = None) -> "EntityQuery":
        self._start = max(start, 0)
        self._length = length if length and length > 0 else None
        return self

    def _coerce(self, field: str, value: Any) -> Any:
        # Id fields are stored as ObjectId; accept their hex form
        if field != self._entity_type.get_key("id"):
            return value
        if isinstance(value, (list, tuple, set)):
            return [self._coerce(field, item) for item in value]
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        return value

    def _compile(self, condition: Condition) -> Dict[str, Any]:
        field = condition.field
        value = self._coerce(field, condition.value)
        operator = condition.operator

        if operator == "=":
            return {field: value}
        if operator == "<>":
            return {field: {"$ne": value}}
        if operator == "IN":
            return {field: {"$in": list(value)}}
        if operator == "NOT IN":
            return {field: {"$nin": list(value)}}
        if operator in _COMPARISONS:
            return {field: {_COMPARISONS[operator]: value}}

        pattern = re.escape(str(value))
        if operator == "STARTS_WITH":
            pattern = f"^{pattern}"
        elif operator == "ENDS_WITH":
            pattern = f"{pattern}$"
        return {field: {"$regex": pattern, "$options": "i"}}

    def to_filter(self) -> Dict[str, Any]:
        """
        Compile conditions to a MongoDB filter.

        Returns:
            {} with no conditions, the single clause, or {"$and": [...]}
        """
        clauses = [self._compile(condition) for condition in self._conditions]
        if not clauses:
            return {}
        if len(clauses) == 1:
            return clauses[0]
        return {"$and": clauses}

    def _require_collection(self):
        if self._collection is None:
            raise RuntimeError(f"Query for '{self._entity_type.id}' has no collection to execute against")
        return self._collection

    async def execute(self) -> List[Dict[str, Any]]:
        """
        Run the query.

        Returns:
            Matching documents
        """
        collection = self._require_collection()
        mongo_filter = self.to_filter()
        logger.debug(f"Executing {self._entity_type.id} query: {mongo_filter}")

        cursor = collection.find(mongo_filter)
        if self._sort:
            cursor = cursor.sort(self._sort)
        if self._start:
            cursor = cursor.skip(self._start)
        if self._length:
            cursor = cursor.limit(self._length)
        return await cursor.to_list(length=self._length)

    async def count(self) -> int:
        """Count matching documents, ignoring range."""
        collection = self._require_collection()
        return await collection.count_documents(self.to_filter())
