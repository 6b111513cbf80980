"""
Selection pipeline functions.

Stateless orchestration over a request's selection handler.
"""

import logging
from typing import Any, Dict, List, Optional

from language_restrict.services.selection.base import SelectionHandler

logger = logging.getLogger(__name__)


async def autocomplete_pipeline(
    handler: SelectionHandler,
    match: Optional[str] = None,
    match_operator: str = "CONTAINS",
    limit: int = 10
) -> List[Dict[str, str]]:
    """
    List referenceable entities matching a typed string.

    Args:
        handler: Selection handler for the field
        match: Typed text, None lists everything
        match_operator: Label match operator
        limit: Maximum number of matches

    Returns:
        List of {id, label, bundle} dicts
    """
    grouped = await handler.get_referenceable_entities(match, match_operator, limit)

    matches = []
    for bundle, entities in grouped.items():
        for entity_id, label in entities.items():
            matches.append({"id": entity_id, "label": label, "bundle": bundle})

    logger.debug(f"Autocomplete for '{match}' returned {len(matches)} matches")
    return matches


async def validate_references_pipeline(
    handler: SelectionHandler,
    ids: List[str]
) -> Dict[str, Any]:
    """
    Split submitted reference ids into allowed and rejected.

    Args:
        handler: Selection handler for the field
        ids: Submitted entity ids

    Returns:
        Dict with valid and invalid id lists
    """
    valid = await handler.validate_referenceable_entities(ids)
    valid_set = set(valid)
    invalid = [entity_id for entity_id in ids if entity_id not in valid_set]

    if invalid:
        logger.info(f"Rejected {len(invalid)} of {len(ids)} referenced ids")

    return {"valid": valid, "invalid": invalid}
