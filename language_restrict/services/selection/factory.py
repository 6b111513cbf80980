"""
Selection handler construction.

Handler ids are ``default`` and ``entity_reference_language_restrict``,
optionally suffixed with the target type (``default:node``).
"""

import logging
from typing import Any, Dict, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import ValidationException
from language_restrict.services.entity.entity_type_manager import EntityTypeManager
from language_restrict.services.i18n.language_manager import LanguageManager
from language_restrict.services.selection.base import Localize, SelectionHandler
from language_restrict.services.selection.default_selection import DefaultSelection
from language_restrict.services.selection.language_restrict_selection import LanguageRestrictSelection
from language_restrict.services.user.account_proxy import AccountProxy

logger = logging.getLogger(__name__)

DEFAULT_HANDLER = "default"
LANGUAGE_RESTRICT_HANDLER = "entity_reference_language_restrict"

HANDLERS = (DEFAULT_HANDLER, LANGUAGE_RESTRICT_HANDLER)


def parse_handler_id(handler: str) -> Tuple[str, Optional[str]]:
    """
    Split a handler id into base id and target type.

    Returns:
        (base_id, target_type or None)
    """
    base_id, _, target_type = (handler or DEFAULT_HANDLER).partition(":")
    return base_id, target_type or None


def create_selection_handler(
    configuration: Optional[Dict[str, Any]],
    *,
    entity_type_manager: EntityTypeManager,
    handler: str = DEFAULT_HANDLER,
    db: Optional[AsyncIOMotorDatabase] = None,
    language_manager: Optional[LanguageManager] = None,
    current_user: Optional[AccountProxy] = None,
    localize: Optional[Localize] = None,
    interface_langcode: Optional[str] = None,
) -> SelectionHandler:
    """
    Build a selection handler for one request.

    Args:
        configuration: Stored handler settings
        entity_type_manager: Entity type definitions
        handler: Handler id, optionally with ':<target_type>'
        db: MongoDB connection used to execute queries
        language_manager: Required by the language restricted handler
        current_user: Required by the language restricted handler
        localize: Translation function for form labels
        interface_langcode: Interface language negotiated for the request

    Returns:
        SelectionHandler

    Raises:
        ValidationException: If the handler id is unknown
        ValueError: If a required collaborator is missing
    """
    base_id, target_type = parse_handler_id(handler)
    if base_id not in HANDLERS:
        raise ValidationException(
            message=f"Unknown selection handler '{handler}'",
            code="UNKNOWN_SELECTION_HANDLER",
            details={"handlers": list(HANDLERS)},
        )

    configuration = dict(configuration or {})
    if target_type:
        configuration.setdefault("target_type", target_type)

    base = DefaultSelection(
        configuration,
        entity_type_manager=entity_type_manager,
        db=db,
        localize=localize,
    )
    if base_id == DEFAULT_HANDLER:
        return base

    if language_manager is None or current_user is None:
        raise ValueError(f"{LANGUAGE_RESTRICT_HANDLER} requires language_manager and current_user")

    logger.debug(f"Creating {LANGUAGE_RESTRICT_HANDLER} handler for {configuration.get('target_type')}")
    return LanguageRestrictSelection(
        base,
        language_manager=language_manager,
        current_user=current_user,
        localize=localize,
        interface_langcode=interface_langcode,
    )
