"""
Pipelines for reference field configuration.

Stores each reference field's selection handler and handler settings in
the 'referencefields' collection.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import NotFoundException, ValidationException
from language_restrict.services.entity.entity_type_manager import EntityTypeManager
from language_restrict.services.i18n.language_manager import LanguageManager
from language_restrict.services.selection.factory import (
    HANDLERS,
    LANGUAGE_RESTRICT_HANDLER,
    parse_handler_id,
)
from language_restrict.services.selection.language_restriction import list_restriction_options

logger = logging.getLogger(__name__)

COLLECTION = "referencefields"


async def get_field_config_pipeline(
    db: AsyncIOMotorDatabase,
    field_name: str
) -> Dict[str, Any]:
    """
    Get a reference field's selection configuration.

    Args:
        db: MongoDB database connection
        field_name: Machine name of the reference field

    Returns:
        Dict with fieldName, handler and handlerSettings

    Raises:
        NotFoundException: If the field has no stored configuration
    """
    collection = db[COLLECTION]

    doc = await collection.find_one(
        {"fieldName": field_name},
        {"_id": 0, "fieldName": 1, "handler": 1, "handlerSettings": 1}
    )

    if not doc:
        raise NotFoundException(
            message=f"Reference field '{field_name}' not found",
            code="FIELD_NOT_FOUND"
        )

    return {
        "fieldName": doc["fieldName"],
        "handler": doc.get("handler", "default"),
        "handlerSettings": doc.get("handlerSettings", {}),
    }


async def save_field_config_pipeline(
    db: AsyncIOMotorDatabase,
    entity_type_manager: EntityTypeManager,
    language_manager: LanguageManager,
    field_name: str,
    handler: str,
    handler_settings: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Create or update a reference field's selection configuration.

    Args:
        db: MongoDB database connection
        entity_type_manager: For target type validation
        language_manager: For the language restriction option set
        field_name: Machine name of the reference field
        handler: Selection handler id
        handler_settings: Handler settings to store

    Returns:
        Dict with the stored configuration

    Raises:
        ValidationException: If the handler, target type or language
            restriction is not one of the offered values, or if
            the handler's target type suffix disagrees with target_type
    """
    collection = db[COLLECTION]

    base_id, suffix_target = parse_handler_id(handler)
    if base_id not in HANDLERS:
        raise ValidationException(
            message=f"Invalid handler '{handler}'. Must be one of: {', '.join(HANDLERS)}",
            code="UNKNOWN_SELECTION_HANDLER"
        )

    settings = dict(handler_settings)
    target_type = settings.get("target_type")
    if not target_type or not entity_type_manager.has_definition(target_type):
        raise ValidationException(
            message=f"Invalid target type '{target_type}'",
            code="UNKNOWN_TARGET_TYPE"
        )

    if suffix_target and suffix_target != target_type:
        raise ValidationException(
            message=f"Handler '{handler}' does not match target type '{target_type}'",
            code="TARGET_TYPE_MISMATCH"
        )

    if base_id == LANGUAGE_RESTRICT_HANDLER:
        restriction = settings.get("language_restriction") or ""
        options = list_restriction_options(
            language_manager.get_languages(include_locked=True),
            language_manager.get_default_language().name,
        )
        if restriction not in options:
            raise ValidationException(
                message=f"Invalid language restriction '{restriction}'",
                code="INVALID_LANGUAGE_RESTRICTION",
                details={"options": list(options.keys())}
            )
        settings["language_restriction"] = restriction
    else:
        settings.pop("language_restriction", None)

    now = datetime.now(timezone.utc)

    await collection.update_one(
        {"fieldName": field_name},
        {
            "$set": {
                "handler": handler,
                "handlerSettings": settings,
                "updatedAt": now
            },
            "$setOnInsert": {
                "fieldName": field_name,
                "createdAt": now
            }
        },
        upsert=True
    )

    logger.info(f"Saved selection configuration for field {field_name}: handler={handler}")

    return {
        "fieldName": field_name,
        "handler": handler,
        "handlerSettings": settings,
    }


async def delete_field_config_pipeline(
    db: AsyncIOMotorDatabase,
    field_name: str
) -> None:
    """
    Delete a reference field's selection configuration.

    Args:
        db: MongoDB database connection
        field_name: Machine name of the reference field

    Raises:
        NotFoundException: If the field has no stored configuration
    """
    collection = db[COLLECTION]

    result = await collection.delete_one({"fieldName": field_name})

    if result.deleted_count == 0:
        raise NotFoundException(
            message=f"Reference field '{field_name}' not found",
            code="FIELD_NOT_FOUND"
        )

    logger.info(f"Deleted selection configuration for field {field_name}")
