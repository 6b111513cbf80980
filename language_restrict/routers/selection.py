"""
FastAPI router for entity reference selection endpoints.

Provides endpoints for reference field configuration, configuration forms,
autocomplete and reference validation.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils import success_response, list_response
from language_restrict.config import settings
from language_restrict.dependencies import (
    SelectionHandlerFactory,
    get_db,
    get_entity_type_manager,
    get_language_manager,
    get_selection_handler_factory,
)
from language_restrict.pipelines.field_config import (
    delete_field_config_pipeline,
    get_field_config_pipeline,
    save_field_config_pipeline,
)
from language_restrict.pipelines.selection import (
    autocomplete_pipeline,
    validate_references_pipeline,
)
from language_restrict.schemas.selection import (
    AutocompleteMatch,
    FieldConfigRequest,
    FieldConfigResponse,
    FormElement,
    ValidateReferencesRequest,
    ValidateReferencesResponse,
)
from language_restrict.services.entity.entity_type_manager import EntityTypeManager
from language_restrict.services.entity.query import OPERATORS
from language_restrict.services.i18n.language_manager import LanguageManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/selection", tags=["selection"])


@router.get("/entity-types")
async def list_entity_types(
    entity_type_manager: Annotated[EntityTypeManager, Depends(get_entity_type_manager)],
):
    """List the entity types a reference field can target."""
    return list_response([definition.to_dict() for definition in entity_type_manager.get_definitions()])


@router.get("/languages")
async def list_languages(
    language_manager: Annotated[LanguageManager, Depends(get_language_manager)],
):
    """List configurable and locked languages in display order."""
    return list_response([language.to_dict() for language in language_manager.get_languages()])


@router.get("/fields/{field_name}")
async def get_field_config(
    field_name: str,
    db: Annotated[AsyncIOMotorDatabase, Depends(get_db)],
):
    """Get a reference field's selection configuration."""
    config = await get_field_config_pipeline(db, field_name)
    return success_response(FieldConfigResponse(**config).model_dump())


@router.put("/fields/{field_name}")
async def save_field_config(
    field_name: str,
    body: FieldConfigRequest,
    db: Annotated[AsyncIOMotorDatabase, Depends(get_db)],
    entity_type_manager: Annotated[EntityTypeManager, Depends(get_entity_type_manager)],
    language_manager: Annotated[LanguageManager, Depends(get_language_manager)],
):
    """Create or update a reference field's selection configuration."""
    config = await save_field_config_pipeline(
        db,
        entity_type_manager,
        language_manager,
        field_name,
        body.handler,
        body.handlerSettings.model_dump(),
    )
    return success_response(
        FieldConfigResponse(**config).model_dump(),
        message="Selection configuration saved"
    )


@router.delete("/fields/{field_name}")
async def delete_field_config(
    field_name: str,
    db: Annotated[AsyncIOMotorDatabase, Depends(get_db)],
):
    """Delete a reference field's selection configuration."""
    await delete_field_config_pipeline(db, field_name)
    return success_response(message="Selection configuration deleted")


@router.get("/fields/{field_name}/form")
async def get_field_form(
    field_name: str,
    db: Annotated[AsyncIOMotorDatabase, Depends(get_db)],
    handler_factory: Annotated[SelectionHandlerFactory, Depends(get_selection_handler_factory)],
):
    """Describe the handler configuration form for a reference field."""
    config = await get_field_config_pipeline(db, field_name)
    handler = handler_factory(config)

    form = {
        name: FormElement(**element).model_dump()
        for name, element in handler.build_configuration_form().items()
    }
    return success_response({"fieldName": field_name, "handler": config["handler"], "form": form})


@router.get("/fields/{field_name}/autocomplete")
async def autocomplete(
    field_name: str,
    db: Annotated[AsyncIOMotorDatabase, Depends(get_db)],
    handler_factory: Annotated[SelectionHandlerFactory, Depends(get_selection_handler_factory)],
    q: Optional[str] = Query(None, max_length=255),
    operator: str = Query("CONTAINS", description=" | ".join(OPERATORS)),
    limit: int = Query(settings.AUTOCOMPLETE_LIMIT, ge=1, le=100),
):
    """List referenceable entities for a reference field."""
    config = await get_field_config_pipeline(db, field_name)
    handler = handler_factory(config)

    matches = await autocomplete_pipeline(handler, q, operator, limit)
    return list_response([AutocompleteMatch(**match).model_dump() for match in matches])


@router.post("/fields/{field_name}/validate")
async def validate_references(
    field_name: str,
    body: ValidateReferencesRequest,
    db: Annotated[AsyncIOMotorDatabase, Depends(get_db)],
    handler_factory: Annotated[SelectionHandlerFactory, Depends(get_selection_handler_factory)],
):
    """Check which submitted entity ids the reference field accepts."""
    config = await get_field_config_pipeline(db, field_name)
    handler = handler_factory(config)

    result = await validate_references_pipeline(handler, body.ids)
    return success_response(ValidateReferencesResponse(**result).model_dump())
