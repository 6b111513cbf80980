"""
Pydantic models for selection request/response validation.

Defines schemas for reference field configuration, configuration forms,
autocomplete matches and reference validation.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field


class SortSettings(BaseModel):
    """Sort applied to referenceable entities."""
    field: str = "_none"
    direction: Literal["ASC", "DESC"] = "ASC"


class SelectionSettings(BaseModel):
    """Handler settings stored on a reference field."""
    target_type: str = Field(..., min_length=1, description="Referenced entity type id")
    target_bundles: Optional[List[str]] = Field(
        None,
        description="Allowed bundles; null for all, empty for none"
    )
    sort: SortSettings = Field(default_factory=SortSettings)
    auto_create: bool = False
    auto_create_bundle: Optional[str] = None
    language_restriction: str = Field(
        "",
        description="'' | site_default | current_interface | authors_default | <langcode>"
    )


class FieldConfigRequest(BaseModel):
    """Request body for saving a reference field configuration."""
    handler: str = Field("default", description="default | entity_reference_language_restrict")
    handlerSettings: SelectionSettings


class FieldConfigResponse(BaseModel):
    """Stored reference field configuration."""
    fieldName: str
    handler: str
    handlerSettings: Dict[str, Any]


class FormElement(BaseModel):
    """One element of a handler configuration form."""
    type: str
    title: str
    options: Dict[str, str] = Field(default_factory=dict)
    defaultValue: Any = None


class AutocompleteMatch(BaseModel):
    """One referenceable entity offered for autocomplete."""
    id: str
    label: str
    bundle: str


class ValidateReferencesRequest(BaseModel):
    """Request body for validating referenced entity ids."""
    ids: List[str] = Field(..., max_length=500)


class ValidateReferencesResponse(BaseModel):
    """Referenced ids split by whether the handler allows them."""
    valid: List[str]
    invalid: List[str]
