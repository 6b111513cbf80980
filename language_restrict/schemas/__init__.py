"""
Pydantic schemas for request/response validation.
"""

from language_restrict.schemas.selection import (
    SortSettings,
    SelectionSettings,
    FieldConfigRequest,
    FieldConfigResponse,
    FormElement,
    AutocompleteMatch,
    ValidateReferencesRequest,
    ValidateReferencesResponse,
)

__all__ = [
    "SortSettings",
    "SelectionSettings",
    "FieldConfigRequest",
    "FieldConfigResponse",
    "FormElement",
    "AutocompleteMatch",
    "ValidateReferencesRequest",
    "ValidateReferencesResponse",
]
