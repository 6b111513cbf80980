"""
Pipelines: stateless orchestration over services and collections.
"""

from language_restrict.pipelines.field_config import (
    get_field_config_pipeline,
    save_field_config_pipeline,
    delete_field_config_pipeline,
)
from language_restrict.pipelines.selection import (
    autocomplete_pipeline,
    validate_references_pipeline,
)

__all__ = [
    "get_field_config_pipeline",
    "save_field_config_pipeline",
    "delete_field_config_pipeline",
    "autocomplete_pipeline",
    "validate_references_pipeline",
]
