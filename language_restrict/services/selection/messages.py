"""
English templates for selection form labels.

Keys match the ``selection`` namespace of the locale catalogues, so the
same key resolves through I18nService when translations are loaded.
"""

from typing import Any, Dict, Optional

MESSAGES = {
    # Default selection
    "selection.default.target_bundles": "Bundles",
    "selection.default.sort_field": "Sort by",
    "selection.default.sort_none": "- None -",
    "selection.default.sort_direction": "Sort direction",
    "selection.default.sort_asc": "Ascending",
    "selection.default.sort_desc": "Descending",
    "selection.default.auto_create": "Create referenced entities if they don't already exist",
    # Language restriction
    "selection.language_restriction.title": "Restrict available items by language",
    "selection.language_restriction.none": "No restrictions",
    "selection.language_restriction.site_default": "Site's default language ({language_name})",
    "selection.language_restriction.current_interface": "Interface text language selected for page",
    "selection.language_restriction.authors_default": "Author's preferred language",
    "selection.language_restriction.locked": "- {name} -",
}


def default_localize(key: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Format the built-in English template for a key."""
    template = MESSAGES.get(key, key)
    try:
        return template.format(**(params or {}))
    except (KeyError, IndexError):
        return template
