"""
Language restriction policy.

A reference field's ``language_restriction`` setting names either a mode
or a literal language code. At query time the mode is resolved against the
request's languages and the result becomes an equality condition on the
target entity type's language field.

Modes:
    ""                 no restriction
    site_default       the site default language
    current_interface  the interface language of the current request
    authors_default    the acting user's preferred language, falling back to
                       the interface language
    anything else      used as a language code as-is
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from language_restrict.services.entity.query import EntityQuery
from language_restrict.services.i18n.language_manager import Language
from language_restrict.services.selection.base import Localize
from language_restrict.services.selection.messages import default_localize

logger = logging.getLogger(__name__)

NO_RESTRICTION = ""
SITE_DEFAULT = "site_default"
CURRENT_INTERFACE = "current_interface"
AUTHORS_DEFAULT = "authors_default"


@dataclass(frozen=True)
class ResolutionContext:
    """Languages of the current request."""
    current_interface_langcode: str
    site_default_langcode: str
    preferred_langcode: str = ""


def resolve_language_code(configured_value: Optional[str], ctx: ResolutionContext) -> str:
    """
    Resolve a restriction setting to a language code.

    Args:
        configured_value: Stored language_restriction value
        ctx: Languages of the current request

    Returns:
        Language code to filter on, or "" for no filter
    """
    if not configured_value:
        return ""

    if configured_value == SITE_DEFAULT:
        return ctx.site_default_langcode

    if configured_value == CURRENT_INTERFACE:
        return ctx.current_interface_langcode

    if configured_value == AUTHORS_DEFAULT:
        # No stored preference inherits the interface language, not the site default
        return ctx.preferred_langcode or ctx.current_interface_langcode

    return configured_value


def list_restriction_options(
    languages: List[Language],
    site_default_name: str,
    localize: Optional[Localize] = None,
) -> Dict[str, str]:
    """
    Build the select options for the language_restriction setting.

    Args:
        languages: Languages in display order, locked ones included
        site_default_name: Name of the site default language
        localize: Translation function; defaults to English

    Returns:
        Ordered mapping of option key to label
    """
    localize = localize or default_localize

    options = {
        NO_RESTRICTION: localize("selection.language_restriction.none", {}),
        SITE_DEFAULT: localize(
            "selection.language_restriction.site_default",
            {"language_name": site_default_name},
        ),
        CURRENT_INTERFACE: localize("selection.language_restriction.current_interface", {}),
        AUTHORS_DEFAULT: localize("selection.language_restriction.authors_default", {}),
    }

    for language in languages:
        if language.locked:
            options[language.code] = localize(
                "selection.language_restriction.locked",
                {"name": language.name},
            )
        else:
            options[language.code] = language.name

    return options


def apply_language_filter(
    query: EntityQuery,
    langcode_key: Optional[str],
    langcode: str,
) -> EntityQuery:
    """
    Restrict a query to one language.

    Args:
        query: Query built by the base selection
        langcode_key: Field holding the entity language, None if the type has none
        langcode: Resolved language code, "" for no restriction

    Returns:
        The same query, with a langcode condition when both inputs are set
    """
    if langcode and langcode_key:
        logger.debug(f"Restricting {query.entity_type.id} query to {langcode_key} = '{langcode}'")
        query.condition(langcode_key, langcode)
    return query
