"""Entity reference selection services."""

from language_restrict.services.selection.base import SelectionHandler, Localize
from language_restrict.services.selection.default_selection import DefaultSelection
from language_restrict.services.selection.language_restrict_selection import LanguageRestrictSelection
from language_restrict.services.selection.language_restriction import (
    NO_RESTRICTION,
    SITE_DEFAULT,
    CURRENT_INTERFACE,
    AUTHORS_DEFAULT,
    ResolutionContext,
    resolve_language_code,
    list_restriction_options,
    apply_language_filter,
)
from language_restrict.services.selection.messages import MESSAGES, default_localize
from language_restrict.services.selection.factory import (
    DEFAULT_HANDLER,
    LANGUAGE_RESTRICT_HANDLER,
    HANDLERS,
    create_selection_handler,
    parse_handler_id,
)

__all__ = [
    "SelectionHandler",
    "Localize",
    "DefaultSelection",
    "LanguageRestrictSelection",
    "NO_RESTRICTION",
    "SITE_DEFAULT",
    "CURRENT_INTERFACE",
    "AUTHORS_DEFAULT",
    "ResolutionContext",
    "resolve_language_code",
    "list_restriction_options",
    "apply_language_filter",
    "MESSAGES",
    "default_localize",
    "DEFAULT_HANDLER",
    "LANGUAGE_RESTRICT_HANDLER",
    "HANDLERS",
    "create_selection_handler",
    "parse_handler_id",
]
