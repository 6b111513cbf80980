"""
i18n module - Translation loading and lookup.
"""

from common.i18n.service import I18nService

__all__ = ["I18nService"]
