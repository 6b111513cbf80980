"""
Request middleware.
"""

from language_restrict.middleware.auth import AuthMiddleware
from language_restrict.middleware.i18n import I18nMiddleware

__all__ = [
    "AuthMiddleware",
    "I18nMiddleware",
]
