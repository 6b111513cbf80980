"""
Common library for reusable infrastructure components.

This package provides generic modules that can be used across projects:

- database: Async MongoDB connection with Motor
- i18n: Internationalization service
- utils: Standard responses and exceptions
- config: Base settings class
"""

from common.database import MongoDB
from common.i18n import I18nService
from common.utils import (
    success_response,
    error_response,
    list_response,
    APIException,
    NotFoundException,
    ValidationException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # i18n
    "I18nService",
    # Utils
    "success_response",
    "error_response",
    "list_response",
    "APIException",
    "NotFoundException",
    "ValidationException",
    # Config
    "BaseAppSettings",
]
