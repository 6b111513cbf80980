"""
FastAPI dependencies for the selection service.

Provides dependency injection for startup singletons and request-scoped
collaborators.
"""

from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.i18n.service import I18nService
from language_restrict.middleware.auth import AuthMiddleware
from language_restrict.middleware.i18n import I18nMiddleware
from language_restrict.services.auth.session_manager import SessionManager
from language_restrict.services.entity.entity_type_manager import EntityTypeManager
from language_restrict.services.i18n.language_manager import LanguageManager
from language_restrict.services.selection.base import Localize, SelectionHandler
from language_restrict.services.selection.factory import create_selection_handler
from language_restrict.services.selection.messages import MESSAGES
from language_restrict.services.user.account_proxy import AccountProxy


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

_db: Optional[AsyncIOMotorDatabase] = None
_language_manager: Optional[LanguageManager] = None
_entity_type_manager: Optional[EntityTypeManager] = None
_i18n_service: Optional[I18nService] = None
_i18n_middleware: Optional[I18nMiddleware] = None
_auth_middleware: Optional[AuthMiddleware] = None


def init_services(
    db: Optional[AsyncIOMotorDatabase],
    locales_path: str = "locales",
    source_mode: str = "file",
    supported_languages: Optional[list] = None,
    default_language: Optional[str] = None,
    entity_type_manager: Optional[EntityTypeManager] = None,
) -> None:
    """
    Initialize all services.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        locales_path: Path to the locales directory
        source_mode: "file" or "database" language source
        supported_languages: Configurable language codes, in display order
        default_language: Site default language code
        entity_type_manager: Entity type registry; defaults to built-in types
    """
    global _db, _language_manager, _entity_type_manager, _i18n_service, _i18n_middleware, _auth_middleware

    _db = db

    _language_manager = LanguageManager(
        db=db,
        source_mode=source_mode,
        supported_languages=supported_languages,
        default_language=default_language,
    )

    _entity_type_manager = entity_type_manager or EntityTypeManager()

    _i18n_service = I18nService(
        locales_dir=locales_path,
        default_language=_language_manager.get_default_language().code,
    )

    _i18n_middleware = I18nMiddleware(
        i18n_service=_i18n_service,
        language_manager=_language_manager,
    )

    _auth_middleware = AuthMiddleware(session_manager=SessionManager(db=db))


def get_db() -> AsyncIOMotorDatabase:
    """Get database connection."""
    if _db is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _db


def get_language_manager() -> LanguageManager:
    """Get language manager instance."""
    if _language_manager is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _language_manager


def get_entity_type_manager() -> EntityTypeManager:
    """Get entity type manager instance."""
    if _entity_type_manager is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _entity_type_manager


def get_i18n_service() -> I18nService:
    """Get i18n service instance."""
    if _i18n_service is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _i18n_service


def get_i18n_middleware() -> I18nMiddleware:
    """Get i18n middleware instance."""
    if _i18n_middleware is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _i18n_middleware


def get_auth_middleware() -> AuthMiddleware:
    """Get auth middleware instance."""
    if _auth_middleware is None:
        raise RuntimeError("Services not initialized. Call init_services first.")
    return _auth_middleware


# ─────────────────────────────────────────────────────────────────
# Request-scoped dependencies
# ─────────────────────────────────────────────────────────────────

def get_current_user(
    request: Request,
    language_manager: Annotated[LanguageManager, Depends(get_language_manager)],
) -> AccountProxy:
    """Acting user from request.state.user (anonymous when absent)."""
    return AccountProxy(getattr(request.state, "user", None), language_manager)


def get_localize(
    request: Request,
    i18n_service: Annotated[I18nService, Depends(get_i18n_service)],
) -> Localize:
    """Translation function for the request language."""
    localize = getattr(request.state, "t", None)
    if localize is None:
        localize = i18n_service.localizer(getattr(request.state, "language", None), defaults=MESSAGES)
    return localize


def get_interface_langcode(request: Request) -> Optional[str]:
    """Interface language negotiated by the i18n middleware."""
    return getattr(request.state, "language", None)


class SelectionHandlerFactory:
    """
    Builds selection handlers bound to one request's collaborators.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        entity_type_manager: EntityTypeManager,
        language_manager: LanguageManager,
        current_user: AccountProxy,
        localize: Localize,
        interface_langcode: Optional[str],
    ):
        self._db = db
        self._entity_type_manager = entity_type_manager
        self._language_manager = language_manager
        self._current_user = current_user
        self._localize = localize
        self._interface_langcode = interface_langcode

    def __call__(self, field_config: Dict[str, Any]) -> SelectionHandler:
        return create_selection_handler(
            field_config.get("handlerSettings", {}),
            handler=field_config.get("handler", "default"),
            db=self._db,
            entity_type_manager=self._entity_type_manager,
            language_manager=self._language_manager,
            current_user=self._current_user,
            localize=self._localize,
            interface_langcode=self._interface_langcode,
        )


def get_selection_handler_factory(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_db)],
    entity_type_manager: Annotated[EntityTypeManager, Depends(get_entity_type_manager)],
    language_manager: Annotated[LanguageManager, Depends(get_language_manager)],
    current_user: Annotated[AccountProxy, Depends(get_current_user)],
    localize: Annotated[Localize, Depends(get_localize)],
    interface_langcode: Annotated[Optional[str], Depends(get_interface_langcode)],
) -> SelectionHandlerFactory:
    """Get a handler factory for the current request."""
    return SelectionHandlerFactory(
        db=db,
        entity_type_manager=entity_type_manager,
        language_manager=language_manager,
        current_user=current_user,
        localize=localize,
        interface_langcode=interface_langcode,
    )
