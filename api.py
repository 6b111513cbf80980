"""
Language Restricted Selection API

Main entry point for the entity reference selection service.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Common library imports
from common.database import MongoDB
from common.utils import APIException, error_response, success_response

# App-specific imports
from language_restrict.config import settings
from language_restrict.dependencies import (
    get_auth_middleware,
    get_i18n_middleware,
    get_language_manager,
    init_services,
)
from language_restrict.routers import selection_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=settings.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


# =============================================================================
# Database Instance
# =============================================================================
main_db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown tasks like database connections
    and service initialization.
    """
    logger.info("Starting Language Restricted Selection API...")
    settings.validate_required()

    await main_db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )

    init_services(
        db=main_db.db,
        locales_path=settings.LOCALES_PATH,
        source_mode=settings.LANGUAGE_SOURCE_MODE,
        supported_languages=settings.get_supported_languages(),
        default_language=settings.DEFAULT_LANGUAGE,
    )
    if settings.LANGUAGE_SOURCE_MODE == "database":
        await get_language_manager().reload()
    logger.info("All services initialized successfully")

    yield

    logger.info("Shutting down Language Restricted Selection API...")
    await main_db.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="Language Restricted Selection API",
    description="Entity reference selection filtered by language",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def i18n_middleware(request: Request, call_next):
    return await get_i18n_middleware()(request, call_next)


# Registered last so it runs first: request.state.user feeds language negotiation
@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    return await get_auth_middleware()(request, call_next)


# =============================================================================
# Error Responses
# =============================================================================
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    details = exc.detail.get("details") if isinstance(exc.detail, dict) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message, code=exc.code, details=details),
        headers=exc.headers,
    )


# =============================================================================
# Include Routers
# =============================================================================
app.include_router(selection_router, prefix=settings.API_PREFIX, tags=["Selection"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and database connection.
    """
    return success_response({
        "status": "ok",
        "version": settings.APP_VERSION,
        "database": main_db.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
