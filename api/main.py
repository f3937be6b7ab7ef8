"""FastAPI application serving personal shortlinks."""

import logging

import fastapi
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.hooks import HookRegistry
from core.logger import configure_logging
from core.redirects import legacy_redirect_handler
from core.telemetry import RequestTimingMiddleware
from repositories.resource_repository import ResourceStore, load_catalog
from routes import health_router, shortlinks_api_router, shortlinks_redirect_router
from services.bootstrap import build_services

configure_logging()
logger = logging.getLogger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unhandled exceptions."""
    logger.exception(
        "unhandled.exception",
        extra={
            "exc_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred. Please try again."},
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handler for request validation errors."""
    if not isinstance(exc, RequestValidationError):
        return JSONResponse(status_code=500, content={"detail": "Unexpected error"})

    logger.warning(
        "request.validation_error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(exc.errors()),
        },
    )
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors()},
    )


def create_app(
    settings: Settings | None = None,
    store: ResourceStore | None = None,
    hooks: HookRegistry | None = None,
) -> fastapi.FastAPI:
    """Build the app.

    ``store`` defaults to the JSON catalog named by the settings; ``hooks``
    lets an embedding host register its extensions before the first request.
    """
    settings = settings or get_settings()
    if store is None:
        store = load_catalog(settings.catalog_file)

    shortlinks = build_services(settings, store, hooks)

    docs_enabled = settings.enable_docs or settings.debug
    app = fastapi.FastAPI(
        title="Hum Shortlinks",
        version="0.1.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.shortlinks = shortlinks

    app.add_exception_handler(404, legacy_redirect_handler(shortlinks.legacy.resolve))
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(health_router)
    app.include_router(shortlinks_api_router)
    # Registered last: the short path pattern must not shadow other routes
    app.include_router(shortlinks_redirect_router)

    app.add_middleware(RequestTimingMiddleware)

    logger.info(
        "app.created",
        extra={
            "shortlink_base": shortlinks.generator.base_url(),
            "hooks": len(shortlinks.hooks),
        },
    )
    return app


app = create_app()
