"""
Main entrypoint for the Vegetable Market Prices API.

This module assembles the FastAPI application: it sets up logging,
applies database migrations, installs CORS and the JSON error
handlers, and includes the routers.  The ``create_app`` function builds
and configures the app, which is then instantiated at module import
time as ``app``.  Run it with uvicorn or another ASGI server, e.g.::

    uvicorn vegetable_market_api.app.main:app --reload

``DATABASE_URL`` and ``JWT_SECRET`` must be set in the environment;
without them the import fails and the server does not start.
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.endpoints import health
from .api.router import router as api_router
from .core.config import Settings
from .core.db import init_db
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"message": ...}``.

    The router's own 404 for an unmatched path carries Starlette's
    default detail and is replaced by a fixed message.  A known path
    called with a method it has no route for is reported the same way.
    """
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED or (
        exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found"
    ):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "Route not found"},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def cors_headers(request: Request) -> Dict[str, str]:
    """CORS headers for responses produced outside ``CORSMiddleware``.

    Errors handled by Starlette's server error middleware bypass the
    CORS middleware, so the allow‑origin header is added here.
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}
    allowed = request.app.state.settings.cors_origins
    if "*" in allowed:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in allowed:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an uncaught error server‑side and return a fixed 500 body."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Something went wrong!"},
        headers=cors_headers(request),
    )


def log_settings(settings: Settings) -> None:
    """Log which settings were loaded without revealing secrets."""
    logger.info("Environment variables loaded:")
    logger.info("- DATABASE_URL: %s", "Set" if settings.database_url else "Not set")
    logger.info("- JWT_SECRET: %s", "Set" if settings.secret_key else "Not set")
    logger.info("- ENVIRONMENT: %s", settings.environment)
    logger.info("- PORT: %s", settings.port)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to run with.  Read from the environment when
        omitted; a missing required variable raises
        ``ConfigurationError``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    if settings is None:
        settings = Settings.from_env()

    # Initialise logging before anything else so that the steps below
    # can safely log messages.
    setup_logging(settings.log_level, settings.log_file)
    log_settings(settings)

    # Migrate before accepting requests; an unreachable store stops startup.
    init_db(settings.database_url)
    logger.info("Database ready (environment: %s)", settings.environment)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
