"""
Main entrypoint for the Party Planner site API.

This module assembles the FastAPI application: logging, the database
handle, the view cache, the admin access gate, exception handlers and
the versioned routers.  ``create_app`` builds and configures the app,
which is then instantiated at module import time as ``app``, e.g.::

    uvicorn party_planner_api.app.main:app --reload

The database handle and the view cache are created per application and
stored on ``app.state``; the database is opened at startup and closed
at shutdown.  Tests call ``create_app`` with their own ``Settings``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from .api.v1.router import admin_router, health_router, router as v1_router
from .core.cache import ViewCache
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.errors import DatabaseUnavailableError
from .core.logging_config import setup_logging
from .core.security import ADMIN_PREFIX, AdminGateMiddleware


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use.  Defaults to the module-level settings read
        from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file)
    logger = logging.getLogger(__name__)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.db = Database(settings)
    app.state.view_cache = ViewCache()

    app.add_middleware(AdminGateMiddleware, settings=settings)

    @app.exception_handler(DatabaseUnavailableError)
    async def database_unavailable_handler(request: Request, exc: DatabaseUnavailableError) -> JSONResponse:
        logger.warning("Database unavailable for %s %s", request.method, request.url.path)
        return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            {"detail": "Error de base de datos. Inténtalo de nuevo más tarde."},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(admin_router, prefix=ADMIN_PREFIX)

    @app.on_event("startup")
    async def startup_event() -> None:
        app.state.db.connect()

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        app.state.db.close()
        app.state.view_cache.clear()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
