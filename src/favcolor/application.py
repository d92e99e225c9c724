# src/favcolor/application.py
"""Application factory for the favcolor service."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from favcolor.api.endpoints import (
    auth_router,
    colors_router,
    directory_router,
    fallback_router,
    favorites_router,
    mount_static_site,
    session_router,
    users_router,
)
from favcolor.api.errors import register_exception_handlers
from favcolor.core.errors import ConfigurationError
from favcolor.core.log import configure_logging
from favcolor.core.settings import Settings
from favcolor.db.store import KeyValueStore, open_store
from favcolor.services import build_services
from favcolor.services.tokens import Clock

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
DESCRIPTION = "Share, browse and favorite colors"


def create_app(
    settings: Settings | None = None,
    *,
    store: KeyValueStore | None = None,
    clock: Clock = time.time,
) -> FastAPI:
    """Build a configured FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted.
        store: Pre-built storage backend; opened from `settings.store_url` when omitted.
        clock: Time source for session tokens.

    Raises:
        ConfigurationError: If the session secret is missing without the
            development override, or the store URL or static directory is invalid.
    """
    settings = settings or Settings()  # type: ignore[call-arg]
    configure_logging(settings.log_level)

    services = build_services(settings, store or open_store(settings), clock)

    app = FastAPI(
        title=settings.app_name,
        description=DESCRIPTION,
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.services = services

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=settings.cors_allow_credentials,
            allow_methods=settings.cors_allow_methods,
            allow_headers=settings.cors_allow_headers,
        )
    app.add_middleware(GZipMiddleware)

    register_exception_handlers(app)

    # Include API routers
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(session_router, prefix=API_PREFIX)
    app.include_router(colors_router, prefix=API_PREFIX)
    app.include_router(favorites_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    if settings.user_directory_enabled:
        logger.warning("User directory endpoint is enabled at %s/users", API_PREFIX)
        app.include_router(directory_router, prefix=API_PREFIX)
    app.include_router(fallback_router, prefix=API_PREFIX)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await services.store.close()

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    if settings.static_dir:
        if not Path(settings.static_dir).is_dir():
            raise ConfigurationError(f"STATIC_DIR does not exist: {settings.static_dir}")
        mount_static_site(app, settings.static_dir)
    else:

        @app.get("/")
        async def root() -> dict[str, str]:
            """Root endpoint with basic information about the API."""
            return {
                "name": settings.app_name,
                "version": settings.app_version,
                "description": DESCRIPTION,
                "docs": "/docs",
            }

    logger.info("%s %s ready", settings.app_name, settings.app_version)
    return app
