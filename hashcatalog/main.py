"""
==============================================================================
Hash Catalog Lookup Service - Application Entry Point
==============================================================================

FastAPI application answering "is this file hash a known-software hash,
and which packages ship it?" against a read-only reference catalog.

Provides:
- Batch hash lookup
- Catalog version endpoint
- Health endpoints

Usage:
------
    # Development
    DATABASE_PATH=./rds/minimal.db uvicorn hashcatalog.main:app --reload

    # Production
    DATABASE_PATH=/data/rds/minimal.db uvicorn hashcatalog.main:app --host 0.0.0.0 --port 8000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from hashcatalog.api.router import api_router
from hashcatalog.api.v1.health import HealthController
from hashcatalog.catalog.store import close_store, init_store
from hashcatalog.config import get_settings
from hashcatalog.core.dependencies import get_lookup_service
from hashcatalog.core.exceptions import register_exception_handlers
from hashcatalog.schemas.health import HealthResponse
from hashcatalog.services.lookup_service import LookupService


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Opening the catalog store on startup (fatal on bad configuration)
    - Closing the catalog store on shutdown
    - Middleware, router and exception handler setup
    """

    def __init__(self):
        """Initialize the application."""
        self._settings = get_settings()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version=self._settings.app_version,
            description="Known-software hash lookup against a reference catalog",
            lifespan=self._lifespan,
            docs_url=None if self._settings.is_production else "/docs",
            redoc_url=None if self._settings.is_production else "/redoc",
        )

        # Configure middleware
        self._configure_middleware(app)

        # Register exception handlers
        register_exception_handlers(app)

        # Register routers
        app.include_router(api_router)

        # Register root endpoints
        self._register_root(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        # Startup
        self._startup()
        try:
            yield
        finally:
            # Shutdown
            self._shutdown()

    def _startup(self) -> None:
        """
        Application startup tasks.

        Store construction errors propagate and abort startup; the service
        never runs with a half-initialized store.
        """
        settings = get_settings()

        logger.info("=" * 60)
        logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
        logger.info("=" * 60)

        database_path = settings.resolve_database_path()
        logger.info(f"Using database: {database_path}")

        init_store(
            database_path,
            query_timeout=settings.query_timeout,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
        )

        logger.info(f"✅ {settings.app_name} ready")
        logger.info(f"📍 Running on http://{settings.host}:{settings.port}")
        logger.info(f"📖 API Docs: http://{settings.host}:{settings.port}/docs")
        logger.info("=" * 60)

    def _shutdown(self) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down...")
        close_store()
        logger.info("✅ Shutdown complete")

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_root(self, app: FastAPI) -> None:
        """Register root and top-level health endpoints."""

        @app.get("/", response_class=PlainTextResponse)
        async def root():
            """Service banner."""
            return (
                f"{self._settings.app_name} - use POST /api/v1/hashes/check "
                "to look up hashes."
            )

        @app.get("/health", response_model=HealthResponse, tags=["Health"])
        def health(service: LookupService = Depends(get_lookup_service)):
            """Top-level health endpoint for load balancers."""
            return HealthController(service).get_health()

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

# Create application instance
application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hashcatalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
