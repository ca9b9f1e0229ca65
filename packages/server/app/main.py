"""
Project Role Assignment API Server

Entry point for the FastAPI application.
"""

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.admin import router as admin_router
from app.core.config import get_settings
from app.core.database import check_connection, engine, get_session_factory
from app.core.exceptions import StorageError, error_response, register_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from app.core.roles import get_role_catalog

settings = get_settings()
log = structlog.get_logger()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Project Role Assignments",
        description="Keeps one occupant per role slot on every project.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Middleware (last added runs outermost)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    register_exception_handlers(app)

    app.include_router(admin_router, prefix="/admin")

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness probes."""
        return {"status": "ok"}

    @app.get("/ready", tags=["System"])
    async def readiness_check(
        factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    ):
        """Readiness check endpoint: the database must answer."""
        try:
            await check_connection(factory)
        except StorageError as exc:
            log.error("readiness.failed", error=exc.message)
            return error_response(exc.code, exc.message, exc.status_code)
        return {"status": "ready"}

    @app.on_event("startup")
    async def on_startup():
        catalog = get_role_catalog()
        log.info("service.starting", roles=len(catalog))

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("service.shutting_down")
        await engine.dispose()

    return app


app = create_app()
