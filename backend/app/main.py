"""
FastAPI application entry point.

Uses structured logging from devconnect.logging. Settings are built once
and handed to every component through ``app.state``.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from devconnect.config import Settings, get_settings
from devconnect.db import Database
from devconnect.logging import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
    get_logger,
)
from devconnect.services import GitHubService

from .auth.jwt import TokenVerifier
from .error_handlers import register_exception_handlers
from .routers import profile as profile_router

logger = get_logger("api")


def _log_config_warnings(settings: Settings) -> None:
    config_errors, config_warnings = settings.validate_production_config()
    for warning in config_warnings:
        logger.warning("config_warning", message=warning)
    for error in config_errors:
        logger.warning("config_error", message=error)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(level="DEBUG" if settings.debug else "INFO")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create tables on startup; release the engine and HTTP client on shutdown."""
        logger.info("app_startup", app_name=settings.app_name)
        _log_config_warnings(settings)

        await app.state.db.create_all_tables()
        logger.info("database_initialized")

        yield

        logger.info("app_shutdown")
        await app.state.github.aclose()
        await app.state.db.dispose()

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

    app.state.settings = settings
    app.state.db = Database(settings)
    app.state.token_verifier = TokenVerifier(settings)
    app.state.github = GitHubService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With", "x-auth-token"],
    )

    # Structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Request ID middleware; must wrap the logging middleware
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    async def health_check():
        """Liveness probe."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    async def readiness_check():
        """
        Readiness probe.

        Returns 200 when the database answers, 503 otherwise.
        """
        result = await app.state.db.health_check()
        checks = {"database": result["healthy"]}
        if not result["healthy"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )
        return {"status": "ready", "checks": checks}

    app.include_router(profile_router.router, prefix=settings.api_prefix)

    return app


app = create_app()
