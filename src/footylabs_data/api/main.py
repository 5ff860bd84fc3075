"""
FastAPI application for the FootyLabs Data API.

Serves cohort percentiles computed per request from the hosted player store.
No state is shared between requests apart from the connection pool.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import msgspec
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR, HTTP_503_SERVICE_UNAVAILABLE

from ..core.config import get_settings
from ..services.percentiles import CohortSelectionError, DataStoreError
from .dependencies import close_db, get_db
from .errors import APIError, api_error_handler, service_error_handler
from .routers import percentiles

logger = logging.getLogger(__name__)


class MSGSpecResponse(Response):
    """Custom response class using msgspec for JSON serialization."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        if content is None:
            return b""
        return msgspec.json.encode(content)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.

    Startup opens the database pool; shutdown closes it. A database that is
    unreachable at startup does not stop the app, requests report the error.
    """
    logger.info("Starting FootyLabs Data API...")

    try:
        db = get_db()
        db.open()
        logger.info("Database connection pool opened")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")

    yield

    logger.info("Shutting down FootyLabs Data API...")
    try:
        close_db()
    except Exception as e:
        logger.warning(f"Error closing database connections: {e}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Cohort percentiles and ranks for football player statistics",
        version=settings.app_version,
        default_response_class=MSGSpecResponse,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        allow_credentials=settings.cors_allow_credentials,
        expose_headers=settings.cors_expose_headers,
    )

    # Compresses responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add timing header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        response.headers["X-Process-Time"] = f"{process_time:.2f}ms"
        return response

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(CohortSelectionError, service_error_handler)
    app.add_exception_handler(DataStoreError, service_error_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "details": str(exc) if settings.show_error_details else None,
            },
        )

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(tz=timezone.utc).isoformat()}

    @app.get("/health/db", tags=["health"])
    def health_check_db():
        """Database connectivity health check."""
        try:
            db = get_db()
            db.fetchone("SELECT 1 AS test")
            return {
                "status": "healthy",
                "database": "connected",
                "timestamp": datetime.now(tz=timezone.utc).isoformat(),
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return JSONResponse(
                status_code=HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "database": "disconnected",
                    "error": "Database connection check failed",
                    "timestamp": datetime.now(tz=timezone.utc).isoformat(),
                },
            )

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs",
        }

    app.include_router(
        percentiles.router,
        prefix=f"{settings.api_prefix}/percentiles",
        tags=["percentiles"],
    )

    return app


# Create app instance
app = create_app()
