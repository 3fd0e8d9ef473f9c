"""
REST API entry point.

FastAPI application serving the book and car catalogs.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import structlog

from catalog.config import get_settings
from catalog.infrastructure.database import init_database, close_database

from .routes import books_router, cars_router
from .middleware import APIKeyMiddleware, RequestLoggingMiddleware, SecurityHeadersMiddleware

logger = structlog.get_logger(__name__)


def setup_logging() -> None:
    """Configure structured logging."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
            if settings.log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        stream=sys.stdout,
    )

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan handler."""
    # Startup
    setup_logging()
    await init_database()
    logger.info("API started")

    yield

    # Shutdown
    await close_database()
    logger.info("API stopped")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    is_production = settings.environment == "production"
    app = FastAPI(
        title="Catalog API",
        description="Books and cars with optimistic concurrency control",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None if is_production else "/api/docs",
        redoc_url=None if is_production else "/api/redoc",
        openapi_url=None if is_production else "/api/openapi.json",
    )

    # CORS: configured origins ("*" for dev, restrict in production)
    cors_origins = [
        o.strip()
        for o in settings.security.cors_allowed_origins.split(",")
        if o.strip()
    ]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag", "Location"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Security headers
    app.add_middleware(SecurityHeadersMiddleware)

    # API Key authentication
    app.add_middleware(APIKeyMiddleware)

    # Include routers
    app.include_router(books_router, prefix="/api/v1/books", tags=["Books"])
    app.include_router(cars_router, prefix="/api/v1/cars", tags=["Cars"])

    # Health check
    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok"}

    # Exception handlers
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.presentation.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
