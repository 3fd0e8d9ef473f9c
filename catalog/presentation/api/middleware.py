"""API middleware.

- API key authentication (X-API-Key) for write requests
- Security headers
- Request logging

The service uses a single API key configured via Settings.security.api_key.
"""

from __future__ import annotations

import secrets
import time
from typing import Callable

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from catalog.config import get_settings

logger = structlog.get_logger(__name__)


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Requires the API key for every request that changes data."""

    SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reads are public
        if request.method in self.SAFE_METHODS:
            return await call_next(request)

        settings = get_settings()
        configured = settings.security.api_key.get_secret_value() if settings.security.api_key else ""

        # Require API key to be configured. Reject all writes if missing.
        if not configured:
            logger.error("API key not configured. Set SECURITY_API_KEY in environment.")
            return JSONResponse(
                status_code=503,
                content={"detail": "API key not configured on server"},
            )

        provided = request.headers.get("X-API-Key") or ""
        if not provided:
            return JSONResponse(status_code=401, content={"detail": "Missing API key"})

        if not secrets.compare_digest(provided, configured):
            logger.warning(
                "Invalid API key",
                method=request.method,
                path=request.url.path,
            )
            return JSONResponse(status_code=401, content={"detail": "Invalid API key"})

        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds security headers to all responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Conditional GETs rely on ETag revalidation
        response.headers.setdefault("Cache-Control", "no-cache")
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time

        logger.info(
            "API request completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        return response
