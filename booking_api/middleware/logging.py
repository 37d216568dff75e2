"""
Request Logging Middleware

First stage of the request pipeline (logging → authentication →
authorization → handler). One access line per request:

    METHOD PATH STATUS TIMEms IP:<client> user:<email or ->

The user is whatever identity the authentication dependency attached to
``request.state``; query strings and cookies are never logged.
"""

import logging
import time

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("booking_api.access")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Times each request and writes the access line once the response is ready."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        identity = getattr(request.state, "identity", None)
        logger.info(
            "%s %s %s %.2fms IP:%s user:%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed * 1000,
            get_client_ip(request),
            identity.email if identity else "-",
        )

        response.headers["X-Process-Time"] = f"{elapsed:.6f}"
        return response


def get_client_ip(request: Request) -> str:
    """Client address, preferring the first X-Forwarded-For hop when behind a proxy."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def add_logging_middleware(app: FastAPI) -> None:
    app.add_middleware(LoggingMiddleware)
