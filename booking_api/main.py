"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes
- Middleware (CORS, request logging)
- Exception handlers for auth and datastore failures
- The process-scoped resources (token service, datastore)

Request pipeline: logging middleware → authentication dependency →
authorization check in the handler → handler → datastore.

Run with:
    uvicorn booking_api.main:app
or the ``booking-api`` console script.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from booking_api.api import endpoints
from booking_api.core.exceptions import (
    AuthError,
    DatabaseError,
    OwnershipMismatchError,
)
from booking_api.core.logging_config import setup_logging
from booking_api.core.security import TokenService
from booking_api.core.setting import Settings, settings as default_settings
from booking_api.db.session import Datastore
from booking_api.middleware.logging import add_logging_middleware
from booking_api.services.catalog_service import load_seed_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the datastore on startup, seed the catalogue if configured, close on shutdown."""
    settings: Settings = app.state.settings
    datastore = Datastore(settings.database_url)
    await datastore.connect()
    app.state.datastore = datastore
    try:
        if settings.SERVICES_SEED_FILE:
            await load_seed_services(datastore, settings.SERVICES_SEED_FILE)
        yield
    finally:
        await datastore.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build a configured application.

    Raises:
        ConfigurationError: If no token signing secret is configured
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="REST backend for booking car services",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    # Fails fast on a missing secret
    app.state.token_service = TokenService.from_settings(settings)

    add_logging_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        status_code = 401
        if isinstance(exc, OwnershipMismatchError):
            status_code = settings.OWNERSHIP_MISMATCH_STATUS
        return JSONResponse(status_code=status_code, content={"message": exc.message})

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
        logger.error(
            "Datastore failure on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc.original_error or exc,
        )
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    @app.get("/", tags=["Health"], response_class=PlainTextResponse)
    async def root():
        """Liveness banner."""
        return f"{settings.PROJECT_NAME} is running"

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "healthy"}

    app.include_router(endpoints.router)

    return app


app = create_app()


def serve() -> None:
    """Console entry point: run the API with uvicorn on HOST:PORT."""
    uvicorn.run(
        "booking_api.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )
