"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    PhotogramError,
    ValidationError,
)
from shared.log_config import configure_logging
from modules.auth.routes import router as auth_router

from .dependencies import get_container
from .routes import health, users

logger = logging.getLogger(__name__)

# Checked in order; the first matching base decides the status
ERROR_STATUS: list[tuple[type[PhotogramError], int]] = [
    (ConflictError, 409),
    (AuthenticationError, 401),
    (ValidationError, 400),
    (NotFoundError, 404),
    (ExternalServiceError, 502),
]


def status_for(error: PhotogramError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


async def photogram_error_handler(request: Request, exc: PhotogramError) -> JSONResponse:
    """Render a PhotogramError as {error, message, details} with its status."""
    status = status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)

    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic. A missing JWT secret stops startup.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    get_container().token_issuer
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Authentication and identity service for Photogram",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(PhotogramError, photogram_error_handler)

    # Register routes
    app.include_router(health.router, tags=["health"])
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(users.router, prefix="/users", tags=["users"])

    return app


# Application instance for uvicorn
app = create_app()
