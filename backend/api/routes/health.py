"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from ..dependencies import get_container

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    profile_store: str
    identity_provider: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Builds the Supabase-backed services; returns 503 if their
    configuration is missing. Does not call the remote services.
    """
    container = get_container()
    profile_store = _probe("profile store", lambda: container.profile_store)
    identity_provider = _probe("identity provider", lambda: container.identity_provider)

    ready = profile_store == "configured" and identity_provider == "configured"
    body = ReadinessResponse(
        status="ready" if ready else "not_ready",
        profile_store=profile_store,
        identity_provider=identity_provider,
    )
    if not ready:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body


def _probe(name: str, build) -> str:
    try:
        build()
    except RuntimeError as e:
        logger.warning("Readiness: %s unavailable: %s", name, e)
        return "unconfigured"
    return "configured"
