"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    supabase: str
    app_url: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the settings the auth flow depends on are present.
    No network calls are made.
    """
    settings = get_settings()
    supabase = "configured" if settings.supabase_url and settings.supabase_anon_key else "missing"
    app_url = "configured" if settings.app_url.strip() else "missing"
    return ReadinessResponse(
        status="ready" if supabase == app_url == "configured" else "not_ready",
        supabase=supabase,
        app_url=app_url,
    )
