"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings, get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    messaging: str
    payments: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(settings: Settings = Depends(get_settings)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports which integrations are configured. The service stays up without
    them, with the affected routes answering "not configured".
    """
    database = "configured" if settings.database_configured else "not_configured"
    return ReadinessResponse(
        status="ready" if settings.database_configured else "degraded",
        database=database,
        messaging="configured" if settings.messaging_configured else "not_configured",
        payments="configured" if settings.mercadopago_access_token else "not_configured",
    )
