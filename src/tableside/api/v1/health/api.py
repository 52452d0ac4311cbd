"""
Health check endpoints.

Provides health check endpoints for monitoring service status.
"""

from fastapi import APIRouter

from tableside import __version__
from tableside.di import SettingsDep
from tableside.models.shared import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        Service status, version and active storage provider
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        provider=settings.infrastructure_provider,
        message="Service is healthy",
    )
