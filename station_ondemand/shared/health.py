"""Health check endpoint."""
from fastapi import APIRouter

from .settings import app_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness probe."""
    return {
        "status": "healthy",
        "service": app_settings.app_name,
        "version": app_settings.app_version,
    }
