"""Health endpoint."""

from fastapi import APIRouter

from silkroad.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    from silkroad.api.routes.compliance import screening_mode
    from silkroad.main import get_uptime

    return {
        "status": "healthy",
        "version": settings.app_version,
        "uptime_seconds": get_uptime(),
        "screening_mode": screening_mode(),
    }
