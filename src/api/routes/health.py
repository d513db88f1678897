"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.v1.dependencies import get_profile_store
from core.config import settings
from core.exceptions import AppException
from domain.gateways.profile_store import IProfileStore

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"

# User ID looked up by the detailed check; never registered
_HEALTHCHECK_USER_ID = "healthcheck-user"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    profile_store: str | None = None


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without touching Firebase.
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    store: IProfileStore = Depends(get_profile_store),
) -> HealthResponse:
    """Health check that also reads from the profile store."""
    try:
        await store.check_user_has_profile(_HEALTHCHECK_USER_ID)
        store_status = "healthy"
    except AppException as e:
        store_status = f"unhealthy: {e.message}"

    return HealthResponse(
        status="healthy" if store_status == "healthy" else "degraded",
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        profile_store=store_status,
    )
