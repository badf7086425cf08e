"""
==============================================================================
Health Check Endpoints
==============================================================================

Service health endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hashcatalog.catalog.store import get_store
from hashcatalog.core.dependencies import get_lookup_service
from hashcatalog.schemas.health import HealthResponse
from hashcatalog.services.lookup_service import LookupService


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, service: LookupService):
        self._service = service

    def get_health(self) -> JSONResponse:
        """Get full health status; 503 unless healthy."""
        health = self._service.health()
        return JSONResponse(
            status_code=200 if health.healthy else 503,
            content=health.model_dump(mode="json"),
        )


@router.get("", response_model=HealthResponse)
def health_check(service: LookupService = Depends(get_lookup_service)):
    """
    Health check endpoint.

    Returns service and catalog status, including the catalog version.
    """
    controller = HealthController(service)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    store = get_store()
    return {"ready": store is not None and not store.is_closed}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
