"""Health, Readiness & Info — probes for container orchestration plus service info.

Invariants:
    - GET / returns {"name", "version"} from settings
    - GET /v1/health/ always returns 200 if process is up (liveness)
    - GET /v1/health/ready returns 503 if database is unreachable (readiness)
"""

import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from user_dal.config import Settings, get_settings
from user_dal.schemas.user import ServiceInfo

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/health", tags=["health"])
info_router = APIRouter(tags=["info"])


@info_router.get("/", response_model=ServiceInfo)
async def service_info(settings: Settings = Depends(get_settings)):
    return ServiceInfo(name=settings.service_name, version=settings.service_version)


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — includes database connectivity."""
    db_manager = getattr(request.app.state, "db_manager", None)
    db_ok = await db_manager.health_check() if db_manager else False
    if not db_ok:
        logger.warning("Readiness probe failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
