"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health and GET /api/v1/health always return 200 if the process is up (liveness)
    - GET /api/v1/health/ready returns 503 if the database is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - db_manager read through the module at call time: it is created in the lifespan
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from introhub.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])
root_router = APIRouter(tags=["health"])

SERVICE_NAME = "introhub-api"
SERVICE_VERSION = "1.0.0"


@root_router.get("/health", status_code=status.HTTP_200_OK)
async def root_health_check():
    """Plain liveness probe kept at the root path."""
    return {"status": "ok"}


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
