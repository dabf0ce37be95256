"""Health & Readiness Probes — liveness and database readiness.

Invariants:
    - GET /health/ always returns 200 while the process is up (liveness)
    - GET /health/ready returns 503 when the database is unreachable or not initialized
    - Probes are unauthenticated and never touch the identity or payment providers
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from lessons_api.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "digital-life-lessons-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness():
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
