"""Health probes — process liveness and database readiness.

Invariants:
    - Both probes live outside /api/ and are never session-gated
    - /health/ready answers 503 until db_manager exists and can run a query
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from scheduler.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def liveness(request: Request) -> dict:
    """Name and version of the running app."""
    return {
        "status": "ok",
        "service": request.app.title,
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness():
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        logger.warning("Readiness probe failed: database unreachable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "database": "unreachable"},
        )
    return {"status": "ready", "database": manager.engine.dialect.name}
