"""Health Probes: liveness and readiness for the container orchestrator.

Invariants:
    - GET /health/ answers 200 whenever the process serves requests
    - GET /health/ready answers 503 until the database round-trips
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from matchbox.config import get_settings
from matchbox.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness(request: Request):
    return {"status": "healthy", "service": "matchbox-api", "version": request.app.version}


@router.get("/ready")
async def readiness():
    """Database connectivity plus the conversation settings in force."""
    # Read at call time: init_db (or a test) replaces the module attribute.
    manager = database.db_manager
    if manager is None or not await manager.ping():
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "conversation_pair_uniqueness": get_settings().conversation_pair_uniqueness,
    }
