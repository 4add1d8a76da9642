"""
Notekeeper Backend — Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the configured repository and reports its status with uptime.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   Repository reachable
    - unhealthy: Repository unreachable (notes cannot be served)
"""

import logging
import time

from fastapi import APIRouter, Depends

from app import __version__
from app.repositories import NoteRepository, get_note_repository
from app.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    repo: NoteRepository = Depends(get_note_repository),
) -> HealthResponse:
    """
    Check the health of the service and its database.

    The repository ping is a `SELECT 1` for SQL stores, so this is cheap
    enough for frequent probes.
    """
    db_status = "connected"
    overall = "healthy"

    if not await repo.ping():
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
