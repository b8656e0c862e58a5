"""
Exercise Tracker — Health Check Route
=======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs `SELECT 1` through the app's Database object.
Who:   Called by container health checks and load balancers.

Status levels:
    healthy:   database reachable (HTTP 200)
    unhealthy: database unreachable (HTTP 503, stop routing traffic)

The server keeps running when the database is down at startup; this
endpoint is how that condition becomes visible.
"""

import logging
import time

from fastapi import APIRouter, Request, Response

from exercise_tracker import __version__
from exercise_tracker.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the backing database is reachable.",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    database = request.app.state.database

    if await database.is_healthy():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
