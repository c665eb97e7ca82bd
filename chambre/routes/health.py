"""
Chambre API: Health Check Route
=================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Probes the store with SELECT 1 and reports aggregate status.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   store reachable
    - unhealthy: store unreachable (body still returned with HTTP 200 so
                 the payload can be inspected; probes read `status`)
"""

import logging
import time

from fastapi import APIRouter, Depends

from chambre import __version__
from chambre.database import Database, get_database
from chambre.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the service and its store.",
)
async def health_check(database: Database = Depends(get_database)) -> HealthResponse:
    connected = await database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
