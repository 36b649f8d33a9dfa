"""
Repairs API — Health Check Route
=================================

What:  Health check endpoint for monitoring and container health checks.
How:   The only dependency is the in-memory store, so "healthy" means the app
       is serving and the store answers; the live record count is included.
"""

import time

from fastapi import APIRouter, Depends

from repairs_api import __version__
from repairs_api.schemas.repair import HealthResponse
from repairs_api.store import RepairStore, get_store

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: RepairStore = Depends(get_store)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        repairs=len(store),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
