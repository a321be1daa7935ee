"""
Recipe API — Health Check Route
=================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the user store and reports how much catalog data is loaded.
Who:   Called by container health checks, load balancers and monitoring.

Status levels:
    - healthy:   user store reachable and catalog loaded (HTTP 200)
    - unhealthy: user store unreachable or catalog empty (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from recipe_api import __version__
from recipe_api.dependencies import get_catalog_service, get_user_store
from recipe_api.schemas.common import HealthResponse
from recipe_api.services.catalog_service import CatalogService
from recipe_api.services.user_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "A dependency is down", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: UserStore = Depends(get_user_store),
    catalog: CatalogService = Depends(get_catalog_service),
) -> HealthResponse:
    """Probe the user store with SELECT 1 and count catalog entries."""
    db_ok = await store.ping()
    catalog_ok = catalog.recipe_count > 0 and catalog.category_count > 0

    overall = "healthy" if db_ok and catalog_ok else "unhealthy"
    if overall != "healthy":
        response.status_code = 503
        logger.warning("Health check: database=%s catalog_loaded=%s", db_ok, catalog_ok)

    return HealthResponse(
        status=overall,
        version=__version__,
        database="connected" if db_ok else "disconnected",
        categories=catalog.category_count,
        recipes=catalog.recipe_count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
