"""
Recipe API — Access Log Middleware
====================================

What:  One access-log line per HTTP request on the `recipe_api.access` logger.
How:   Times call_next, then logs the matched route template (for example
       /api/users/{user_id}) rather than the concrete path, so user IDs do
       not end up in access logs. Unmatched paths fall back to the raw path.
Who:   Applied to every request via Starlette middleware.

Level by status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Never logged: request bodies (passwords), query strings, Authorization headers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from recipe_api.middleware.request_id import request_id_var

logger = logging.getLogger("recipe_api.access")

# Probes hit these every few seconds
SKIPPED_PATHS = frozenset({"/health"})


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def route_label(request: Request) -> str:
    """Route template when the router matched one, otherwise the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log: method, route, status, duration, request ID, client."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        client = request.client.host if request.client else "-"
        route = route_label(request)
        logger.log(
            level_for_status(response.status_code),
            "%s %s -> %d in %.1fms (rid=%s, client=%s)",
            request.method,
            route,
            response.status_code,
            elapsed_ms,
            request_id_var.get("") or "-",
            client,
            extra={
                "route": route,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
