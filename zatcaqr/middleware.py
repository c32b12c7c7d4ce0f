"""Request timing middleware."""
from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .monitoring import observe_request

logger = logging.getLogger("zatcaqr.http")


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return route.path if route else request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its status and latency, and feed the request metrics."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            path = _route_path(request)
            level = logging.INFO if status_code < 400 else logging.WARNING if status_code < 500 else logging.ERROR
            logger.log(
                level,
                "request completed",
                extra={"method": request.method, "path": path, "status_code": status_code, "duration_ms": duration_ms},
            )
            observe_request(request.method, path, status_code, duration_ms)
