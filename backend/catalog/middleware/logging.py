"""
Product Catalog Backend: Request Logging Middleware
===================================================

What:  One access line per request on `catalog.access`.
How:   Written after the response is produced; level follows the status
       class (5xx ERROR, 4xx WARNING, otherwise INFO). Requests to the
       by-id routes also carry the raw `id` query value, so a 400/404 can
       be traced to the identifier the client sent. Bodies are never
       logged and GET /health is skipped.

Example:
    PUT /product?id=7 -> 404 2.4ms [a1b2c3d4] from 10.0.0.5
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from catalog.middleware.request_id import get_request_id

logger = logging.getLogger("catalog.access")

BY_ID_PATH = "/product"
UNLOGGED_PATHS = frozenset({"/health"})


def describe_target(request: Request) -> str:
    """`path`, plus `?id=<raw>` on the by-id routes (the value as sent)."""
    path = request.url.path
    if path == BY_ID_PATH:
        return f"{path}?id={request.query_params.get('id', '')}"
    return path


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.log(
            level_for(response.status_code),
            "%s %s -> %d %.1fms [%s] from %s",
            request.method,
            describe_target(request),
            response.status_code,
            elapsed_ms,
            get_request_id(request),
            request.client.host if request.client else "unknown",
        )
        return response
