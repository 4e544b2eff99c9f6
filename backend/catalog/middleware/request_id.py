"""
Product Catalog Backend: Request ID Middleware
==============================================

What:  Assigns each request a short correlation id and returns it in the
       X-Request-ID response header.
How:   Uses the client's X-Request-ID when present, otherwise the first
       8 characters of a fresh UUID4. The id lives on `request.state`, where
       the access log and the exception handlers read it.
"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
