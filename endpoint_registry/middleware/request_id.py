"""
Endpoint Registry — Request ID Middleware
===========================================

What:  Assigns a correlation ID to each request and echoes it in the response.
Why:   Every log line and every error body of one request share the same ID,
       so a client-reported error can be found in the logs directly.
How:   Reuses an incoming X-Request-ID header or generates a short UUID,
       stores it in a ContextVar and on request.state, and sets the
       X-Request-ID response header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 characters are enough for correlation and stay readable in logs
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
