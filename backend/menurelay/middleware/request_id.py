"""
MenuRelay Backend — Request ID Middleware
===========================================

What:  Assigns an ID to each incoming request and echoes it in the response.
How:   Reads X-Request-ID from the client or generates a short UUID, stores
       it in a ContextVar for loggers and services, returns it in a header.
When:  Outermost middleware (runs before all other processing).

Every log line written while serving a request can be tagged with the same
ID, and the frontend can quote it in error reports.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the client's X-Request-ID header when present
        2. Otherwise generate an 8-character UUID prefix
        3. Store in the ContextVar and in request.state
        4. Add to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        return response
