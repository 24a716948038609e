"""
MenuRelay Backend — Request Body Size Limit Middleware
========================================================

What:  Caps request bodies at settings.max_body_size (10MB by default).
How:   - Declared Content-Length above the ceiling → 413 before the body is read
       - Malformed Content-Length                  → 400 Bad Request
       - No Content-Length (chunked upload)         → body is read here while
         counting bytes; 413 as soon as the count passes the ceiling,
         otherwise the buffered body is replayed to the app
When:  Before any route handler parses JSON.

Base64 payloads are parsed fully into memory, so the ceiling is what bounds
memory per request. Rejections use the same JSON error format as the global
exception handlers.

Written as a plain ASGI middleware: BaseHTTPMiddleware gives no hook for
replacing the `receive` channel the app reads the body from.
"""

import logging
from typing import List, Optional

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from menurelay.config import settings
from menurelay.exceptions import PayloadTooLargeError
from menurelay.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Rejects requests whose body exceeds the configured ceiling.

    Args:
        max_size: Override settings.max_body_size (used in tests).
    """

    def __init__(self, app: ASGIApp, max_size: Optional[int] = None):
        self.app = app
        self.max_size = max_size or settings.max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")

        if content_length is None:
            await self._stream_with_limit(scope, receive, send)
            return

        try:
            declared = int(content_length)
        except ValueError:
            response = self._error(
                400,
                "validation_error",
                "Invalid Content-Length header.",
                {"field": "Content-Length"},
            )
            await response(scope, receive, send)
            return

        if declared > self.max_size:
            await self._reject(scope, receive, send, {"declared_size": declared})
            return

        await self.app(scope, receive, send)

    async def _stream_with_limit(self, scope: Scope, receive: Receive, send: Send) -> None:
        chunks: List[bytes] = []
        received = 0
        more_body = True

        while more_body:
            message = await receive()
            if message["type"] != "http.request":
                # Client went away mid-body; nothing left to answer
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_size:
                await self._reject(scope, receive, send, {"received_size": received})
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send, context: dict) -> None:
        exc = PayloadTooLargeError(max_size=self.max_size, context=context)
        logger.warning(
            "[%s] Rejected %s %s: body exceeds %d bytes | Context: %s",
            request_id_var.get(""),
            scope["method"],
            scope["path"],
            self.max_size,
            context,
        )
        response = self._error(413, "payload_too_large", exc.message, exc.context)
        await response(scope, receive, send)

    def _error(self, status_code: int, error: str, message: str, details: dict) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={
                "error": error,
                "message": message,
                "details": details,
                "request_id": request_id_var.get(""),
            },
        )
