# Middleware package init
"""
MenuRelay Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → [Body Limit] → [GZip] → Route Handler

    1. CORS: Starlette's built-in, outermost so every response (including
       413 rejections) carries the CORS headers
    2. Request ID: Correlation ID for logging and the X-Request-ID header
    3. Logging: Method, path, status and duration, tagged with the request ID
    4. Body Limit: Rejects oversized bodies (declared or streamed) before any
       parsing
    5. GZip: Starlette's built-in

    The order is reversed for responses, so the access log sees the final
    status code including 413 rejections.
"""
