"""
MenuRelay Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn menurelay.main:app) or the `menurelay`
       console script.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────┐ ┌────────┐ ┌─────────┐ ┌────────────┐     │
    │  │ CORS │→│ Req ID │→│ Logging │→│ Body Limit │→GZip│
    │  └──────┘ └────────┘ └─────────┘ └────────────┘     │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────────┐ ┌─────────┐  │
    │  │ /detectFaces │ │ /uploadPdfDirect │ │ / health│  │
    │  │              │ │ /getUploadUrl    │ │         │  │
    │  │              │ │ /menu_current    │ │         │  │
    │  └──────────────┘ └──────────────────┘ └─────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ Vision→500 │ Storage→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration, log listen address
    Shutdown: close the Vision and Storage clients
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from menurelay import __version__
from menurelay.config import settings
from menurelay.exceptions import (
    FaceDetectionError,
    MenuUnavailableError,
    RelayError,
    StorageError,
    ValidationError,
)
from menurelay.middleware.body_limit import BodySizeLimitMiddleware
from menurelay.middleware.logging import RequestLoggingMiddleware
from menurelay.middleware.request_id import RequestIDMiddleware, request_id_var
from menurelay.routes import faces, health, menu
from menurelay.services.gcs_service import menu_store
from menurelay.services.vision_service import vision_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] menurelay.access: POST /detectFaces 200 ...
    Output: stdout (collected by Cloud Run / Docker).
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every call at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("google.auth").setLevel(logging.WARNING)
    logging.getLogger("google.api_core").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  logging, configuration check, listen address.
    Shutdown: close long-lived SDK clients.

    A configuration error is logged but does not abort startup, so the
    liveness probe keeps answering while the operator fixes the environment.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("MenuRelay Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info(
        "Menu object: gs://%s/%s",
        settings.menu_bucket or "<unset>",
        settings.menu_object_name,
    )
    logger.info("Listening on port %d", settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("MenuRelay Backend shutting down...")
    await vision_service.close()
    await menu_store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        ValidationError         → 400 (client can fix the input)
        RequestValidationError  → 400 (malformed JSON / wrong field types)
        FaceDetectionError      → 500 "Vision call failed"
        MenuUnavailableError    → 500 plaintext "Could not load menu"
        StorageError            → 500 fixed per-operation message
        RelayError (base)       → 500
        Exception (fallback)    → 500 generic message, traceback logged

    Upstream detail (exc.context) is logged with the request ID and never
    included in the response body.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": {"field": exc.field} if exc.field else None,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        # Error locations only: the offending input may be a multi-MB base64 string
        locations = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
        logger.warning("[%s] Malformed request body at %s", rid, locations)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Malformed request body",
                "details": None,
                "request_id": rid,
            },
        )

    @app.exception_handler(FaceDetectionError)
    async def handle_face_detection_error(request: Request, exc: FaceDetectionError):
        rid = request_id_var.get("")
        logger.error("[%s] detectFaces error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "vision_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(MenuUnavailableError)
    async def handle_menu_unavailable(request: Request, exc: MenuUnavailableError):
        rid = request_id_var.get("")
        logger.error("[%s] menu_current error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "storage_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(RelayError)
    async def handle_relay_error(request: Request, exc: RelayError):
        rid = request_id_var.get("")
        logger.error("[%s] Relay error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="MenuRelay API",
        description=(
            "Relay for Google Cloud Vision face detection and the restaurant's "
            "current menu PDF in Google Cloud Storage."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: the last added runs
    # first. Execution order: CORS → RequestID → Logging → BodyLimit → GZip

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(BodySizeLimitMiddleware)

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)

    # Outermost, so early rejections (413 from BodyLimit) carry CORS headers
    allow_any_origin = settings.cors_origins_list == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        # Browsers reject credentials with a wildcard origin
        allow_credentials=not allow_any_origin,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(faces.router)
    app.include_router(menu.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console-script entry point: serve the app on settings.host:settings.port."""
    uvicorn.run(
        "menurelay.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
