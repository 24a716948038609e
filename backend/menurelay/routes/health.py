"""
MenuRelay Backend — Health Check Routes
=========================================

What:  Liveness (GET /) and dependency status (GET /health).
Who:   Called by Cloud Run / load balancer probes and monitoring.

    GET /        Plaintext, always 200 while the process is serving.
    GET /health  JSON; "degraded" when a cloud client cannot be built or the
                 bucket is not configured. Neither check calls a billed API.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from menurelay import __version__
from menurelay.dependencies import get_face_detector, get_menu_store
from menurelay.schemas.relay import HealthResponse
from menurelay.services.storage_base import MenuStore
from menurelay.services.vision_base import FaceDetector

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

LIVENESS_TEXT = "Face server up ✅"

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness probe")
async def liveness() -> str:
    return LIVENESS_TEXT


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the Vision and Storage clients are usable.",
)
async def health_check(
    detector: FaceDetector = Depends(get_face_detector),
    store: MenuStore = Depends(get_menu_store),
) -> HealthResponse:
    vision_status = "available" if await detector.health_check() else "unavailable"
    storage_status = "available" if await store.health_check() else "unavailable"

    overall = "healthy"
    if vision_status != "available" or storage_status != "available":
        overall = "degraded"
        logger.warning(
            "Health check degraded: vision=%s storage=%s", vision_status, storage_status
        )

    return HealthResponse(
        status=overall,
        version=__version__,
        vision=vision_status,
        storage=storage_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
