"""
MenuRelay Backend — Google Cloud Vision Service Implementation
===============================================================

What:  Concrete FaceDetector using Google Cloud Vision FACE_DETECTION.
How:   Sends one AnnotateImageRequest through the async Vision client and
       returns the face annotations from the single response.
Who:   Singleton created at import; injected into FaceService per request.
When:  After the request payload has been validated and decoded.

Failure Policy:
    No retries and no circuit breaker. A transport failure, an SDK exception,
    or an error status embedded in the per-image response all become a
    FaceDetectionError, which the global handler maps to a generic 500.
"""

import logging
import time
from typing import Any, List, Optional

from google.cloud import vision

from menurelay.exceptions import FaceDetectionError
from menurelay.middleware.request_id import request_id_var
from menurelay.services.vision_base import FaceDetector

logger = logging.getLogger(__name__)


class GoogleVisionService(FaceDetector):
    """
    Google Cloud Vision implementation of face detection.

    Architecture:
        - Singleton instance, one async client shared by all requests
        - Client is created lazily on first use: constructing it resolves
          application-default credentials, which must not happen at import
        - The client's gRPC channel is closed in the app lifespan shutdown
    """

    def __init__(self, client: Optional[vision.ImageAnnotatorAsyncClient] = None):
        """
        Args:
            client: Pre-built async client (used in tests). If None, one is
                    created on first call.
        """
        self._client = client

    @property
    def client(self) -> vision.ImageAnnotatorAsyncClient:
        if self._client is None:
            self._client = vision.ImageAnnotatorAsyncClient()
            logger.info("Cloud Vision async client initialized")
        return self._client

    def _build_request(self, image: bytes) -> vision.BatchAnnotateImagesRequest:
        return vision.BatchAnnotateImagesRequest(
            requests=[
                vision.AnnotateImageRequest(
                    image=vision.Image(content=image),
                    features=[vision.Feature(type_=vision.Feature.Type.FACE_DETECTION)],
                )
            ]
        )

    async def detect_faces(self, image: bytes) -> List[Any]:
        """
        Run FACE_DETECTION on one image.

        Flow:
            1. Build a single-image batch request with one feature
            2. Await the async client
            3. Check the embedded per-image error status
            4. Return the face annotations (possibly empty)

        Raises:
            FaceDetectionError: on any SDK/transport failure or error status.
        """
        rid = request_id_var.get("")
        start_time = time.perf_counter()

        try:
            response = await self.client.batch_annotate_images(
                request=self._build_request(image)
            )
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "[%s] Cloud Vision call failed after %.0fms: %s",
                rid,
                duration_ms,
                str(e),
                exc_info=True,
            )
            raise FaceDetectionError(
                context={"request_id": rid, "error_type": type(e).__name__},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000

        if not response.responses:
            raise FaceDetectionError(
                context={"request_id": rid, "reason": "empty batch response"},
            )

        result = response.responses[0]
        if result.error and result.error.message:
            logger.error(
                "[%s] Cloud Vision returned error status %d: %s",
                rid,
                result.error.code,
                result.error.message,
            )
            raise FaceDetectionError(
                context={"request_id": rid, "status_code": result.error.code},
            )

        annotations = list(result.face_annotations)
        logger.info(
            "[%s] Cloud Vision face detection completed in %.0fms, %d face(s)",
            rid,
            duration_ms,
            len(annotations),
        )
        return annotations

    async def health_check(self) -> bool:
        """
        Check that a Vision client can be constructed.

        Does not call the API: detection requests are billed.
        """
        try:
            return self.client is not None
        except Exception as e:
            logger.warning("Vision health check failed: %s", str(e))
            return False

    async def close(self) -> None:
        if self._client is None:
            return
        try:
            await self._client.transport.close()
        except Exception as e:
            logger.warning("Failed to close Cloud Vision client: %s", str(e))
        self._client = None


# ── Singleton Instance ────────────────────────────────────────────────────
vision_service = GoogleVisionService()
