"""
MenuRelay Backend — Face Service (Detection Orchestrator)
==========================================================

What:  Coordinates check → decode → detect → normalize for /detectFaces.
How:   Composes a FaceDetector (injected) with the bounding-box normalizer.
Who:   Called by the /detectFaces route handler.

Orchestration Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌─────────────┐
    │  Route   │───▶│  Validate   │───▶│ FaceDetector │───▶│ Normalize   │
    │          │    │  & Decode   │    │ (Vision API) │    │ (face_boxes)│
    └──────────┘    └─────────────┘    └──────────────┘    └─────────────┘

    A missing image raises before the detector is touched. An image that does
    not decode is reported like any other Vision failure.
"""

import logging
from typing import Optional

from menurelay.exceptions import FaceDetectionError
from menurelay.schemas.relay import DetectFacesResponse
from menurelay.services.face_boxes import faces_to_rects
from menurelay.services.payload import decode_base64, require_field
from menurelay.services.vision_base import FaceDetector

logger = logging.getLogger(__name__)


class FaceService:
    """
    Business logic for face detection.

    Holds no per-request state; the detector it wraps is the long-lived
    singleton from the dependency layer.
    """

    def __init__(self, detector: FaceDetector):
        self.detector = detector

    async def detect(self, image_base64: Optional[str]) -> DetectFacesResponse:
        """
        Detect faces in a base64 image and return sorted rectangles.

        Raises:
            ValidationError: imageBase64 missing or empty (no detector call
                is made).
            FaceDetectionError: the image did not decode, or the detector
                failed.
        """
        encoded = require_field(image_base64, "imageBase64")
        try:
            image = decode_base64(encoded)
        except ValueError as e:
            raise FaceDetectionError(
                context={"reason": "undecodable image", "error": str(e)},
            ) from e

        annotations = await self.detector.detect_faces(image)
        faces = faces_to_rects(annotations)

        dropped = len(annotations) - len(faces)
        if dropped:
            logger.info("Dropped %d annotation(s) without usable vertices", dropped)
        logger.info(
            "Face detection: %d byte image, %d annotation(s), %d face(s)",
            len(image),
            len(annotations),
            len(faces),
        )
        return DetectFacesResponse(faces=faces)
