"""
MenuRelay Backend — Face Detection Route Handler
==================================================

What:  Handles POST /detectFaces.
How:   Reads the JSON body, delegates to FaceService, returns rectangles.
Who:   Called by the menu frontend's camera view.

Request Flow:
    1. Client sends {"imageBase64": "..."} (body capped by BodySizeLimitMiddleware)
    2. FaceService checks the field, decodes it, calls Cloud Vision
    3. Annotations are normalized into rectangles sorted by x
    4. Return 200 {"faces": [{x, y, w, h}, ...]}
"""

from typing import Optional

from fastapi import APIRouter, Depends

from menurelay.dependencies import get_face_service
from menurelay.schemas.relay import DetectFacesRequest, DetectFacesResponse, ErrorResponse
from menurelay.services.face_service import FaceService


router = APIRouter(tags=["Faces"])


@router.post(
    "/detectFaces",
    response_model=DetectFacesResponse,
    responses={
        200: {"description": "Faces detected (possibly none)", "model": DetectFacesResponse},
        400: {"description": "imageBase64 missing or empty", "model": ErrorResponse},
        413: {"description": "Request body too large", "model": ErrorResponse},
        500: {"description": "Vision call failed (including an undecodable image)", "model": ErrorResponse},
    },
    summary="Detect faces in a base64 image",
    description=(
        "Sends the image to Google Cloud Vision face detection and returns one "
        "axis-aligned rectangle per detected face, sorted left to right."
    ),
)
async def detect_faces(
    payload: Optional[DetectFacesRequest] = None,
    service: FaceService = Depends(get_face_service),
) -> DetectFacesResponse:
    image_base64 = payload.image_base64 if payload else None
    return await service.detect(image_base64)
