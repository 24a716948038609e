"""
MenuRelay Backend — Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract between the menu frontend
       and this relay.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.

Wire format:
    The frontend speaks camelCase (`imageBase64`, `uploadUrl`). Fields are
    snake_case in Python and carry a camelCase alias; FastAPI serializes
    responses by alias.

Required-field policy:
    Payload fields are declared Optional on purpose. A missing field is a
    business-level 400 with a fixed message (raised by the service layer),
    not FastAPI's automatic 422.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

Number = Union[int, float]


# ══════════════════════════════════════════════════════════════════════════
# Face Detection
# ══════════════════════════════════════════════════════════════════════════


class FaceRect(BaseModel):
    """
    Axis-aligned rectangle around one detected face, in image pixels.

    x/y are the minimum coordinates; w/h are never negative.
    """
    x: Number = Field(description="Minimum horizontal coordinate")
    y: Number = Field(description="Minimum vertical coordinate")
    w: Number = Field(description="Width (maxX - minX)")
    h: Number = Field(description="Height (maxY - minY)")


class DetectFacesRequest(BaseModel):
    image_base64: Optional[str] = Field(
        default=None,
        alias="imageBase64",
        description="Base64-encoded image bytes (no data: URL prefix)",
    )

    model_config = {"populate_by_name": True}


class DetectFacesResponse(BaseModel):
    """Rectangles sorted ascending by x; ties keep detection order."""
    faces: List[FaceRect] = Field(default_factory=list)


# ══════════════════════════════════════════════════════════════════════════
# Menu Document
# ══════════════════════════════════════════════════════════════════════════


class UploadPdfRequest(BaseModel):
    pdf_base64: Optional[str] = Field(
        default=None,
        alias="pdfBase64",
        description="Base64-encoded PDF document",
    )

    model_config = {"populate_by_name": True}


class UploadPdfResponse(BaseModel):
    ok: bool = Field(default=True)


class UploadUrlRequest(BaseModel):
    content_type: Optional[str] = Field(
        default=None,
        alias="contentType",
        description="Content type the client will PUT (defaults to application/pdf)",
    )

    model_config = {"populate_by_name": True}


class UploadUrlResponse(BaseModel):
    upload_url: str = Field(
        alias="uploadUrl",
        description="Signed URL accepting a single PUT of the menu document",
    )

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Errors & Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all JSON API errors.

    Example:
        {
            "error": "validation_error",
            "message": "No imageBase64 provided",
            "details": {"field": "imageBase64"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    vision: str = Field(description="Vision client status: available, unavailable")
    storage: str = Field(description="Storage status: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
