"""
MenuRelay Backend — Menu Document Route Handlers
==================================================

What:  Handles the three endpoints around the single menu PDF.
How:   Delegates to MenuService; storage failures are raised as exceptions
       and formatted by the global handlers.

Caching Strategy:
    - GET /menu_current: Cache-Control: no-store. The document is replaced
      in place, so any cached copy could be stale immediately.
    - POST endpoints: never cached.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from menurelay.config import settings
from menurelay.dependencies import get_menu_service
from menurelay.schemas.relay import (
    ErrorResponse,
    UploadPdfRequest,
    UploadPdfResponse,
    UploadUrlRequest,
    UploadUrlResponse,
)
from menurelay.services.menu_service import MenuService


router = APIRouter(tags=["Menu"])


@router.post(
    "/uploadPdfDirect",
    response_model=UploadPdfResponse,
    responses={
        400: {"description": "pdfBase64 missing or empty", "model": ErrorResponse},
        413: {"description": "Request body too large", "model": ErrorResponse},
        500: {"description": "Upload failed (including an undecodable document)", "model": ErrorResponse},
    },
    summary="Replace the menu PDF",
    description="Decodes the base64 PDF and overwrites the current menu object.",
)
async def upload_pdf_direct(
    payload: Optional[UploadPdfRequest] = None,
    service: MenuService = Depends(get_menu_service),
) -> UploadPdfResponse:
    pdf_base64 = payload.pdf_base64 if payload else None
    return await service.upload_pdf(pdf_base64)


@router.post(
    "/getUploadUrl",
    response_model=UploadUrlResponse,
    responses={
        500: {"description": "Could not create upload URL", "model": ErrorResponse},
    },
    summary="Get a signed upload URL for the menu PDF",
    description=(
        "Returns a V4 signed URL, valid for five minutes, that accepts a single "
        "PUT of the menu document with the given content type."
    ),
)
async def get_upload_url(
    payload: Optional[UploadUrlRequest] = None,
    service: MenuService = Depends(get_menu_service),
) -> UploadUrlResponse:
    content_type = payload.content_type if payload else None
    return await service.issue_upload_url(content_type)


@router.get(
    "/menu_current",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "The current menu PDF"},
        500: {"content": {"text/plain": {}}, "description": "Could not load menu"},
    },
    summary="Download the current menu PDF",
)
async def menu_current(service: MenuService = Depends(get_menu_service)) -> Response:
    document = await service.current_menu()
    return Response(
        content=document,
        media_type=settings.menu_content_type,
        headers={"Cache-Control": "no-store"},
    )
