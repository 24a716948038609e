"""
MenuRelay Backend — Menu Service (Document Slot Orchestrator)
==============================================================

What:  Upload, fetch and signed-upload-URL workflows for the menu PDF.
How:   Checks input, then delegates to the injected MenuStore.
Who:   Called by the /uploadPdfDirect, /menu_current and /getUploadUrl routes.

There is exactly one menu object. Every upload replaces it; concurrent
uploads are not coordinated and the last one wins.
"""

import logging
from typing import Optional

from menurelay.config import settings
from menurelay.exceptions import StorageError
from menurelay.schemas.relay import UploadPdfResponse, UploadUrlResponse
from menurelay.services.payload import decode_base64, require_field
from menurelay.services.storage_base import MenuStore

logger = logging.getLogger(__name__)


class MenuService:
    """
    Business logic for the menu document slot.

    Attributes:
        store:                 Injected MenuStore.
        default_content_type:  Content type used when a caller asks for none.
        url_ttl:               Signed URL lifetime in seconds.
    """

    def __init__(
        self,
        store: MenuStore,
        default_content_type: Optional[str] = None,
        url_ttl: Optional[int] = None,
    ):
        self.store = store
        self.default_content_type = default_content_type or settings.menu_content_type
        self.url_ttl = url_ttl or settings.upload_url_ttl

    async def upload_pdf(self, pdf_base64: Optional[str]) -> UploadPdfResponse:
        """
        Decode and overwrite the menu document.

        Raises:
            ValidationError: pdfBase64 missing or empty (no write is
                attempted).
            StorageError: "Upload failed" when the document does not decode
                (no write is attempted) or the write failed.
        """
        encoded = require_field(pdf_base64, "pdfBase64")
        try:
            document = decode_base64(encoded)
        except ValueError as e:
            raise StorageError(
                message="Upload failed",
                context={"reason": "undecodable document", "error": str(e)},
            ) from e
        await self.store.write(document)
        logger.info("Menu document replaced (%d bytes)", len(document))
        return UploadPdfResponse(ok=True)

    async def current_menu(self) -> bytes:
        """
        Return the latest menu document.

        Raises:
            MenuUnavailableError: nothing stored yet, or the read failed.
        """
        return await self.store.read()

    async def issue_upload_url(self, content_type: Optional[str] = None) -> UploadUrlResponse:
        """
        Issue a short-lived PUT URL for client-side upload of the menu.

        An absent or empty content type falls back to the default PDF type.

        Raises:
            StorageError: signing failed.
        """
        effective_type = content_type or self.default_content_type
        url = await self.store.signed_write_url(effective_type, self.url_ttl)
        return UploadUrlResponse(upload_url=url)
