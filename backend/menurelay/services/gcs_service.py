"""
MenuRelay Backend — Google Cloud Storage Menu Store
=====================================================

What:  MenuStore backed by one object in one Google Cloud Storage bucket.
How:   Wraps the (blocking) google-cloud-storage Blob API and runs each call
       in Starlette's threadpool so the event loop keeps serving requests.
Who:   Singleton created at import; injected into MenuService per request.

Object model:
    gs://<MENU_BUCKET>/<MENU_OBJECT_NAME>
    - write:  Blob.upload_from_string (full overwrite, content type set)
    - read:   Blob.download_as_bytes
    - sign:   Blob.generate_signed_url (V4, PUT, content-type bound)

Signed URLs require credentials that can sign (a service-account key, or
IAM signBlob permission on Cloud Run). Without them signing fails and the
caller gets a 500.
"""

import logging
from datetime import timedelta
from typing import Optional

from google.api_core import exceptions as gcloud_exceptions
from google.cloud import storage
from starlette.concurrency import run_in_threadpool

from menurelay.config import settings
from menurelay.exceptions import MenuUnavailableError, StorageError
from menurelay.middleware.request_id import request_id_var
from menurelay.services.storage_base import MenuStore

logger = logging.getLogger(__name__)


class GcsMenuStore(MenuStore):
    """
    Google Cloud Storage implementation of the menu slot.

    The storage.Client is created lazily and reused for every request.
    """

    def __init__(
        self,
        bucket_name: Optional[str] = None,
        object_name: Optional[str] = None,
        content_type: Optional[str] = None,
        client: Optional[storage.Client] = None,
    ):
        """
        Args:
            bucket_name:  Override settings.menu_bucket (used in tests).
            object_name:  Override settings.menu_object_name.
            content_type: Override settings.menu_content_type for writes.
            client:       Pre-built storage client (used in tests).
        """
        self.bucket_name = bucket_name if bucket_name is not None else settings.menu_bucket
        self.object_name = object_name or settings.menu_object_name
        self.content_type = content_type or settings.menu_content_type
        self._client = client

    @property
    def client(self) -> storage.Client:
        if self._client is None:
            self._client = storage.Client()
            logger.info("Cloud Storage client initialized")
        return self._client

    def _blob(self) -> storage.Blob:
        if not self.bucket_name:
            raise StorageError(
                message="Storage bucket is not configured",
                context={"setting": "MENU_BUCKET"},
            )
        return self.client.bucket(self.bucket_name).blob(self.object_name)

    @property
    def location(self) -> str:
        return f"gs://{self.bucket_name}/{self.object_name}"

    async def write(self, data: bytes) -> None:
        rid = request_id_var.get("")
        try:
            blob = self._blob()
            await run_in_threadpool(
                blob.upload_from_string, data, content_type=self.content_type
            )
        except Exception as e:
            logger.error("[%s] Upload to %s failed: %s", rid, self.location, str(e))
            raise StorageError(
                message="Upload failed",
                context={"request_id": rid, "error_type": type(e).__name__},
            ) from e

        logger.info("[%s] Wrote %d bytes to %s", rid, len(data), self.location)

    async def read(self) -> bytes:
        rid = request_id_var.get("")
        try:
            blob = self._blob()
            data = await run_in_threadpool(blob.download_as_bytes)
        except gcloud_exceptions.NotFound as e:
            logger.warning("[%s] Menu object %s does not exist", rid, self.location)
            raise MenuUnavailableError(
                context={"request_id": rid, "reason": "not_found"},
            ) from e
        except Exception as e:
            logger.error("[%s] Reading %s failed: %s", rid, self.location, str(e))
            raise MenuUnavailableError(
                context={"request_id": rid, "error_type": type(e).__name__},
            ) from e

        logger.debug("[%s] Read %d bytes from %s", rid, len(data), self.location)
        return data

    async def signed_write_url(self, content_type: str, ttl_seconds: int) -> str:
        rid = request_id_var.get("")
        try:
            blob = self._blob()
            url = await run_in_threadpool(
                blob.generate_signed_url,
                version="v4",
                expiration=timedelta(seconds=ttl_seconds),
                method="PUT",
                content_type=content_type,
            )
        except Exception as e:
            logger.error("[%s] Signing upload URL for %s failed: %s", rid, self.location, str(e))
            raise StorageError(
                message="Could not create upload URL",
                context={"request_id": rid, "error_type": type(e).__name__},
            ) from e

        logger.info(
            "[%s] Issued %ds upload URL for %s (%s)",
            rid,
            ttl_seconds,
            self.location,
            content_type,
        )
        return url

    async def health_check(self) -> bool:
        """True when a bucket is configured and a client can be constructed."""
        if not self.bucket_name:
            return False
        try:
            return self.client is not None
        except Exception as e:
            logger.warning("Storage health check failed: %s", str(e))
            return False

    async def close(self) -> None:
        if self._client is None:
            return
        try:
            self._client.close()
        except Exception as e:
            logger.warning("Failed to close Cloud Storage client: %s", str(e))
        self._client = None


# ── Singleton Instance ────────────────────────────────────────────────────
menu_store = GcsMenuStore()
