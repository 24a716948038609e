"""
MenuRelay Backend — Cloud Storage Menu Store Unit Tests (Mocked)
==================================================================

What:  Tests for GcsMenuStore with a mocked google-cloud-storage client.
How:   client.bucket().blob() returns a MagicMock blob; blocking calls still
       go through the threadpool, exactly as in production.
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as gcloud_exceptions

from menurelay.exceptions import MenuUnavailableError, StorageError
from menurelay.services.gcs_service import GcsMenuStore


def make_store(bucket_name="menu-bucket"):
    client = MagicMock()
    blob = client.bucket.return_value.blob.return_value
    store = GcsMenuStore(
        bucket_name=bucket_name,
        object_name="menu_current.pdf",
        content_type="application/pdf",
        client=client,
    )
    return store, client, blob


class TestWrite:

    @pytest.mark.asyncio
    async def test_overwrites_fixed_object(self):
        store, client, blob = make_store()

        await store.write(b"%PDF-1.4")

        client.bucket.assert_called_once_with("menu-bucket")
        client.bucket.return_value.blob.assert_called_once_with("menu_current.pdf")
        blob.upload_from_string.assert_called_once_with(b"%PDF-1.4", content_type="application/pdf")

    @pytest.mark.asyncio
    async def test_sdk_failure_becomes_storage_error(self):
        store, _, blob = make_store()
        blob.upload_from_string.side_effect = gcloud_exceptions.Forbidden("no access to bucket")

        with pytest.raises(StorageError) as exc_info:
            await store.write(b"%PDF-1.4")

        assert exc_info.value.message == "Upload failed"
        assert exc_info.value.context["error_type"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_unconfigured_bucket_never_calls_client(self):
        store, client, _ = make_store(bucket_name="")

        with pytest.raises(StorageError):
            await store.write(b"%PDF-1.4")

        client.bucket.assert_not_called()


class TestRead:

    @pytest.mark.asyncio
    async def test_returns_object_bytes(self):
        store, _, blob = make_store()
        blob.download_as_bytes.return_value = b"%PDF-current"

        assert await store.read() == b"%PDF-current"

    @pytest.mark.asyncio
    async def test_missing_object_is_menu_unavailable(self):
        store, _, blob = make_store()
        blob.download_as_bytes.side_effect = gcloud_exceptions.NotFound("no such object")

        with pytest.raises(MenuUnavailableError) as exc_info:
            await store.read()

        assert exc_info.value.message == "Could not load menu"
        assert exc_info.value.context["reason"] == "not_found"

    @pytest.mark.asyncio
    async def test_other_failure_is_menu_unavailable(self):
        store, _, blob = make_store()
        blob.download_as_bytes.side_effect = ConnectionError("reset by peer")

        with pytest.raises(MenuUnavailableError):
            await store.read()


class TestSignedWriteUrl:

    @pytest.mark.asyncio
    async def test_v4_put_url_bound_to_content_type(self):
        store, _, blob = make_store()
        blob.generate_signed_url.return_value = "https://storage.googleapis.com/menu-bucket/menu_current.pdf?X-Goog-Signature=abc"

        url = await store.signed_write_url("application/pdf", 300)

        assert url.startswith("https://storage.googleapis.com/")
        blob.generate_signed_url.assert_called_once_with(
            version="v4",
            expiration=timedelta(seconds=300),
            method="PUT",
            content_type="application/pdf",
        )

    @pytest.mark.asyncio
    async def test_signing_failure_becomes_storage_error(self):
        store, _, blob = make_store()
        blob.generate_signed_url.side_effect = AttributeError(
            "you need a private key to sign credentials"
        )

        with pytest.raises(StorageError) as exc_info:
            await store.signed_write_url("application/pdf", 300)

        assert exc_info.value.message == "Could not create upload URL"


class TestHealthAndClose:

    @pytest.mark.asyncio
    async def test_health_requires_bucket(self):
        configured, _, _ = make_store()
        unconfigured, _, _ = make_store(bucket_name="")

        assert await configured.health_check() is True
        assert await unconfigured.health_check() is False

    @pytest.mark.asyncio
    async def test_close_closes_client(self):
        store, client, _ = make_store()

        await store.close()

        client.close.assert_called_once()
