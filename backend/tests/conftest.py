"""
MenuRelay Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── face_detector: FakeFaceDetector with canned annotations
    ├── fake_menu_store: InMemoryMenuStore with call counters
    ├── sample_pdf_bytes / sample_pdf_base64: Minimal PDF payload
    ├── sample_image_base64: Minimal JPEG payload
    └── test_client: HTTPX AsyncClient wired to the app with fakes injected

No test talks to Google Cloud: the SDK-backed adapters are replaced through
FastAPI dependency overrides or built around mocked clients.
"""

import base64
import os
from typing import Any, List, Optional

# Override settings for testing BEFORE any menurelay imports
os.environ["MENU_BUCKET"] = "test-menu-bucket"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from menurelay.exceptions import MenuUnavailableError
from menurelay.services.storage_base import MenuStore
from menurelay.services.vision_base import FaceDetector


# ══════════════════════════════════════════════════════════════════════════
# Fakes
# ══════════════════════════════════════════════════════════════════════════

class FakeFaceDetector(FaceDetector):
    """
    Returns canned annotations, or raises `error` when set.

    `calls` records every image passed in, so tests can assert that
    validation failures never reach the detector.
    """

    def __init__(self, annotations: Optional[List[Any]] = None, error: Optional[Exception] = None):
        self.annotations = annotations or []
        self.error = error
        self.calls: List[bytes] = []

    async def detect_faces(self, image: bytes) -> List[Any]:
        self.calls.append(image)
        if self.error:
            raise self.error
        return list(self.annotations)

    async def health_check(self) -> bool:
        return True


class InMemoryMenuStore(MenuStore):
    """Single in-memory slot with per-operation call counters."""

    def __init__(self, data: Optional[bytes] = None):
        self.data = data
        self.error: Optional[Exception] = None
        self.write_calls = 0
        self.read_calls = 0
        self.sign_calls: List[tuple] = []

    async def write(self, data: bytes) -> None:
        self.write_calls += 1
        if self.error:
            raise self.error
        self.data = data

    async def read(self) -> bytes:
        self.read_calls += 1
        if self.error:
            raise self.error
        if self.data is None:
            raise MenuUnavailableError(context={"reason": "not_found"})
        return self.data

    async def signed_write_url(self, content_type: str, ttl_seconds: int) -> str:
        self.sign_calls.append((content_type, ttl_seconds))
        if self.error:
            raise self.error
        return f"https://storage.example.test/menu?ttl={ttl_seconds}&sig=abc"

    async def health_check(self) -> bool:
        return True


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def face_detector():
    return FakeFaceDetector()


@pytest.fixture
def fake_menu_store():
    return InMemoryMenuStore()


@pytest.fixture
def sample_image_base64():
    """Smallest JPEG-looking payload: SOI + JFIF header + EOI."""
    jpeg = (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )
    return base64.b64encode(jpeg).decode("ascii")


@pytest.fixture
def sample_pdf_bytes():
    return b"%PDF-1.4\n1 0 obj<<>>endobj\ntrailer<<>>\n%%EOF\n"


@pytest.fixture
def sample_pdf_base64(sample_pdf_bytes):
    return base64.b64encode(sample_pdf_bytes).decode("ascii")


@pytest_asyncio.fixture
async def test_client(face_detector, fake_menu_store):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The Vision and Storage adapters are overridden with the fakes above;
    overrides are cleared after the test.
    """
    from menurelay.dependencies import get_face_detector, get_menu_store
    from menurelay.main import app

    app.dependency_overrides[get_face_detector] = lambda: face_detector
    app.dependency_overrides[get_menu_store] = lambda: fake_menu_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
