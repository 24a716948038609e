"""
MenuRelay Backend — Service Dependencies
==========================================

What:  FastAPI dependency providers for the relay services.
How:   The SDK-backed adapters are module-level singletons (one Vision client,
       one Storage client per process). The thin orchestrators are built per
       request around them.
Who:   Injected into route handlers via FastAPI's Depends() system.

Tests replace the adapters through `app.dependency_overrides`:

    app.dependency_overrides[get_face_detector] = lambda: FakeFaceDetector(...)
"""

from fastapi import Depends

from menurelay.services.face_service import FaceService
from menurelay.services.gcs_service import menu_store
from menurelay.services.menu_service import MenuService
from menurelay.services.storage_base import MenuStore
from menurelay.services.vision_base import FaceDetector
from menurelay.services.vision_service import vision_service


def get_face_detector() -> FaceDetector:
    return vision_service


def get_menu_store() -> MenuStore:
    return menu_store


def get_face_service(detector: FaceDetector = Depends(get_face_detector)) -> FaceService:
    return FaceService(detector)


def get_menu_service(store: MenuStore = Depends(get_menu_store)) -> MenuService:
    return MenuService(store)
