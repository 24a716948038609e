"""
MenuRelay Backend — Abstract Face Detector Interface
=====================================================

What:  Abstract base class defining the contract for face-detection providers.
How:   Concrete implementations inherit from FaceDetector and implement
       detect_faces() and health_check().
Who:   Called by FaceService during the /detectFaces workflow.

Implementations:
    - GoogleVisionService: Google Cloud Vision FACE_DETECTION (default)
    - FakeFaceDetector (tests/conftest.py): canned annotations for tests
"""

from abc import ABC, abstractmethod
from typing import Any, List


class FaceDetector(ABC):
    """
    Abstract interface for face detection on a single image.

    Contract:
        - detect_faces() accepts raw image bytes and returns annotation records
        - Each record may expose a bounding polygon of vertices; no field is
          guaranteed (the normalizer tolerates gaps)
        - All provider-specific errors are wrapped in FaceDetectionError
        - No retries: one call per request
    """

    @abstractmethod
    async def detect_faces(self, image: bytes) -> List[Any]:
        """
        Detect faces in an image.

        Args:
            image: Decoded image bytes (JPEG, PNG, ...).

        Returns:
            List of annotation records, one per detected face. Empty list when
            no face was found. Never returns None.

        Raises:
            FaceDetectionError: The provider call failed.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Lightweight readiness test (does NOT call the detection API).

        Returns: True if a client can be constructed, False otherwise.
        """
        ...

    async def close(self) -> None:
        """Release transport resources. Called once at shutdown."""
        return None
