"""
MenuRelay Backend — Face Service Unit Tests
=============================================

What:  Tests for FaceService (validate → decode → detect → normalize).
How:   FakeFaceDetector from conftest; no HTTP, no Cloud Vision.
"""

import base64

import pytest

from conftest import FakeFaceDetector
from menurelay.exceptions import FaceDetectionError, ValidationError
from menurelay.services.face_service import FaceService


class TestFaceServiceValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, ""])
    async def test_missing_image_is_rejected_without_detector_call(self, value):
        detector = FakeFaceDetector()
        service = FaceService(detector)

        with pytest.raises(ValidationError, match="No imageBase64 provided") as exc_info:
            await service.detect(value)

        assert exc_info.value.field == "imageBase64"
        assert detector.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["abc", "!!!!"])
    async def test_undecodable_image_is_a_vision_failure(self, value):
        detector = FakeFaceDetector()
        service = FaceService(detector)

        with pytest.raises(FaceDetectionError) as exc_info:
            await service.detect(value)

        assert exc_info.value.message == "Vision call failed"
        assert not isinstance(exc_info.value, ValidationError)
        assert detector.calls == []

    @pytest.mark.asyncio
    async def test_url_safe_alphabet_is_decoded(self):
        image = b"\xfb\xff\xbf"
        detector = FakeFaceDetector()
        service = FaceService(detector)

        await service.detect(base64.urlsafe_b64encode(image).decode())

        assert detector.calls == [image]


class TestFaceServiceDetect:

    @pytest.mark.asyncio
    async def test_detector_receives_decoded_bytes(self, sample_image_base64):
        detector = FakeFaceDetector()
        service = FaceService(detector)

        result = await service.detect(sample_image_base64)

        assert detector.calls == [base64.b64decode(sample_image_base64)]
        assert result.faces == []

    @pytest.mark.asyncio
    async def test_annotations_are_normalized_and_sorted(self, sample_image_base64):
        detector = FakeFaceDetector(
            annotations=[
                {"boundingPoly": {"vertices": [{"x": 5, "y": 5}, {"x": 15, "y": 20}]}},
                {"boundingPoly": {"vertices": [{"x": 5}]}},
                {"boundingPoly": {"vertices": [{"x": 1, "y": 1}, {"x": 3, "y": 4}]}},
            ]
        )
        service = FaceService(detector)

        result = await service.detect(sample_image_base64)

        assert [face.model_dump() for face in result.faces] == [
            {"x": 1, "y": 1, "w": 2, "h": 3},
            {"x": 5, "y": 5, "w": 10, "h": 15},
        ]

    @pytest.mark.asyncio
    async def test_detector_failure_propagates(self, sample_image_base64):
        detector = FakeFaceDetector(error=FaceDetectionError(context={"error_type": "Unavailable"}))
        service = FaceService(detector)

        with pytest.raises(FaceDetectionError):
            await service.detect(sample_image_base64)

        assert len(detector.calls) == 1
