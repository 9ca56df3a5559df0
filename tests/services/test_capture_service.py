"""
Tests for CaptureService
"""

import os
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest
from PIL import Image

from core.enums import Orientation
from core.exceptions import CameraNotFoundError, CaptureError, EncodeError
from core.image.decoder import decode_image
from core.pipeline import NormalizationPipeline
from services.capture_service import CaptureService

TIMEOUT = 30


class TestTakePicture:
    """Test the asynchronous capture path"""

    def test_capture_is_normalized(self, capture_service):
        path = capture_service.take_picture('test').result(timeout=TIMEOUT)

        assert os.path.isabs(path)
        assert Path(path).parent == capture_service.cache_dir
        assert Path(path).name.startswith("CAP")
        assert path.endswith(".webp")
        with Image.open(path) as image:
            assert image.format == "WEBP"
            assert image.size == (1000, 1334)

    def test_captures_get_distinct_files(self, capture_service):
        futures = [capture_service.take_picture('test') for _ in range(3)]
        paths = {f.result(timeout=TIMEOUT) for f in futures}
        assert len(paths) == 3

    def test_unknown_camera_fails(self, capture_service):
        future = capture_service.take_picture('usb_9')
        with pytest.raises(CameraNotFoundError):
            future.result(timeout=TIMEOUT)

    def test_rotated_capture_is_upright(self, capture_service, camera_manager):
        """A 90 degree target rotation turns the 1920x1080 frame to portrait"""
        camera_manager.set_target_rotation('test', 90)
        seen = []
        original_run = capture_service.pipeline.run

        def spy(path):
            seen.append(decode_image(path))
            return original_run(path)

        capture_service.pipeline.run = spy

        path = capture_service.take_picture('test').result(timeout=TIMEOUT)

        buffer, orientation = seen[0]
        assert orientation is Orientation.ROTATE_90
        assert buffer.size == (1920, 1080)
        assert decode_image(path)[0].size == (1000, 1334)


class TestCaptureToFile:
    """Test the raw capture step"""

    def test_writes_orientation_tag(self, capture_service, camera_manager):
        camera_manager.set_target_rotation('test', 270)

        path = capture_service.capture_to_file('test')

        buffer, orientation = decode_image(path)
        assert orientation is Orientation.ROTATE_270
        assert buffer.size == (1920, 1080)
        with Image.open(path) as image:
            assert image.format == "JPEG"

    def test_missing_frame_raises_and_cleans_up(self, tmp_path, pipeline):
        manager = MagicMock()
        manager.has_camera.return_value = True
        manager.capture.return_value = None
        service = CaptureService(manager, pipeline, cache_dir=str(tmp_path / "cache"))

        try:
            with pytest.raises(CaptureError):
                service.capture_to_file('usb_0')
        finally:
            service.shutdown()

        assert os.listdir(tmp_path / "cache") == []

    def test_unusable_cache_dir(self, tmp_path, camera_manager, pipeline):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("file in the way")
        service = CaptureService(camera_manager, pipeline, cache_dir=str(blocker))

        try:
            with pytest.raises(CaptureError):
                service.take_picture('test').result(timeout=TIMEOUT)
        finally:
            service.shutdown()


class TestPostProcessingFallback:
    """Normalization failures must not fail the capture"""

    def test_encode_failure_returns_raw_capture(self, capture_service, monkeypatch):
        from core import pipeline as pipeline_module

        def fail(*args, **kwargs):
            raise EncodeError("disk full")

        monkeypatch.setattr(pipeline_module, "encode_image", fail)

        path = capture_service.take_picture('test').result(timeout=TIMEOUT)

        with Image.open(path) as image:
            assert image.format == "JPEG"
            assert image.size == (1920, 1080)

    def test_custom_pipeline(self, tmp_path, camera_manager):
        from core.pipeline import NormalizationConfig

        pipeline = NormalizationPipeline(NormalizationConfig(output_size=(90, 120)))
        service = CaptureService(camera_manager, pipeline, cache_dir=str(tmp_path))
        try:
            path = service.take_picture('test').result(timeout=TIMEOUT)
        finally:
            service.shutdown()

        assert decode_image(path)[0].size == (90, 120)
        assert np.asarray(Image.open(path)).ndim == 3
