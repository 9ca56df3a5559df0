"""
Pytest configuration and fixtures for Capture Normalizer tests
"""

import pytest

from core.camera_manager import CameraManager
from core.pipeline import NormalizationPipeline
from image_factory import make_image, write_capture
from services.capture_service import CaptureService


@pytest.fixture
def test_image():
    """Create a test image for testing"""
    return make_image(640, 480)


@pytest.fixture
def capture_file(tmp_path, test_image):
    """A landscape JPEG capture without orientation metadata"""
    return write_capture(tmp_path / "CAP0001.webp", test_image)


@pytest.fixture
def corrupt_file(tmp_path):
    """A capture file that is not an image"""
    path = tmp_path / "CAP_corrupt.webp"
    path.write_bytes(b"this is not an image at all" * 10)
    return path


@pytest.fixture
def pipeline():
    """Create NormalizationPipeline with default config"""
    return NormalizationPipeline()


@pytest.fixture
def camera_manager():
    """Create CameraManager instance for testing"""
    manager = CameraManager()
    yield manager
    # Cleanup
    manager.cleanup()


@pytest.fixture
def capture_service(tmp_path, camera_manager, pipeline):
    """Create CaptureService writing into a temporary cache directory"""
    service = CaptureService(
        camera_manager=camera_manager,
        pipeline=pipeline,
        cache_dir=str(tmp_path / "cache"),
        max_workers=1,
    )
    yield service
    service.shutdown()
