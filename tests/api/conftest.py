"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def cache_dir(tmp_path):
    """Capture cache directory for the app under test"""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture(scope="function")
def client(cache_dir):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from config import get_settings
    from core.camera_manager import CameraManager
    from core.pipeline import NormalizationPipeline
    from main import app
    from services.capture_service import CaptureService

    camera_manager = CameraManager()
    pipeline = NormalizationPipeline()
    capture_service = CaptureService(
        camera_manager=camera_manager,
        pipeline=pipeline,
        cache_dir=str(cache_dir),
        max_workers=1,
    )

    test_config = get_settings().to_dict()
    test_config["capture"]["cache_dir"] = str(cache_dir)

    # Set in app state
    app.state.camera_manager = camera_manager
    app.state.pipeline = pipeline
    app.state.capture_service = capture_service
    app.state.config = test_config

    # Create test client (no context manager, the lifespan would replace the state)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client

    capture_service.shutdown()
    camera_manager.cleanup()
