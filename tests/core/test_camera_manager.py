"""
Tests for CameraManager and camera identifiers
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from core import camera_manager as camera_module
from core.enums import FlashMode
from core.utils.camera_identifier import CameraIdentifier


@pytest.fixture
def fake_capture(monkeypatch):
    """Replace cv2.VideoCapture with an always-open fake"""
    frame = np.full((720, 1280, 3), 50, dtype=np.uint8)
    cap = MagicMock()
    cap.isOpened.return_value = True
    cap.read.return_value = (True, frame)
    monkeypatch.setattr(camera_module.cv2, "VideoCapture", lambda source: cap)
    return cap


class TestCameraManager:
    """Test CameraManager functionality"""

    def test_test_camera_always_listed(self, camera_manager):
        cameras = camera_manager.list_cameras()
        assert cameras[0]['id'] == 'test'
        assert cameras[0]['connected'] is True
        assert cameras[0]['target_rotation'] == 0

    def test_test_camera_capture(self, camera_manager):
        frame = camera_manager.capture('test')
        assert frame.shape == (1080, 1920, 3)
        assert frame.dtype == np.uint8

    def test_unknown_camera(self, camera_manager):
        assert camera_manager.has_camera('usb_7') is False
        assert camera_manager.capture('usb_7') is None
        assert camera_manager.get_camera_info('usb_7') is None
        assert camera_manager.get_target_rotation('usb_7') is None
        assert camera_manager.set_target_rotation('usb_7', 90) is False
        assert camera_manager.disconnect_camera('usb_7') is False

    @pytest.mark.parametrize("rotation", [0, 90, 180, 270])
    def test_test_camera_rotation(self, camera_manager, rotation):
        assert camera_manager.set_target_rotation('test', rotation) is True
        assert camera_manager.get_target_rotation('test') == rotation

    @pytest.mark.parametrize("rotation", [45, 360, -90, 1])
    def test_invalid_rotation(self, camera_manager, rotation):
        with pytest.raises(ValueError):
            camera_manager.set_target_rotation('test', rotation)

    def test_flash_mode_defaults_off(self, camera_manager):
        assert camera_manager.get_flash_mode('test') is FlashMode.OFF
        assert camera_manager.list_cameras()[0]['flash_mode'] == 'off'

    @pytest.mark.parametrize("mode", ["auto", "on", "off"])
    def test_test_camera_flash_mode(self, camera_manager, mode):
        assert camera_manager.set_flash_mode('test', mode) is True
        assert camera_manager.get_flash_mode('test') is FlashMode(mode)

    def test_invalid_flash_mode(self, camera_manager):
        with pytest.raises(ValueError):
            camera_manager.set_flash_mode('test', 'torch')

    def test_flash_mode_unknown_camera(self, camera_manager):
        assert camera_manager.set_flash_mode('usb_7', 'on') is False
        assert camera_manager.get_flash_mode('usb_7') is None

    def test_connect_with_flash_mode(self, camera_manager, fake_capture):
        assert camera_manager.connect_camera('usb_0', 'usb', 0, flash_mode='auto')
        assert camera_manager.get_camera_info('usb_0')['flash_mode'] == 'auto'

        assert camera_manager.set_flash_mode('usb_0', FlashMode.ON)
        assert camera_manager.get_flash_mode('usb_0') is FlashMode.ON

    def test_connect_capture_disconnect(self, camera_manager, fake_capture):
        assert camera_manager.connect_camera('usb_0', 'usb', 0, target_rotation=90)
        assert camera_manager.has_camera('usb_0')

        frame = camera_manager.capture('usb_0')
        assert frame.shape == (720, 1280, 3)

        info = camera_manager.get_camera_info('usb_0')
        assert info['type'] == 'usb'
        assert info['connected'] is True
        assert info['target_rotation'] == 90
        assert any(c['id'] == 'usb_0' for c in camera_manager.list_cameras())

        assert camera_manager.set_target_rotation('usb_0', 270)
        assert camera_manager.get_target_rotation('usb_0') == 270

        assert camera_manager.disconnect_camera('usb_0')
        fake_capture.release.assert_called_once()
        assert not camera_manager.has_camera('usb_0')

    def test_connect_twice_is_idempotent(self, camera_manager, fake_capture):
        assert camera_manager.connect_camera('usb_0', 'usb', 0)
        assert camera_manager.connect_camera('usb_0', 'usb', 0)
        assert len(camera_manager.cameras) == 1

    def test_connect_failure(self, camera_manager, monkeypatch):
        cap = MagicMock()
        cap.isOpened.return_value = False
        monkeypatch.setattr(camera_module.cv2, "VideoCapture", lambda source: cap)

        assert camera_manager.connect_camera('usb_3', 'usb', 3) is False
        assert not camera_manager.has_camera('usb_3')

    def test_failed_read_returns_none(self, camera_manager, fake_capture):
        camera_manager.connect_camera('usb_0', 'usb', 0)
        fake_capture.read.return_value = (False, None)
        assert camera_manager.capture('usb_0') is None

    def test_cleanup(self, camera_manager, fake_capture):
        camera_manager.connect_camera('usb_0', 'usb', 0)
        camera_manager.cleanup()
        assert camera_manager.cameras == {}


class TestCameraIdentifier:
    """Test camera ID parsing"""

    @pytest.mark.parametrize(
        "camera_id,expected",
        [
            ("test", ("test", None)),
            ("usb_0", ("usb", 0)),
            ("usb_12", ("usb", 12)),
            ("file_/tmp/frame.png", ("file", "/tmp/frame.png")),
        ],
    )
    def test_parse(self, camera_id, expected):
        assert CameraIdentifier.parse(camera_id) == expected

    @pytest.mark.parametrize("camera_id", ["", "usb_x", "ip_10.0.0.1", "file_", "camera"])
    def test_parse_invalid(self, camera_id):
        with pytest.raises(ValueError):
            CameraIdentifier.parse(camera_id)

    def test_format(self):
        assert CameraIdentifier.format("usb", 2) == "usb_2"
        assert CameraIdentifier.format("test") == "test"
        with pytest.raises(ValueError):
            CameraIdentifier.format("usb")
