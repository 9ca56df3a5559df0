"""
Camera Manager - Handles camera connections and still capture
"""

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Dict, List, Optional

import cv2
import numpy as np

from core.constants import CaptureConstants, ErrorMessages
from core.enums import CameraType, FlashMode

logger = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    """Camera configuration"""
    id: str
    name: str
    type: CameraType
    source: Any  # int for USB, str for file
    resolution: tuple = (1920, 1080)
    target_rotation: int = 0  # clockwise degrees the capture must be turned by
    flash_mode: FlashMode = FlashMode.OFF


class Camera:
    """OpenCV-backed camera"""

    def __init__(self, config: CameraConfig):
        self.config = config
        self.cap = None
        self.connected = False
        self.lock = Lock()

    def connect(self) -> bool:
        """Connect to camera"""
        try:
            with self.lock:
                self.cap = cv2.VideoCapture(self.config.source)

                if self.cap and self.cap.isOpened():
                    self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.resolution[0])
                    self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.resolution[1])

                    self.connected = True
                    logger.info(f"Camera {self.config.id} connected")
                    return True

                return False

        except Exception as e:
            logger.error(f"Failed to connect camera {self.config.id}: {e}")
            return False

    def disconnect(self):
        """Disconnect camera"""
        with self.lock:
            if self.cap:
                self.cap.release()
                self.cap = None
            self.connected = False
            logger.info(f"Camera {self.config.id} disconnected")

    def capture(self) -> Optional[np.ndarray]:
        """Capture single frame"""
        if not self.connected:
            return None

        with self.lock:
            if self.cap and self.cap.isOpened():
                ret, frame = self.cap.read()
                if ret:
                    return frame

        return None


class CameraManager:
    """Manages connected cameras and their capture settings"""

    def __init__(self, default_resolution: Dict[str, int] = None):
        self.cameras: Dict[str, Camera] = {}
        self.lock = Lock()
        self.default_resolution = (
            (default_resolution['width'], default_resolution['height'])
            if default_resolution
            else (CaptureConstants.TEST_IMAGE_WIDTH, CaptureConstants.TEST_IMAGE_HEIGHT)
        )
        # The test camera has no Camera object, only rotation and flash settings
        self.test_rotation = 0
        self.test_flash_mode = FlashMode.OFF

        logger.info("Camera Manager initialized")

    def list_cameras(self) -> List[Dict[str, Any]]:
        """List the test camera and all connected cameras"""
        cameras = [{
            'id': CaptureConstants.TEST_CAMERA_ID,
            'name': 'Test Image Generator',
            'type': CameraType.TEST.value,
            'connected': True,
            'target_rotation': self.test_rotation,
            'flash_mode': self.test_flash_mode.value,
            'resolution': {
                'width': CaptureConstants.TEST_IMAGE_WIDTH,
                'height': CaptureConstants.TEST_IMAGE_HEIGHT
            }
        }]

        with self.lock:
            for cam_id in self.cameras:
                cameras.append(self._describe(self.cameras[cam_id]))

        return cameras

    def connect_camera(
        self,
        camera_id: str,
        camera_type: str = "usb",
        source: Any = 0,
        name: Optional[str] = None,
        resolution: Optional[tuple] = None,
        target_rotation: int = 0,
        flash_mode: str = FlashMode.OFF.value
    ) -> bool:
        """Connect to a camera"""
        self._validate_rotation(target_rotation)
        flash = FlashMode(flash_mode)

        with self.lock:
            if camera_id in self.cameras and self.cameras[camera_id].connected:
                logger.warning(f"Camera {camera_id} already connected")
                return True

            config = CameraConfig(
                id=camera_id,
                name=name or camera_id,
                type=CameraType(camera_type),
                source=source,
                resolution=resolution or self.default_resolution,
                target_rotation=target_rotation,
                flash_mode=flash
            )

            camera = Camera(config)
            if camera.connect():
                self.cameras[camera_id] = camera
                return True

            logger.warning(ErrorMessages.CAMERA_CONNECTION_FAILED.format(camera_id=camera_id))
            return False

    def disconnect_camera(self, camera_id: str) -> bool:
        """Disconnect a camera"""
        with self.lock:
            if camera_id in self.cameras:
                self.cameras[camera_id].disconnect()
                del self.cameras[camera_id]
                return True
            return False

    def has_camera(self, camera_id: str) -> bool:
        """Check whether a camera id can be captured from"""
        if camera_id == CaptureConstants.TEST_CAMERA_ID:
            return True
        with self.lock:
            return camera_id in self.cameras

    def capture(self, camera_id: str) -> Optional[np.ndarray]:
        """Capture frame from specific camera"""
        if camera_id == CaptureConstants.TEST_CAMERA_ID:
            return self.create_test_image(f"Camera: {camera_id}")

        with self.lock:
            if camera_id in self.cameras:
                return self.cameras[camera_id].capture()

        logger.warning(f"Camera {camera_id} not found")
        return None

    def set_target_rotation(self, camera_id: str, rotation: int) -> bool:
        """
        Set the clockwise rotation captures from this camera must be turned by.

        The rotation is recorded in the orientation metadata of each capture,
        not applied to the frame.

        Raises:
            ValueError: If rotation is not 0, 90, 180 or 270
        """
        self._validate_rotation(rotation)

        if camera_id == CaptureConstants.TEST_CAMERA_ID:
            self.test_rotation = rotation
            return True

        with self.lock:
            if camera_id not in self.cameras:
                return False
            self.cameras[camera_id].config.target_rotation = rotation

        logger.info(f"Camera {camera_id} target rotation set to {rotation}")
        return True

    def get_target_rotation(self, camera_id: str) -> Optional[int]:
        """Get target rotation in degrees, None for unknown cameras"""
        if camera_id == CaptureConstants.TEST_CAMERA_ID:
            return self.test_rotation

        with self.lock:
            if camera_id in self.cameras:
                return self.cameras[camera_id].config.target_rotation

        return None

    def set_flash_mode(self, camera_id: str, flash_mode: str) -> bool:
        """
        Set the flash mode requested for captures from this camera.

        The mode is a request: OpenCV exposes no flash control, so backends
        without a flash unit keep capturing without one.

        Raises:
            ValueError: If flash_mode is not auto, on or off
        """
        flash = FlashMode(flash_mode)

        if camera_id == CaptureConstants.TEST_CAMERA_ID:
            self.test_flash_mode = flash
            return True

        with self.lock:
            if camera_id not in self.cameras:
                return False
            self.cameras[camera_id].config.flash_mode = flash

        logger.info(f"Camera {camera_id} flash mode set to {flash.value}")
        return True

    def get_flash_mode(self, camera_id: str) -> Optional[FlashMode]:
        """Get requested flash mode, None for unknown cameras"""
        if camera_id == CaptureConstants.TEST_CAMERA_ID:
            return self.test_flash_mode

        with self.lock:
            if camera_id in self.cameras:
                return self.cameras[camera_id].config.flash_mode

        return None

    def get_camera_info(self, camera_id: str) -> Optional[Dict[str, Any]]:
        """Get camera information"""
        with self.lock:
            if camera_id in self.cameras:
                return self._describe(self.cameras[camera_id])

        return None

    def cleanup(self):
        """Disconnect all cameras"""
        logger.info("Cleaning up Camera Manager...")

        with self.lock:
            for camera_id in list(self.cameras.keys()):
                self.cameras[camera_id].disconnect()
            self.cameras.clear()

        logger.info("Camera Manager cleanup complete")

    def create_test_image(self, text: str = "Test Image") -> np.ndarray:
        """Create a test image for development"""
        width = CaptureConstants.TEST_IMAGE_WIDTH
        height = CaptureConstants.TEST_IMAGE_HEIGHT
        img = np.zeros((height, width, 3), dtype=np.uint8)

        # Add gradient background
        for i in range(height):
            img[i, :] = [i * 255 // height, 100, 255 - i * 255 // height]

        font = cv2.FONT_HERSHEY_SIMPLEX
        cv2.putText(img, text, (600, 540), font, 3, (255, 255, 255), 3)

        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        cv2.putText(img, timestamp, (50, 50), font, 1, (255, 255, 255), 2)

        # Add grid
        for x in range(0, width, width // 10):
            cv2.line(img, (x, 0), (x, height), (50, 50, 50), 1)
        for y in range(0, height, height // 10):
            cv2.line(img, (0, y), (width, y), (50, 50, 50), 1)

        return img

    @staticmethod
    def _validate_rotation(rotation: int):
        if rotation not in CaptureConstants.VALID_ROTATIONS:
            raise ValueError(
                ErrorMessages.INVALID_ROTATION.format(
                    rotation=rotation, valid=CaptureConstants.VALID_ROTATIONS
                )
            )

    @staticmethod
    def _describe(camera: Camera) -> Dict[str, Any]:
        return {
            'id': camera.config.id,
            'name': camera.config.name,
            'type': camera.config.type.value,
            'connected': camera.connected,
            'target_rotation': camera.config.target_rotation,
            'flash_mode': camera.config.flash_mode.value,
            'resolution': {
                'width': camera.config.resolution[0],
                'height': camera.config.resolution[1]
            }
        }
