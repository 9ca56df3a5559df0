"""
Camera-related API models.

This module contains request and response models for camera operations:
- Camera information and connection
- Target rotation and flash mode
- Capture responses
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from core.enums import FlashMode

from .common import Size


class CameraInfo(BaseModel):
    """Camera information"""

    id: str
    name: str
    type: str
    resolution: Size
    connected: bool
    target_rotation: int = 0
    flash_mode: FlashMode = FlashMode.OFF


class CameraConnectRequest(BaseModel):
    """Request to connect to camera"""

    camera_id: str
    resolution: Optional[Size] = None
    target_rotation: Literal[0, 90, 180, 270] = 0
    flash_mode: FlashMode = FlashMode.OFF


class CameraFlashRequest(BaseModel):
    """Request to change the flash mode of a camera"""

    camera_id: str
    flash_mode: FlashMode


class CameraRotationRequest(BaseModel):
    """Request to change the target rotation of a camera"""

    camera_id: str
    rotation: Literal[0, 90, 180, 270] = Field(
        description="Clockwise degrees captures must be turned by to be upright"
    )


class CaptureRequest(BaseModel):
    """Request to capture image from camera"""

    camera_id: str = Field(
        "test", description="Camera identifier (e.g., 'usb_0', 'test')"
    )


class CameraCaptureResponse(BaseModel):
    """Response from camera capture"""

    success: bool
    path: str
    timestamp: datetime
