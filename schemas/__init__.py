"""
Schemas Package

This package contains all Pydantic schemas for data validation and serialization,
organized by domain.
"""

# Camera models
from .camera import (
    CameraCaptureResponse,
    CameraConnectRequest,
    CameraFlashRequest,
    CameraInfo,
    CameraRotationRequest,
    CaptureRequest,
)

# Common models
from .common import Size

# Image processing models
from .image import NormalizeRequest, NormalizeResponse

__all__ = [
    # Common models
    "Size",
    # Camera models
    "CameraInfo",
    "CameraConnectRequest",
    "CameraFlashRequest",
    "CameraRotationRequest",
    "CaptureRequest",
    "CameraCaptureResponse",
    # Image models
    "NormalizeRequest",
    "NormalizeResponse",
]
