"""
Core modules for the Capture Normalizer
"""

from .camera_manager import CameraConfig, CameraManager
from .enums import CameraType, FlashMode, Orientation, PipelineStage
from .pipeline import NormalizationConfig, NormalizationPipeline, PipelineResult, normalize_capture

__all__ = [
    "CameraManager",
    "CameraType",
    "FlashMode",
    "CameraConfig",
    "NormalizationConfig",
    "NormalizationPipeline",
    "PipelineResult",
    "normalize_capture",
    "Orientation",
    "PipelineStage",
]
