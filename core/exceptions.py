"""
Domain exceptions for the Capture Normalizer.

Pipeline errors are raised by the individual stages and absorbed by the
orchestration layer. Capture errors are raised by the capture side and do
reach the caller.
"""

from typing import Optional

from core.constants import ErrorMessages
from core.enums import PipelineStage


class PipelineError(Exception):
    """Base class for failures inside the normalization pipeline."""

    stage: Optional[PipelineStage] = None

    def __init__(self, message: str, stage: Optional[PipelineStage] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class DecodeError(PipelineError):
    """Image bytes could not be parsed."""

    stage = PipelineStage.DECODING


class GeometryError(PipelineError):
    """Image dimensions do not allow a crop."""

    stage = PipelineStage.CROPPING


class EncodeError(PipelineError):
    """Normalized image could not be written."""

    stage = PipelineStage.ENCODING


class CaptureError(Exception):
    """Still capture failed before post-processing started."""


class CameraNotFoundError(CaptureError):
    """Requested camera is not connected."""

    def __init__(self, camera_id: str):
        super().__init__(ErrorMessages.CAMERA_NOT_FOUND.format(camera_id=camera_id))
        self.camera_id = camera_id
