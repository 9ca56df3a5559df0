"""
Capture Service - Still capture followed by post-capture normalization.

Each capture runs on a worker thread: a temporary capture file is created,
the frame is written to it together with the orientation the camera's target
rotation calls for, and the normalization pipeline rewrites it in place.
Only capture-side failures reach the caller; normalization failures fall
back to the raw capture.
"""

import logging
import os
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from core.camera_manager import CameraManager
from core.constants import CaptureConstants, ErrorMessages, NormalizationConstants
from core.enums import Orientation
from core.exceptions import CameraNotFoundError, CaptureError
from core.image.converters import ImageConverters
from core.pipeline import NormalizationPipeline

logger = logging.getLogger(__name__)


class CaptureService:
    """
    Service for capturing normalized still images.

    Args:
        camera_manager: Camera manager instance
        pipeline: Normalization pipeline run on every capture
        cache_dir: Directory temporary capture files are created in
        file_prefix: Temporary file name prefix
        file_suffix: Temporary file name suffix
        capture_format: Pillow format the raw frame is written in
        capture_quality: Quality of the raw frame encode
        max_workers: Size of the capture worker pool
    """

    def __init__(
        self,
        camera_manager: CameraManager,
        pipeline: NormalizationPipeline,
        cache_dir: str,
        file_prefix: str = CaptureConstants.TEMPORARY_FILE_PREFIX,
        file_suffix: str = CaptureConstants.TEMPORARY_FILE_SUFFIX,
        capture_format: str = CaptureConstants.CAPTURE_FORMAT,
        capture_quality: int = CaptureConstants.CAPTURE_QUALITY,
        max_workers: int = CaptureConstants.DEFAULT_MAX_WORKERS,
    ):
        self.camera_manager = camera_manager
        self.pipeline = pipeline
        self.cache_dir = Path(cache_dir)
        self.file_prefix = file_prefix
        self.file_suffix = file_suffix
        self.capture_format = capture_format
        self.capture_quality = capture_quality
        self.executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="capture"
        )

    def take_picture(self, camera_id: str) -> "Future[str]":
        """
        Capture a still and normalize it off the calling thread.

        Args:
            camera_id: Camera identifier

        Returns:
            Future resolving to the absolute path of the capture file, or
            failing with CaptureError if the capture itself failed
        """
        return self.executor.submit(self.capture_and_normalize, camera_id)

    def capture_and_normalize(self, camera_id: str) -> str:
        """
        Synchronous body of take_picture().

        Raises:
            CameraNotFoundError: If the camera is not connected
            CaptureError: If the capture file or frame could not be produced
        """
        path = self.capture_to_file(camera_id)
        return self.pipeline.normalize_capture(path)

    def capture_to_file(self, camera_id: str) -> str:
        """
        Capture a raw frame into a new temporary file.

        Returns:
            Absolute path of the capture file
        """
        if not self.camera_manager.has_camera(camera_id):
            raise CameraNotFoundError(camera_id)

        path = self._create_capture_file()
        try:
            frame = self.camera_manager.capture(camera_id)
            if frame is None:
                raise CaptureError(ErrorMessages.CAMERA_CAPTURE_FAILED.format(camera_id=camera_id))

            rotation = self.camera_manager.get_target_rotation(camera_id) or 0
            self._write_frame(frame, path, Orientation.from_degrees(rotation))
        except Exception:
            _remove_quietly(path)
            raise

        logger.info(f"Captured {camera_id} to {path}")
        return path

    def shutdown(self, wait: bool = True):
        """Stop the worker pool"""
        self.executor.shutdown(wait=wait)
        logger.info("Capture service stopped")

    def _create_capture_file(self) -> str:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            fd, path = tempfile.mkstemp(
                prefix=self.file_prefix, suffix=self.file_suffix, dir=self.cache_dir
            )
            os.close(fd)
        except OSError as e:
            raise CaptureError(
                ErrorMessages.TEMP_FILE_FAILED.format(directory=self.cache_dir, error=e)
            ) from e
        return os.path.abspath(path)

    def _write_frame(self, frame: np.ndarray, path: str, orientation: Orientation):
        image = ImageConverters.numpy_to_pil(frame)

        exif = Image.Exif()
        exif[NormalizationConstants.EXIF_ORIENTATION_TAG] = orientation.value

        try:
            image.save(
                path,
                format=self.capture_format,
                quality=self.capture_quality,
                exif=exif.tobytes(),
            )
        except (OSError, ValueError) as e:
            raise CaptureError(
                ErrorMessages.CAPTURE_WRITE_FAILED.format(path=path, error=e)
            ) from e


def _remove_quietly(path: Optional[str]):
    if not path:
        return
    try:
        os.remove(path)
    except OSError as e:
        logger.debug(f"Could not remove {path}: {e}")
