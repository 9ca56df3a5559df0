"""
Camera identifier parsing and formatting utilities.
"""

import logging
from typing import Tuple, Union

logger = logging.getLogger(__name__)


class CameraIdentifier:
    """
    Utilities for parsing and formatting camera identifiers.

    Camera ID formats:
    - "usb_N" - USB camera at index N (e.g., "usb_0", "usb_1")
    - "file_PATH" - Still image or video file read through OpenCV
    - "test" - Test image generator
    """

    TYPE_USB = "usb"
    TYPE_FILE = "file"
    TYPE_TEST = "test"

    @staticmethod
    def parse(camera_id: str) -> Tuple[str, Union[int, str, None]]:
        """
        Parse camera ID into type and source.

        Examples:
            >>> CameraIdentifier.parse("usb_1")
            ("usb", 1)
            >>> CameraIdentifier.parse("file_/tmp/frame.png")
            ("file", "/tmp/frame.png")
            >>> CameraIdentifier.parse("test")
            ("test", None)

        Raises:
            ValueError: If the identifier matches no known format
        """
        if camera_id == CameraIdentifier.TYPE_TEST:
            return (CameraIdentifier.TYPE_TEST, None)

        kind, _, source = (camera_id or "").partition("_")

        if kind == CameraIdentifier.TYPE_USB:
            try:
                return (CameraIdentifier.TYPE_USB, int(source))
            except ValueError:
                raise ValueError(f"Invalid USB camera ID '{camera_id}'")

        if kind == CameraIdentifier.TYPE_FILE and source:
            return (CameraIdentifier.TYPE_FILE, source)

        logger.warning(f"Unknown camera ID format '{camera_id}'")
        raise ValueError(f"Unknown camera ID format '{camera_id}'")

    @staticmethod
    def format(camera_type: str, source: Union[int, str, None] = None) -> str:
        """Format camera type and source into camera ID."""
        if camera_type == CameraIdentifier.TYPE_TEST:
            return CameraIdentifier.TYPE_TEST

        if source is None:
            raise ValueError(f"{camera_type} camera requires a source")

        if camera_type in (CameraIdentifier.TYPE_USB, CameraIdentifier.TYPE_FILE):
            return f"{camera_type}_{source}"

        raise ValueError(f"Unknown camera type: {camera_type}")
