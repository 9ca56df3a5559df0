"""
Centralized enums for the Capture Normalizer.
"""

from enum import Enum, IntEnum
from typing import Any


class Orientation(IntEnum):
    """
    EXIF orientation tag values the pipeline acts on.

    Mirrored variants (2, 4, 5, 7) and any unknown value are treated as NORMAL.
    """

    NORMAL = 1
    ROTATE_180 = 3
    ROTATE_90 = 6
    ROTATE_270 = 8

    @property
    def clockwise_degrees(self) -> int:
        """Clockwise rotation that brings the pixels upright."""
        return _CLOCKWISE_DEGREES[self]

    @classmethod
    def from_tag(cls, value: Any) -> "Orientation":
        """Resolve a raw EXIF tag value, falling back to NORMAL."""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.NORMAL

    @classmethod
    def from_degrees(cls, degrees: int) -> "Orientation":
        """Orientation tag that asks for a clockwise rotation of `degrees`."""
        for orientation, value in _CLOCKWISE_DEGREES.items():
            if value == degrees % 360:
                return orientation
        raise ValueError(f"Unsupported rotation: {degrees}")


_CLOCKWISE_DEGREES = {
    Orientation.NORMAL: 0,
    Orientation.ROTATE_90: 90,
    Orientation.ROTATE_180: 180,
    Orientation.ROTATE_270: 270,
}


class PipelineStage(str, Enum):
    """States of a single normalization run."""

    DECODING = "decoding"
    NORMALIZING = "normalizing"
    CROPPING = "cropping"
    ENCODING = "encoding"
    DONE = "done"


class CameraType(str, Enum):
    USB = "usb"
    FILE = "file"
    TEST = "test"


class FlashMode(str, Enum):
    """Flash behaviour requested for still captures."""

    AUTO = "auto"
    ON = "on"
    OFF = "off"
