"""
Orientation normalizer stage.
"""

import numpy as np

from core.enums import Orientation
from core.image.buffer import ImageBuffer


def normalize_orientation(buffer: ImageBuffer, orientation: Orientation) -> ImageBuffer:
    """
    Rotate pixel data so the image is stored upright.

    Rotation is a pure index remap (no interpolation), so pixel values are
    preserved exactly. 90 and 270 degrees swap width and height.

    Args:
        buffer: Decoded image
        orientation: EXIF orientation read alongside the pixels

    Returns:
        Upright image buffer (the input itself for NORMAL)
    """
    degrees = Orientation.from_tag(orientation).clockwise_degrees
    if degrees == 0:
        return buffer

    # np.rot90 turns counter-clockwise for positive k
    rotated = np.rot90(buffer.pixels, k=-(degrees // 90))
    return ImageBuffer(np.ascontiguousarray(rotated))
