"""
Decoder stage: load pixels and the EXIF orientation tag from a file.
"""

import logging
from pathlib import Path
from typing import Tuple, Union

from PIL import Image, UnidentifiedImageError

from core.constants import ErrorMessages, NormalizationConstants
from core.enums import Orientation
from core.exceptions import DecodeError
from core.image.buffer import ImageBuffer
from core.image.converters import ImageConverters

logger = logging.getLogger(__name__)


def read_orientation(image: Image.Image) -> Orientation:
    """
    Read the EXIF orientation of an opened image.

    Missing metadata, unreadable EXIF blocks and unknown values all give
    Orientation.NORMAL.
    """
    try:
        value = image.getexif().get(NormalizationConstants.EXIF_ORIENTATION_TAG)
    except (OSError, ValueError, SyntaxError) as e:
        logger.debug(f"Ignoring unreadable EXIF block: {e}")
        return Orientation.NORMAL

    orientation = Orientation.from_tag(value)
    if value is not None and orientation.value != value:
        logger.debug(f"Orientation tag {value!r} treated as NORMAL")
    return orientation


def decode_image(path: Union[str, Path]) -> Tuple[ImageBuffer, Orientation]:
    """
    Decode an image file.

    Args:
        path: Path to a still image

    Returns:
        Tuple of (decoded buffer in BGR layout, orientation tag)

    Raises:
        DecodeError: If the file is missing, truncated or not an image
    """
    try:
        with Image.open(path) as image:
            # Force the full decode so truncated files fail here
            image.load()
            orientation = read_orientation(image)
            pixels = ImageConverters.pil_to_numpy(image, bgr=True)
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as e:
        raise DecodeError(ErrorMessages.DECODE_FAILED.format(path=path, error=e)) from e

    buffer = ImageBuffer(pixels)
    logger.debug(f"Decoded {path}: {buffer.width}x{buffer.height}, orientation={orientation.name}")
    return buffer, orientation
