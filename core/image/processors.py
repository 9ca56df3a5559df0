"""
Image processing operations.

Handles image manipulation tasks:
- Region extraction
- Exact-size resampling
- Center crop + resize
"""

import logging
from typing import Tuple

import cv2
import numpy as np

from core.constants import NormalizationConstants
from core.image.buffer import ImageBuffer
from core.image.geometry import CropRect, compute_center_crop

logger = logging.getLogger(__name__)


def extract_region(image: np.ndarray, rect: CropRect) -> np.ndarray:
    """
    Extract a rectangle from an image.

    Args:
        image: Input image as NumPy array
        rect: Rectangle fully inside the image

    Returns:
        Copy of the region as NumPy array
    """
    return image[rect.y : rect.y2, rect.x : rect.x2].copy()


def resize_exact(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resample an image to exactly width x height.

    Area interpolation is used when shrinking and bilinear when enlarging,
    so the result is never nearest-neighbour sampled.

    Args:
        image: Input image as NumPy array
        width: Target width
        height: Target height

    Returns:
        Resized image as NumPy array
    """
    h, w = image.shape[:2]

    if (w, h) == (width, height):
        return image.copy()

    if width < w and height < h:
        interpolation = cv2.INTER_AREA
    else:
        interpolation = cv2.INTER_LINEAR

    return cv2.resize(image, (width, height), interpolation=interpolation)


def crop_and_resize(
    buffer: ImageBuffer,
    aspect_ratio: Tuple[int, int] = (
        NormalizationConstants.ASPECT_WIDTH,
        NormalizationConstants.ASPECT_HEIGHT,
    ),
    output_size: Tuple[int, int] = (
        NormalizationConstants.OUTPUT_WIDTH,
        NormalizationConstants.OUTPUT_HEIGHT,
    ),
) -> ImageBuffer:
    """
    Center-crop an upright image to the aspect ratio and resample it.

    Args:
        buffer: Upright image
        aspect_ratio: Target (width, height) ratio
        output_size: Final (width, height) in pixels

    Returns:
        New buffer of exactly output_size

    Raises:
        GeometryError: If the source has a zero dimension
    """
    rect = compute_center_crop(buffer.width, buffer.height, aspect_ratio)
    logger.debug(
        f"Crop {buffer.width}x{buffer.height} -> {rect.width}x{rect.height} "
        f"at ({rect.x},{rect.y})"
    )

    cropped = extract_region(buffer.pixels, rect)
    output_width, output_height = output_size
    return ImageBuffer(resize_exact(cropped, output_width, output_height))
