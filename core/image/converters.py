"""
Image format conversion utilities.

Handles conversions between:
- NumPy arrays (OpenCV BGR format)
- PIL Images (RGB format)
"""

import logging

import cv2
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


class ImageConverters:
    """Utilities for converting between image formats."""

    @staticmethod
    def numpy_to_pil(image: np.ndarray) -> Image.Image:
        """
        Convert NumPy array (OpenCV format) to PIL Image.

        Args:
            image: NumPy array in BGR format (OpenCV)

        Returns:
            PIL Image in RGB format
        """
        # Convert BGR to RGB if needed
        if len(image.shape) == 3 and image.shape[2] == 3:
            image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        else:
            image_rgb = image

        return Image.fromarray(image_rgb)

    @staticmethod
    def pil_to_numpy(image: Image.Image, bgr: bool = True) -> np.ndarray:
        """
        Convert PIL Image to NumPy array.

        Non-RGB modes (palette, grayscale, alpha, CMYK) are flattened to RGB
        first so every decoded image has the same three-channel layout.

        Args:
            image: PIL Image
            bgr: If True, convert to BGR format (OpenCV), else keep RGB

        Returns:
            NumPy array
        """
        if image.mode != "RGB":
            logger.debug(f"Converting image mode {image.mode} to RGB")
            image = image.convert("RGB")

        array = np.array(image)

        if bgr:
            array = cv2.cvtColor(array, cv2.COLOR_RGB2BGR)

        return array
