"""
Crop geometry for the fixed-aspect center crop.
"""

from dataclasses import dataclass
from typing import Tuple

from core.constants import ErrorMessages, NormalizationConstants
from core.exceptions import GeometryError


@dataclass(frozen=True)
class CropRect:
    """Crop rectangle in source pixel coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    @property
    def center_point(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


def compute_center_crop(
    width: int,
    height: int,
    aspect_ratio: Tuple[int, int] = (
        NormalizationConstants.ASPECT_WIDTH,
        NormalizationConstants.ASPECT_HEIGHT,
    ),
) -> CropRect:
    """
    Compute the largest centered rectangle of the given aspect ratio.

    Full width is used first; if the matching height does not fit, the
    height is clamped to the source and the width derived from it. Both
    derived sides are floored, so the rectangle never leaves the source.
    A side that floors to zero (extremely wide strips) is kept at one pixel.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        aspect_ratio: Target (width, height) ratio, e.g. (3, 4)

    Returns:
        CropRect inside the source bounds

    Raises:
        GeometryError: If a source side or the aspect ratio is not positive
    """
    aspect_w, aspect_h = aspect_ratio
    if aspect_w <= 0 or aspect_h <= 0:
        raise GeometryError(f"Invalid aspect ratio {aspect_w}:{aspect_h}")
    if width <= 0 or height <= 0:
        raise GeometryError(ErrorMessages.INVALID_DIMENSIONS.format(width=width, height=height))

    # Integer math keeps the floors exact (crop_h = floor(crop_w / (aw/ah)))
    crop_w = width
    crop_h = max(1, crop_w * aspect_h // aspect_w)
    if crop_h > height:
        crop_h = height
        crop_w = max(1, crop_h * aspect_w // aspect_h)

    return CropRect(
        x=(width - crop_w) // 2,
        y=(height - crop_h) // 2,
        width=crop_w,
        height=crop_h,
    )
