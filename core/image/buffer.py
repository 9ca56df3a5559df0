"""
Owned raster passed between pipeline stages.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class ImageBuffer:
    """
    Decoded image in OpenCV layout (H x W x C, BGR, uint8).

    Stages never mutate a buffer; each one returns a new instance.
    """

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1]) if self.pixels.ndim >= 2 else 0

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0]) if self.pixels.ndim >= 1 else 0

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height), matching PIL's convention."""
        return (self.width, self.height)

    def __repr__(self) -> str:
        return f"ImageBuffer({self.width}x{self.height}, dtype={self.pixels.dtype})"
