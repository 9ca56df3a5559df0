"""
Image normalization stages.

This package provides one module per pipeline stage plus shared helpers:
- buffer: ImageBuffer passed between stages
- converters: NumPy/PIL conversions
- decoder: file -> (ImageBuffer, Orientation)
- orientation: lossless rotation to upright
- geometry: center-crop rectangle math
- processors: region extraction, resampling, crop + resize
- encoder: atomic lossy re-encode
"""

from core.image.buffer import ImageBuffer
from core.image.converters import ImageConverters
from core.image.decoder import decode_image, read_orientation
from core.image.encoder import encode_image
from core.image.geometry import CropRect, compute_center_crop
from core.image.orientation import normalize_orientation
from core.image.processors import crop_and_resize, extract_region, resize_exact

__all__ = [
    "ImageBuffer",
    "ImageConverters",
    "decode_image",
    "read_orientation",
    "normalize_orientation",
    "CropRect",
    "compute_center_crop",
    "crop_and_resize",
    "extract_region",
    "resize_exact",
    "encode_image",
]
