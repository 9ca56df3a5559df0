"""
API Routers for the Capture Normalizer
"""

from . import camera, image, system

__all__ = ["camera", "image", "system"]
