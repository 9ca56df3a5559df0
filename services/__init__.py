"""
Service layer for the Capture Normalizer
"""

from .capture_service import CaptureService

__all__ = ["CaptureService"]
