"""
Utility modules for core functionality.

Modules:
- camera_identifier: Parse camera ID strings
"""

from .camera_identifier import CameraIdentifier

__all__ = ["CameraIdentifier"]
