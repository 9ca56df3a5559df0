"""
Image processing API models.

This module contains models for image operations:
- Normalization of an existing capture file
"""

from pydantic import BaseModel, Field


class NormalizeRequest(BaseModel):
    """Request to normalize an existing capture"""

    path: str = Field(..., description="Absolute path of a file in the capture cache directory")


class NormalizeResponse(BaseModel):
    """Response from normalization"""

    success: bool
    path: str
