"""
Common data structures shared by the API models.
"""

from pydantic import BaseModel, Field


class Size(BaseModel):
    """Image or sensor size in pixels"""

    width: int = Field(..., gt=0, description="Width")
    height: int = Field(..., gt=0, description="Height")
