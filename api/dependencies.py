"""
Shared FastAPI dependencies for the Capture Normalizer.
"""

import logging

from fastapi import Depends, HTTPException, Request

from core.camera_manager import CameraManager
from core.pipeline import NormalizationPipeline
from services.capture_service import CaptureService

logger = logging.getLogger(__name__)


class Managers:
    """Container for all manager and service instances."""

    def __init__(
        self,
        camera_manager: CameraManager,
        pipeline: NormalizationPipeline,
        capture_service: CaptureService,
    ):
        self.camera_manager = camera_manager
        self.pipeline = pipeline
        self.capture_service = capture_service


def get_managers(request: Request) -> Managers:
    """
    Get all manager instances from app state.

    Args:
        request: FastAPI request object

    Returns:
        Managers container

    Raises:
        HTTPException: If managers not initialized
    """
    try:
        return Managers(
            camera_manager=request.app.state.camera_manager,
            pipeline=request.app.state.pipeline,
            capture_service=request.app.state.capture_service,
        )
    except AttributeError as e:
        logger.error(f"Managers not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Managers not initialized"
        )


def get_camera_manager(managers: Managers = Depends(get_managers)) -> CameraManager:
    """Get CameraManager instance."""
    return managers.camera_manager


def get_pipeline(managers: Managers = Depends(get_managers)) -> NormalizationPipeline:
    """Get NormalizationPipeline instance."""
    return managers.pipeline


def get_capture_service(managers: Managers = Depends(get_managers)) -> CaptureService:
    """Get CaptureService instance."""
    return managers.capture_service
