"""
Camera API Router
"""

import asyncio
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_camera_manager, get_capture_service
from api.exceptions import CameraNotFoundException, safe_endpoint
from core.utils.camera_identifier import CameraIdentifier
from schemas import (
    CameraCaptureResponse,
    CameraConnectRequest,
    CameraFlashRequest,
    CameraInfo,
    CameraRotationRequest,
    CaptureRequest,
    Size,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/list")
async def list_cameras(camera_manager=Depends(get_camera_manager)) -> List[CameraInfo]:
    """List available cameras"""
    return [
        CameraInfo(
            id=cam['id'],
            name=cam['name'],
            type=cam['type'],
            resolution=Size(**cam['resolution']),
            connected=cam['connected'],
            target_rotation=cam['target_rotation'],
            flash_mode=cam['flash_mode'],
        )
        for cam in camera_manager.list_cameras()
    ]


@router.post("/connect")
@safe_endpoint
async def connect_camera(
    request: CameraConnectRequest,
    camera_manager=Depends(get_camera_manager)
) -> dict:
    """Connect to a camera"""
    camera_type, source = CameraIdentifier.parse(request.camera_id)
    if camera_type == CameraIdentifier.TYPE_TEST:
        camera_manager.set_target_rotation(request.camera_id, request.target_rotation)
        camera_manager.set_flash_mode(request.camera_id, request.flash_mode)
        return {"success": True, "message": f"Camera {request.camera_id} connected"}

    resolution = None
    if request.resolution:
        resolution = (request.resolution.width, request.resolution.height)

    success = camera_manager.connect_camera(
        camera_id=request.camera_id,
        camera_type=camera_type,
        source=source,
        resolution=resolution,
        target_rotation=request.target_rotation,
        flash_mode=request.flash_mode
    )

    if not success:
        raise HTTPException(status_code=400, detail="Failed to connect camera")

    return {
        "success": True,
        "message": f"Camera {request.camera_id} connected"
    }


@router.post("/rotation")
@safe_endpoint
async def set_target_rotation(
    request: CameraRotationRequest,
    camera_manager=Depends(get_camera_manager)
) -> dict:
    """Set the target rotation recorded in subsequent captures"""
    if not camera_manager.set_target_rotation(request.camera_id, request.rotation):
        raise CameraNotFoundException(request.camera_id)

    return {
        "success": True,
        "camera_id": request.camera_id,
        "rotation": request.rotation
    }


@router.post("/flash")
@safe_endpoint
async def set_flash_mode(
    request: CameraFlashRequest,
    camera_manager=Depends(get_camera_manager)
) -> dict:
    """Set the flash mode requested for subsequent captures"""
    if not camera_manager.set_flash_mode(request.camera_id, request.flash_mode):
        raise CameraNotFoundException(request.camera_id)

    return {
        "success": True,
        "camera_id": request.camera_id,
        "flash_mode": request.flash_mode.value
    }


@router.post("/capture")
@safe_endpoint
async def capture_image(
    request: CaptureRequest,
    capture_service=Depends(get_capture_service)
) -> CameraCaptureResponse:
    """
    Capture a still and normalize it.

    The returned path always points at a usable image: the normalized one,
    or the raw capture if post-processing failed.
    """
    future = capture_service.take_picture(request.camera_id)
    path = await asyncio.wrap_future(future)

    return CameraCaptureResponse(
        success=True,
        path=path,
        timestamp=datetime.now()
    )


@router.delete("/disconnect/{camera_id}")
@safe_endpoint
async def disconnect_camera(
    camera_id: str,
    camera_manager=Depends(get_camera_manager)
) -> dict:
    """Disconnect camera"""
    if not camera_manager.disconnect_camera(camera_id):
        raise CameraNotFoundException(camera_id)

    return {
        "success": True,
        "message": f"Camera {camera_id} disconnected"
    }
