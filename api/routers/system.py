"""
System API Router - Status and configuration
"""

import logging
import time
from datetime import datetime

import psutil
from fastapi import APIRouter, Depends, Request

from api.dependencies import get_camera_manager
from api.exceptions import safe_endpoint

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


@router.get("/status")
@safe_endpoint
async def get_status(camera_manager=Depends(get_camera_manager)) -> dict:
    """Get system status"""
    memory_info = psutil.Process().memory_info()

    active_cameras = len([
        cam for cam in camera_manager.list_cameras()
        if cam['connected']
    ])

    return {
        "status": "healthy",
        "uptime": time.time() - START_TIME,
        "memory_usage": {
            "process_mb": memory_info.rss / 1024 / 1024,
            "system_percent": psutil.virtual_memory().percent,
        },
        "active_cameras": active_cameras,
    }


@router.post("/debug/{enable}")
async def set_debug_mode(enable: bool, request: Request) -> dict:
    """Enable or disable verbose logging"""
    request.app.state.config["system"]["debug"] = enable

    log_level = logging.DEBUG if enable else logging.INFO
    logging.getLogger().setLevel(log_level)

    logger.info(f"Debug mode {'enabled' if enable else 'disabled'}")

    return {"enabled": enable, "log_level": logging.getLevelName(log_level)}


@router.get("/config")
async def get_config(request: Request) -> dict:
    """Get current configuration"""
    return request.app.state.config


@router.get("/health")
async def health_check() -> dict:
    """Simple health check"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat()
    }
