"""
Capture Normalizer - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.exceptions import register_exception_handlers
from api.routers import camera, image, system
from config import get_settings
from core.camera_manager import CameraManager
from core.constants import SystemConstants
from core.pipeline import NormalizationConfig, NormalizationPipeline
from services.capture_service import CaptureService

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format=SystemConstants.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info("Starting Capture Normalizer server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    camera_manager = CameraManager()
    pipeline = NormalizationPipeline(NormalizationConfig.from_settings(settings.normalization))
    capture_service = CaptureService(
        camera_manager=camera_manager,
        pipeline=pipeline,
        cache_dir=settings.capture.cache_dir,
        file_prefix=settings.capture.file_prefix,
        file_suffix=settings.capture.file_suffix,
        capture_format=settings.capture.capture_format,
        capture_quality=settings.capture.capture_quality,
        max_workers=settings.capture.max_workers,
    )

    logger.info(f"Capture files go to {settings.capture.cache_dir}")

    # Store managers in app state for access by routers
    app.state.camera_manager = camera_manager
    app.state.pipeline = pipeline
    app.state.capture_service = capture_service
    app.state.config = settings.to_dict()

    yield

    logger.info("Shutting down Capture Normalizer server...")
    try:
        capture_service.shutdown(wait=True)
        camera_manager.cleanup()
    except Exception as e:
        logger.error(f"Error during cleanup: {e}")

    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Capture Normalizer",
    description="Still capture with upright, 3:4, fixed-resolution post-processing",
    version="1.0.0",
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(camera.router, prefix="/api/camera", tags=["Camera"])
app.include_router(image.router, prefix="/api/image", tags=["Image"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Capture Normalizer",
        "status": "running",
        "version": "1.0.0",
        "endpoints": {
            "camera": "/api/camera",
            "image": "/api/image",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "camera_manager": getattr(app.state, "camera_manager", None) is not None,
            "pipeline": getattr(app.state, "pipeline", None) is not None,
            "capture_service": getattr(app.state, "capture_service", None) is not None,
        },
    }


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": f"Internal server error: {str(exc)}"})


def run():
    """Console entry point"""
    uvicorn.run(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level="info",
    )


if __name__ == "__main__":
    run()
