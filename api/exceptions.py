"""
HTTP error mapping for the Capture Normalizer API.
"""

import functools
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.exceptions import CameraNotFoundError, CaptureError

logger = logging.getLogger(__name__)


class CameraNotFoundException(HTTPException):
    """Camera is not connected"""

    def __init__(self, camera_id: str):
        super().__init__(status_code=404, detail=f"Camera {camera_id} not found")


class CaptureException(HTTPException):
    """Still capture failed"""

    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=detail)


def safe_endpoint(func):
    """
    Translate domain errors raised by an endpoint into HTTP errors.

    HTTPExceptions pass through unchanged; anything unexpected becomes a 500.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            raise
        except CameraNotFoundError as e:
            raise CameraNotFoundException(e.camera_id) from e
        except CaptureError as e:
            logger.error(f"Capture failed in {func.__name__}: {e}")
            raise CaptureException(str(e)) from e
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e)) from e

    return wrapper


def register_exception_handlers(app: FastAPI):
    """Register handlers for domain errors escaping outside safe_endpoint"""

    @app.exception_handler(CameraNotFoundError)
    async def camera_not_found_handler(request: Request, exc: CameraNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(CaptureError)
    async def capture_error_handler(request: Request, exc: CaptureError):
        logger.error(f"Capture error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": str(exc)})
