"""
Image API Router - Normalization of existing captures
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from api.dependencies import get_pipeline
from api.exceptions import safe_endpoint
from schemas import NormalizeRequest, NormalizeResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/normalize")
@safe_endpoint
async def normalize_image(
    request: NormalizeRequest,
    http_request: Request,
    pipeline=Depends(get_pipeline)
) -> NormalizeResponse:
    """
    Normalize a capture file in place.

    Only files inside the capture cache directory are accepted. Like a
    capture, the call succeeds even if post-processing fails, in which case
    the file is left as it was.
    """
    cache_dir = Path(http_request.app.state.config["capture"]["cache_dir"]).resolve()
    path = Path(request.path).resolve()

    if not path.is_relative_to(cache_dir):
        raise HTTPException(status_code=400, detail="Path is outside the capture directory")
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"File {request.path} not found")

    # Run off the event loop; the pipeline is synchronous
    result_path = await run_in_threadpool(pipeline.normalize_capture, path)

    return NormalizeResponse(success=True, path=result_path)
