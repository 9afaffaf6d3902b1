"""
Signed URL route for stored documents and images.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from propsearch.models import ErrorResponse
from propsearch.services.storage import GCSUrlSigner, clean_storage_path
from .dependencies import get_request_context, get_signer

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/gcp/signed-url", dependencies=[Depends(get_request_context)])
async def get_signed_url(
    path: Optional[str] = Query(None, description="Object path or storage URL"),
    signer: GCSUrlSigner = Depends(get_signer)
):
    """Mint a one-hour read URL for a stored object"""
    try:
        object_name = clean_storage_path(path)
    except ValueError as e:
        return JSONResponse(status_code=400, content=ErrorResponse(message=str(e)).model_dump())

    try:
        if not await signer.exists(object_name):
            return JSONResponse(
                status_code=404,
                content=ErrorResponse(message=f"File not found: {object_name}").model_dump(),
            )
        url = await signer.sign(object_name)
    except Exception as e:
        logger.error(f"Signed URL for '{object_name}' failed: {e}")
        return JSONResponse(status_code=500, content=ErrorResponse(message=f"GCP error: {e}").model_dump())

    return {"success": True, "url": url}
