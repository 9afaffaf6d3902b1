"""
Lease list routes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from propsearch.config import get_search_settings
from propsearch.error_handling import DownstreamSearchError
from propsearch.models import ErrorResponse, LeaseListQuery, RequestContext
from propsearch.services.search import LeaseSearchOrchestrator
from .dependencies import get_lease_search, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/lease")
async def list_leases(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=200, alias="pageSize"),
    search: str = Query("", description="Substring or natural-language search"),
    property_id: Optional[str] = Query(None, alias="propertyId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    status: Optional[str] = Query(None, description="Lease status, or 'all'"),
    sort_field: str = Query("created_at", alias="sortField"),
    sort_order: str = Query("desc", alias="sortOrder"),
    context: RequestContext = Depends(get_request_context),
    orchestrator: LeaseSearchOrchestrator = Depends(get_lease_search)
):
    """List leases with optional natural-language filtering"""
    lease_query = LeaseListQuery(
        search=search.strip(),
        property_id=property_id,
        user_id=user_id,
        status=status,
        page=page,
        page_size=page_size or get_search_settings().pagination.lease_page_size,
        sort_field=sort_field,
        sort_order=sort_order,
    )

    try:
        result = await orchestrator.search(lease_query, context=context)
    except DownstreamSearchError as e:
        logger.error(f"Lease list failed: {e}")
        return JSONResponse(status_code=500, content=ErrorResponse(message=str(e)).model_dump())

    return result.model_dump(mode="json", by_alias=True)
