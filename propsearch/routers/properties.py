"""
Property listing routes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from propsearch.config import get_search_settings
from propsearch.error_handling import DownstreamSearchError, GeocodingFailure
from propsearch.models import ErrorResponse, RequestContext, SearchQuery
from propsearch.services.search import PropertySearchOrchestrator
from .dependencies import get_property_search, get_request_context

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/properties")
async def list_properties(
    search: Optional[str] = Query(None, description="Substring search"),
    query: Optional[str] = Query(None, description="Natural-language search"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    sort_field: str = Query("property_created_at", alias="sortField"),
    sort_order: str = Query("desc", alias="sortOrder"),
    type: Optional[str] = Query(None, description="Property type picked in the UI"),
    status: Optional[str] = Query(None, description="Status picked in the UI"),
    context: RequestContext = Depends(get_request_context),
    orchestrator: PropertySearchOrchestrator = Depends(get_property_search)
):
    """
    List properties.

    Natural-language `query` text goes through assisted search and the
    response carries the extracted filters; anything else is a substring
    search over the listing view.
    """
    limit = limit or get_search_settings().pagination.property_page_size

    try:
        result = await orchestrator.search(
            SearchQuery(text=query or "", type=type, status=status),
            page=page,
            limit=limit,
            sort_field=sort_field,
            sort_order=sort_order,
            context=context,
            search=search or query or "",
        )
    except GeocodingFailure as e:
        logger.warning(f"Property search rejected: {e}")
        return JSONResponse(status_code=422, content=ErrorResponse(message=str(e)).model_dump())
    except DownstreamSearchError as e:
        logger.error(f"Property search failed: {e}")
        return JSONResponse(status_code=500, content=ErrorResponse(message=str(e)).model_dump())

    body = result.model_dump(mode="json")
    if result.extracted_params is None:
        body.pop("extracted_params")
    return body
