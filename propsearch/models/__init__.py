"""Data models for the property search API"""

from .search import (
    QueryIntent,
    SearchQuery,
    ExtractedFilters,
    ResolvedLocation,
    DispatchParameters,
    SearchResponse,
    ErrorResponse,
)
from .lease import LeaseFilters, LeaseListQuery, LeaseSearchResponse
from .context import RequestContext

__all__ = [
    "QueryIntent",
    "SearchQuery",
    "ExtractedFilters",
    "ResolvedLocation",
    "DispatchParameters",
    "SearchResponse",
    "ErrorResponse",
    "LeaseFilters",
    "LeaseListQuery",
    "LeaseSearchResponse",
    "RequestContext",
]
