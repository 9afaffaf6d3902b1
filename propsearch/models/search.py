"""Search data models"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..normalizers import (
    clean_text,
    normalize_status,
    parse_amount,
    parse_distance_meters,
    parse_percentage,
)


class QueryIntent(str, Enum):
    """How free-text search input is interpreted"""
    TRADITIONAL = "traditional"
    ASSISTED = "assisted"


class SearchQuery(BaseModel):
    """Raw search input plus explicit UI filters that bypass extraction"""
    model_config = ConfigDict(frozen=True)

    text: str = ""
    type: Optional[str] = None
    status: Optional[str] = None


class ExtractedFilters(BaseModel):
    """
    Structured filters read out of a natural-language query.

    Every field is nullable; null means "no constraint". Amounts are dollars,
    distances are whole meters and cap rates are percentage points, whatever
    form they arrive in.
    """
    location_text: Optional[str] = None
    origin_lat: Optional[float] = None
    origin_lng: Optional[float] = None
    radius_meters: Optional[int] = None
    property_type: Optional[str] = None
    status: Optional[str] = None
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    min_cap_rate: Optional[float] = None
    max_cap_rate: Optional[float] = None
    city: Optional[str] = None
    state: Optional[str] = None

    @field_validator("location_text", "property_type", "city", "state", mode="before")
    @classmethod
    def _clean_text(cls, value):
        return clean_text(value)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value):
        return normalize_status(value)

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def _normalize_amount(cls, value):
        return parse_amount(value)

    @field_validator("min_cap_rate", "max_cap_rate", mode="before")
    @classmethod
    def _normalize_cap_rate(cls, value):
        return parse_percentage(value)

    @field_validator("radius_meters", mode="before")
    @classmethod
    def _normalize_radius(cls, value):
        return parse_distance_meters(value)

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())

    @property
    def location(self) -> "ResolvedLocation":
        """The administrative region and radius origin of these filters."""
        return ResolvedLocation(
            city=self.city,
            state=self.state,
            lat=self.origin_lat,
            lng=self.origin_lng,
        )


class ResolvedLocation(BaseModel):
    """Where a query points: an administrative region or a radius origin"""
    city: Optional[str] = None
    state: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class DispatchParameters(BaseModel):
    """
    Parameters for the assisted property search procedure.

    Field names mirror the procedure's argument names; None is passed through
    as SQL NULL, which the procedure reads as "no constraint".
    """
    p_lat: Optional[float] = None
    p_lng: Optional[float] = None
    p_radius_m: Optional[int] = None
    p_type: Optional[str] = None
    p_status: Optional[str] = None
    p_min_price: Optional[int] = None
    p_max_price: Optional[int] = None
    p_min_cap_rate: Optional[float] = None
    p_max_cap_rate: Optional[float] = None
    p_city: Optional[str] = None
    p_state: Optional[str] = None
    p_address: Optional[str] = None

    def to_rpc_args(self) -> Dict[str, Any]:
        """Return every procedure argument, nulls included."""
        return self.model_dump()


class SearchResponse(BaseModel):
    """Property listing response"""
    success: bool = True
    data: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 9
    extracted_params: Optional[ExtractedFilters] = None


class ErrorResponse(BaseModel):
    """Error body returned by the listing endpoints"""
    success: bool = False
    message: str
