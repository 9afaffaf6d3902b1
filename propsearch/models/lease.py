"""Lease data models"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..normalizers import clean_text, normalize_lease_status, parse_iso_date


class LeaseFilters(BaseModel):
    """Lease filters read out of a natural-language query"""
    tenant: Optional[str] = None
    landlord: Optional[str] = None
    property_name: Optional[str] = None
    status: Optional[str] = None
    lease_start_from: Optional[date] = None
    lease_end_to: Optional[date] = None

    @field_validator("tenant", "landlord", "property_name", mode="before")
    @classmethod
    def _clean_text(cls, value):
        return clean_text(value)

    @field_validator("lease_start_from", "lease_end_to", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return parse_iso_date(value)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value):
        return normalize_lease_status(value)


class LeaseListQuery(BaseModel):
    """Lease list request after query-string parsing"""
    model_config = ConfigDict(frozen=True)

    search: str = ""
    property_id: Optional[str] = None
    user_id: Optional[str] = None
    status: Optional[str] = None
    page: int = 1
    page_size: int = 20
    sort_field: str = "created_at"
    sort_order: str = "desc"


class LeaseSearchResponse(BaseModel):
    """Lease listing response"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    mode: str = "traditional"
    extracted_filters: Optional[LeaseFilters] = None
    data: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = Field(default=20, serialization_alias="pageSize")
