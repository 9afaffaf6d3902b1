"""
Filter validator and dispatcher - decides which kind of location search a
resolved filter record describes and builds the procedure parameters.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ...models import DispatchParameters, ExtractedFilters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchPlan:
    """
    Outcome of dispatch.

    Attributes:
        is_radius_search: Radius plus a location to measure from
        has_admin_location: City or state present
        has_address_search: Location phrase without a radius
        has_semantic_filters: Any of type, status, price or cap-rate present
        parameters: Procedure parameters, None when rejected
    """
    is_radius_search: bool
    has_admin_location: bool
    has_address_search: bool
    has_semantic_filters: bool
    parameters: Optional[DispatchParameters] = None

    @property
    def rejected(self) -> bool:
        """Nothing to search on; the caller returns an empty result."""
        return self.parameters is None


def build_dispatch_parameters(filters: ExtractedFilters) -> DispatchPlan:
    """
    Build the assisted search parameters for a resolved filter record.

    Radius and administrative search never share a call: radius fields are
    only set for a radius search, city/state only for an administrative one.
    Type, status, price and cap rate compose with either.

    Args:
        filters: Output of the location resolver

    Returns:
        DispatchPlan; rejected when the record carries no search signal
    """
    is_radius_search = filters.radius_meters is not None and filters.location_text is not None
    has_admin_location = filters.city is not None or filters.state is not None
    has_address_search = not is_radius_search and filters.location_text is not None
    has_semantic_filters = any(
        value is not None
        for value in (
            filters.property_type,
            filters.status,
            filters.min_price,
            filters.max_price,
            filters.min_cap_rate,
            filters.max_cap_rate,
        )
    )

    logger.info(
        f"Dispatch flags: radius={is_radius_search} admin={has_admin_location} "
        f"address={has_address_search} semantic={has_semantic_filters}"
    )

    if not (is_radius_search or has_admin_location or has_address_search or has_semantic_filters):
        return DispatchPlan(
            is_radius_search=False,
            has_admin_location=False,
            has_address_search=False,
            has_semantic_filters=False,
        )

    admin_search = has_admin_location and not is_radius_search
    location = filters.location
    parameters = DispatchParameters(
        p_lat=location.lat if is_radius_search else None,
        p_lng=location.lng if is_radius_search else None,
        p_radius_m=filters.radius_meters if is_radius_search else None,
        p_type=filters.property_type,
        p_status=filters.status,
        p_min_price=filters.min_price,
        p_max_price=filters.max_price,
        p_min_cap_rate=filters.min_cap_rate,
        p_max_cap_rate=filters.max_cap_rate,
        p_city=location.city if admin_search else None,
        p_state=location.state if admin_search else None,
        p_address=filters.location_text if has_address_search else None,
    )

    return DispatchPlan(
        is_radius_search=is_radius_search,
        has_admin_location=has_admin_location,
        has_address_search=has_address_search,
        has_semantic_filters=has_semantic_filters,
        parameters=parameters,
    )
