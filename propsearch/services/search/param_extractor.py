"""
Parameter extractor - Uses the language model to turn a natural-language
property query into structured filters.
"""

import logging
from typing import Any, Dict, Optional

from ...error_handling import ErrorHandler
from ...models import ExtractedFilters
from ...normalizers import (
    normalize_bounds,
    parse_amount,
    parse_cap_rate_range,
    parse_percentage,
    parse_price_range,
)
from ..llm import LanguageModel
from .prompts import build_property_extraction_prompt
from .response_sanitizer import parse_model_json

logger = logging.getLogger(__name__)


def _first(payload: Dict[str, Any], *keys: str) -> Any:
    """Value of the first key present with a non-null value."""
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def filters_from_payload(payload: Dict[str, Any]) -> ExtractedFilters:
    """
    Build ExtractedFilters from a parsed model payload.

    Accepts the prompt's key names plus the common variants models drift
    into, and resolves comparison phrases ("above 3 million") that land in a
    single price or cap-rate slot.

    Args:
        payload: JSON object returned by the model

    Returns:
        Normalized filter record
    """
    min_price, max_price = normalize_bounds(
        _first(payload, "min_price", "minPrice"),
        _first(payload, "max_price", "maxPrice"),
        parse_price_range,
        parse_amount,
    )
    if min_price is None and max_price is None:
        min_price, max_price = parse_price_range(_first(payload, "price", "price_range"))

    min_cap_rate, max_cap_rate = normalize_bounds(
        _first(payload, "min_cap_rate", "minCapRate"),
        _first(payload, "max_cap_rate", "maxCapRate"),
        parse_cap_rate_range,
        parse_percentage,
    )
    if min_cap_rate is None and max_cap_rate is None:
        min_cap_rate, max_cap_rate = parse_cap_rate_range(_first(payload, "cap_rate", "capRate"))

    return ExtractedFilters(
        location_text=_first(payload, "location", "location_text", "locationText", "address"),
        radius_meters=_first(payload, "radius_m", "radius_meters", "radiusMeters", "radius"),
        property_type=_first(payload, "property_type", "propertyType", "type"),
        status=_first(payload, "status"),
        min_price=min_price,
        max_price=max_price,
        min_cap_rate=min_cap_rate,
        max_cap_rate=max_cap_rate,
        city=_first(payload, "city"),
        state=_first(payload, "state"),
    )


class ParameterExtractor:
    """Extract property search filters with the language model"""

    def __init__(
        self,
        llm: LanguageModel,
        timeout_seconds: float = 10.0,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.llm = llm
        self.timeout_seconds = timeout_seconds
        self.error_handler = error_handler or ErrorHandler(default_timeout_seconds=timeout_seconds)

    async def extract(self, text: str) -> ExtractedFilters:
        """
        Extract structured filters from search text.

        One model call per invocation; results are not cached. Never raises:
        a collaborator error, a timeout or unparseable output all yield an
        all-null filter record, which the dispatcher turns into an empty
        result.

        Args:
            text: Natural-language search query

        Returns:
            ExtractedFilters for the query
        """
        prompt = build_property_extraction_prompt(text)

        try:
            raw = await self.error_handler.run_with_timeout(
                self.llm.generate,
                prompt,
                timeout_seconds=self.timeout_seconds,
            )
            payload = parse_model_json(raw)
            filters = filters_from_payload(payload)
        except Exception as e:
            logger.warning(f"Parameter extraction failed for '{text}': {type(e).__name__}: {e}")
            return ExtractedFilters()

        logger.info(f"Extracted params: {filters.model_dump(exclude_none=True)}")
        return filters
