"""
Lease filter extractor - maps a natural-language lease query onto the
filters the lease list already supports.
"""

import logging
from typing import Optional

from ...error_handling import ErrorHandler
from ...models import LeaseFilters
from ..llm import LanguageModel
from .prompts import build_lease_extraction_prompt
from .response_sanitizer import parse_model_json

logger = logging.getLogger(__name__)


class LeaseFilterExtractor:
    """Extract lease filters with the language model"""

    def __init__(
        self,
        llm: LanguageModel,
        timeout_seconds: float = 10.0,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.llm = llm
        self.timeout_seconds = timeout_seconds
        self.error_handler = error_handler or ErrorHandler(default_timeout_seconds=timeout_seconds)

    async def extract(self, text: str) -> LeaseFilters:
        """Extract lease filters; falls back to all-null filters on any failure."""
        try:
            raw = await self.error_handler.run_with_timeout(
                self.llm.generate,
                build_lease_extraction_prompt(text),
                timeout_seconds=self.timeout_seconds,
            )
            payload = parse_model_json(raw)
            filters = LeaseFilters(
                tenant=payload.get("tenant"),
                landlord=payload.get("landlord"),
                property_name=payload.get("property_name"),
                status=payload.get("status"),
                lease_start_from=payload.get("lease_start_from"),
                lease_end_to=payload.get("lease_end_to"),
            )
        except Exception as e:
            logger.warning(f"Lease filter extraction failed for '{text}': {type(e).__name__}: {e}")
            return LeaseFilters()

        logger.info(f"Extracted lease filters: {filters.model_dump(exclude_none=True)}")
        return filters
