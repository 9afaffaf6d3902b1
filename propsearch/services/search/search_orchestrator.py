"""
Search orchestrators - run a listing request through either the plain
substring path or the assisted pipeline.

Assisted:    extract -> resolve -> dispatch -> execute -> sort -> page -> sign
Traditional: query -> execute (database sorts and pages) -> sign
"""

import logging
from typing import Optional

from ...models import (
    ExtractedFilters,
    LeaseListQuery,
    LeaseSearchResponse,
    QueryIntent,
    RequestContext,
    SearchQuery,
    SearchResponse,
)
from ...normalizers import normalize_status
from ..database import LeaseRepository, PropertyRepository
from ..geocoding import LocationResolver
from .dispatcher import build_dispatch_parameters
from .intent_classifier import IntentClassifier, lease_classifier
from .lease_extractor import LeaseFilterExtractor
from .param_extractor import ParameterExtractor
from .post_processor import UrlSigner, post_process, sign_resource_urls

logger = logging.getLogger(__name__)


class PropertySearchOrchestrator:
    """Property listing search"""

    def __init__(
        self,
        repository: PropertyRepository,
        extractor: ParameterExtractor,
        resolver: LocationResolver,
        signer: Optional[UrlSigner] = None,
        classifier: Optional[IntentClassifier] = None
    ):
        self.repository = repository
        self.extractor = extractor
        self.resolver = resolver
        self.signer = signer
        self.classifier = classifier or IntentClassifier()

    async def search(
        self,
        query: SearchQuery,
        page: int = 1,
        limit: int = 9,
        sort_field: str = "property_created_at",
        sort_order: str = "desc",
        context: Optional[RequestContext] = None,
        search: Optional[str] = None
    ) -> SearchResponse:
        """
        Search property listings.

        Args:
            query: Natural-language text plus explicit UI filters
            page: 1-based page number
            limit: Page size
            sort_field: UI sort key
            sort_order: "asc" or "desc"
            context: Caller identity for row-level security
            search: Substring for the traditional path (defaults to query.text)

        Returns:
            SearchResponse; extracted_params is set on the assisted path

        Raises:
            GeocodingFailure: A required location could not be geocoded
            DownstreamSearchError: The search backend failed
        """
        intent = self.classifier.classify(query.text)
        logger.info(f"Property search intent: {intent.value} for '{query.text}'")

        if intent == QueryIntent.ASSISTED:
            return await self._assisted(query, page, limit, sort_field, sort_order, context)

        term = search if search is not None else query.text
        rows, total = await self.repository.search_traditional(
            term,
            sort_field,
            sort_order,
            page,
            limit,
            context=context,
            property_type=query.type,
            status=normalize_status(query.status) or query.status,
        )
        data = await sign_resource_urls(rows, self.signer)
        return SearchResponse(data=data, total=total, page=page, limit=limit)

    async def _assisted(
        self,
        query: SearchQuery,
        page: int,
        limit: int,
        sort_field: str,
        sort_order: str,
        context: Optional[RequestContext]
    ) -> SearchResponse:
        extracted = await self.extractor.extract(query.text)
        extracted = self._apply_ui_filters(extracted, query)
        if extracted.is_empty:
            logger.info(f"No filters extracted from '{query.text}', returning empty result")
            return SearchResponse(data=[], total=0, page=page, limit=limit, extracted_params=extracted)

        resolved = await self.resolver.resolve(extracted)

        plan = build_dispatch_parameters(resolved)
        if plan.rejected:
            logger.info(f"No searchable filters in '{query.text}', returning empty result")
            return SearchResponse(data=[], total=0, page=page, limit=limit, extracted_params=resolved)

        rows = await self.repository.search_assisted(plan.parameters, context=context)
        data = await post_process(rows, sort_field, sort_order, page, limit, self.signer)
        return SearchResponse(
            data=data,
            total=len(rows),
            page=page,
            limit=limit,
            extracted_params=resolved,
        )

    @staticmethod
    def _apply_ui_filters(filters: ExtractedFilters, query: SearchQuery) -> ExtractedFilters:
        """Explicit type/status picked in the UI win over extracted values."""
        update = {}
        if query.type:
            update["property_type"] = query.type
        if query.status:
            update["status"] = normalize_status(query.status) or query.status
        return filters.model_copy(update=update) if update else filters


class LeaseSearchOrchestrator:
    """Lease list search"""

    def __init__(
        self,
        repository: LeaseRepository,
        extractor: LeaseFilterExtractor,
        classifier: Optional[IntentClassifier] = None
    ):
        self.repository = repository
        self.extractor = extractor
        self.classifier = classifier or lease_classifier

    async def search(
        self,
        query: LeaseListQuery,
        context: Optional[RequestContext] = None
    ) -> LeaseSearchResponse:
        """
        List leases, reading filters out of natural-language search text.

        Raises:
            DownstreamSearchError: The search backend failed
        """
        filters = None
        if query.search.strip() and self.classifier.classify(query.search) == QueryIntent.ASSISTED:
            filters = await self.extractor.extract(query.search)

        rows, total = await self.repository.search(query, filters=filters, context=context)

        mode = "ai" if filters is not None else "traditional"
        user = context.user_id if context else "anonymous"
        if filters is not None:
            logger.info(f"Audit: user={user} VIEW view_lease_property_with_user AI lease search: \"{query.search}\"")
        else:
            logger.info(f"Audit: user={user} VIEW view_lease_property_with_user Viewed lease list")

        return LeaseSearchResponse(
            mode=mode,
            extracted_filters=filters,
            data=rows,
            total=total,
            page=query.page,
            page_size=query.page_size,
        )
