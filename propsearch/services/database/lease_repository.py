"""
Lease list queries against the api schema.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import asyncpg

from ...error_handling import DownstreamSearchError
from ...models import LeaseFilters, LeaseListQuery, RequestContext
from .rls import escape_like, scoped_connection

logger = logging.getLogger(__name__)

LEASE_SORT_FIELDS = frozenset({
    "lease_start",
    "lease_end",
    "tenant",
    "landlord",
    "property_name",
    "status",
    "annual_rent",
    "created_at",
    "updated_at",
})

LEASE_SEARCH_COLUMNS = ("tenant", "landlord", "property_name", "comments")


class LeaseRepository:
    """Runs lease list queries; every query is scoped to the caller"""

    LEASE_VIEW = "api.view_lease_property_with_user"

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def search(
        self,
        query: LeaseListQuery,
        filters: Optional[LeaseFilters] = None,
        context: Optional[RequestContext] = None
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Fetch one page of leases.

        Extracted filters, when given, replace the plain substring search;
        an extracted status overrides the status query parameter.

        Args:
            query: Parsed list request
            filters: Filters extracted from a natural-language search
            context: Caller identity for row-level security

        Returns:
            (rows, total matching rows)

        Raises:
            DownstreamSearchError: The query failed
        """
        conditions: List[str] = []
        values: List[Any] = []

        def bind(value: Any) -> str:
            values.append(value)
            return f"${len(values)}"

        status = query.status
        if filters is not None and filters.status:
            status = filters.status

        if query.property_id:
            conditions.append(f"property_id::text = {bind(query.property_id)}")
        if query.user_id:
            conditions.append(f"user_id::text = {bind(query.user_id)}")
        if status and status != "all":
            conditions.append(f"status = {bind(status)}")

        if filters is not None:
            for column in ("tenant", "landlord", "property_name"):
                value = getattr(filters, column)
                if value:
                    conditions.append(f"{column} ILIKE {bind(f'%{escape_like(value)}%')}")
            if filters.lease_start_from:
                conditions.append(f"lease_start >= {bind(filters.lease_start_from)}")
            if filters.lease_end_to:
                conditions.append(f"lease_end <= {bind(filters.lease_end_to)}")
        elif query.search.strip():
            placeholder = bind(f"%{escape_like(query.search.strip())}%")
            conditions.append(
                "(" + " OR ".join(f"{column} ILIKE {placeholder}" for column in LEASE_SEARCH_COLUMNS) + ")"
            )

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        column = query.sort_field if query.sort_field in LEASE_SORT_FIELDS else "created_at"
        direction = "ASC" if query.sort_order.lower() == "asc" else "DESC"
        offset = (max(query.page, 1) - 1) * query.page_size

        try:
            async with scoped_connection(self.pool, context) as conn:
                total = await conn.fetchval(f"SELECT count(*) FROM {self.LEASE_VIEW} {where}", *values)
                rows = await conn.fetch(
                    f"""
                    SELECT * FROM {self.LEASE_VIEW}
                    {where}
                    ORDER BY {column} {direction} NULLS LAST
                    LIMIT ${len(values) + 1} OFFSET ${len(values) + 2}
                    """,
                    *values, query.page_size, offset
                )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error(f"Lease list query failed: {e}")
            raise DownstreamSearchError(str(e)) from e

        return [dict(row) for row in rows], int(total or 0)
