"""
Property search queries against the api schema.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import asyncpg

from ...error_handling import DownstreamSearchError
from ...models import DispatchParameters, RequestContext
from .rls import escape_like, scoped_connection

logger = logging.getLogger(__name__)

PROPERTY_COLUMNS = (
    "property_id",
    "name",
    "landlord",
    "address",
    "city",
    "state",
    "type",
    "status",
    "price",
    "cap_rate",
    "file_url",
    "latitude",
    "longitude",
)

SORTABLE_COLUMNS = frozenset({
    "property_created_at",
    "property_updated_at",
    "price",
    "cap_rate",
    "name",
})

SEARCHABLE_COLUMNS = ("name", "address", "city", "state", "type", "status")

# Listings awaiting review are never shown
HIDDEN_STATUS = "Review"


class PropertyRepository:
    """Runs property searches; every query is scoped to the caller"""

    ASSISTED_PROCEDURE = "api.search_properties_by_radius_with_image"
    LISTING_VIEW = "api.vw_property_with_image"

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def search_assisted(
        self,
        params: DispatchParameters,
        context: Optional[RequestContext] = None
    ) -> List[Dict[str, Any]]:
        """
        Call the assisted search procedure.

        Args:
            params: Procedure arguments; None is sent as NULL
            context: Caller identity for row-level security

        Returns:
            Unordered result rows

        Raises:
            DownstreamSearchError: The procedure failed
        """
        args = params.to_rpc_args()
        named = ", ".join(f"{name} => ${i}" for i, name in enumerate(args, start=1))
        sql = f"SELECT * FROM {self.ASSISTED_PROCEDURE}({named})"

        try:
            async with scoped_connection(self.pool, context) as conn:
                rows = await conn.fetch(sql, *args.values())
        except (asyncpg.PostgresError, OSError) as e:
            logger.error(f"Assisted search failed: {e}")
            raise DownstreamSearchError(str(e)) from e

        logger.info(f"Assisted search returned {len(rows)} rows")
        return [dict(row) for row in rows]

    async def search_traditional(
        self,
        search: Optional[str],
        sort_field: str,
        sort_order: str,
        page: int,
        limit: int,
        context: Optional[RequestContext] = None,
        property_type: Optional[str] = None,
        status: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Substring search over the listing view, sorted and paged in SQL.

        A search term that matches nothing falls back to the unfiltered page,
        so the listing never goes blank because of a typo.

        Args:
            search: Substring matched case-insensitively against name,
                address, city, state, type and status
            sort_field: Column to sort by (unknown values sort by creation time)
            sort_order: "asc" or "desc"
            page: 1-based page number
            limit: Page size
            context: Caller identity for row-level security
            property_type: Exact type filter from the UI
            status: Exact status filter from the UI

        Returns:
            (rows, total matching rows)

        Raises:
            DownstreamSearchError: The query failed
        """
        term = search.strip() if search else ""
        try:
            async with scoped_connection(self.pool, context) as conn:
                rows, total = await self._fetch_page(
                    conn, term, sort_field, sort_order, page, limit, property_type, status
                )
                if term and total == 0:
                    logger.info(f"No listings match '{term}', falling back to unfiltered page")
                    rows, total = await self._fetch_page(
                        conn, "", sort_field, sort_order, page, limit, property_type, status
                    )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error(f"Traditional search failed: {e}")
            raise DownstreamSearchError(str(e)) from e

        return rows, total

    async def _fetch_page(
        self,
        conn: asyncpg.Connection,
        term: str,
        sort_field: str,
        sort_order: str,
        page: int,
        limit: int,
        property_type: Optional[str],
        status: Optional[str]
    ) -> Tuple[List[Dict[str, Any]], int]:
        conditions = ["status <> $1"]
        values: List[Any] = [HIDDEN_STATUS]

        if term:
            values.append(f"%{escape_like(term)}%")
            placeholder = f"${len(values)}"
            conditions.append(
                "(" + " OR ".join(f"{column} ILIKE {placeholder}" for column in SEARCHABLE_COLUMNS) + ")"
            )
        if property_type:
            values.append(property_type)
            conditions.append(f"type = ${len(values)}")
        if status:
            values.append(status)
            conditions.append(f"status = ${len(values)}")

        where = " AND ".join(conditions)
        column = sort_field if sort_field in SORTABLE_COLUMNS else "property_created_at"
        direction = "ASC" if (sort_order or "").lower() == "asc" else "DESC"
        offset = (max(page, 1) - 1) * limit

        total = await conn.fetchval(f"SELECT count(*) FROM {self.LISTING_VIEW} WHERE {where}", *values)
        rows = await conn.fetch(
            f"""
            SELECT {", ".join(PROPERTY_COLUMNS)}
            FROM {self.LISTING_VIEW}
            WHERE {where}
            ORDER BY {column} {direction} NULLS LAST
            LIMIT ${len(values) + 1} OFFSET ${len(values) + 2}
            """,
            *values, limit, offset
        )
        return [dict(row) for row in rows], int(total or 0)
