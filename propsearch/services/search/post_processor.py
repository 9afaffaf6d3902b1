"""
Result post-processor - sorts, pages and signs assisted search rows.

The assisted search procedure returns an unordered row set, so sorting and
pagination happen here. Traditional search sorts and pages in the database
and only goes through sign_resource_urls.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_SORT_FIELD = "property_created_at"

# UI sort key -> row key
SORT_FIELD_MAP = {
    "property_created_at": "property_created_at",
    "property_updated_at": "property_updated_at",
    "created_at": "property_created_at",
    "updated_at": "property_updated_at",
    "price": "price",
    "cap_rate": "cap_rate",
    "name": "name",
}


class UrlSigner(Protocol):
    async def sign(self, path: str) -> Optional[str]:
        ...


def _sort_value(value: Any) -> Any:
    if isinstance(value, str):
        return value.lower()
    return value


def sort_rows(
    rows: List[Dict[str, Any]],
    sort_field: Optional[str] = DEFAULT_SORT_FIELD,
    sort_order: str = "desc"
) -> List[Dict[str, Any]]:
    """
    Sort rows by a UI sort key, nulls last in either direction.

    Args:
        rows: Result rows
        sort_field: UI sort key; unknown keys sort by creation time
        sort_order: "asc" or "desc" (anything but "asc" is descending)

    Returns:
        New sorted list
    """
    key = SORT_FIELD_MAP.get(sort_field or "", SORT_FIELD_MAP[DEFAULT_SORT_FIELD])
    descending = (sort_order or "desc").lower() != "asc"

    present = [row for row in rows if row.get(key) is not None]
    missing = [row for row in rows if row.get(key) is None]

    try:
        present.sort(key=lambda row: _sort_value(row[key]), reverse=descending)
    except TypeError:
        # Mixed value types in one column
        present.sort(key=lambda row: str(row[key]).lower(), reverse=descending)

    return present + missing


def paginate(rows: List[Dict[str, Any]], page: int, page_size: int) -> List[Dict[str, Any]]:
    """Slice [offset, offset + page_size) for a 1-based page."""
    page = max(page, 1)
    offset = (page - 1) * page_size
    return rows[offset:offset + page_size]


async def _sign_row(row: Dict[str, Any], signer: UrlSigner, field: str) -> Dict[str, Any]:
    path = row.get(field)
    if not path:
        return {**row, field: None}

    try:
        url = await signer.sign(path)
    except Exception as e:
        logger.warning(f"Signing failed for '{path}': {type(e).__name__}: {e}")
        url = None
    return {**row, field: url}


async def sign_resource_urls(
    rows: List[Dict[str, Any]],
    signer: Optional[UrlSigner],
    field: str = "file_url"
) -> List[Dict[str, Any]]:
    """
    Replace each row's stored resource path with a signed URL.

    Rows are signed concurrently. A row whose signing fails keeps going with
    a null resource reference.

    Args:
        rows: Rows to enrich; not modified
        signer: Storage signer; when None every resource reference is nulled
        field: Row key holding the storage path

    Returns:
        New rows in the same order
    """
    if signer is None:
        return [{**row, field: None} for row in rows]
    return list(await asyncio.gather(*(_sign_row(row, signer, field) for row in rows)))


async def post_process(
    rows: List[Dict[str, Any]],
    sort_field: Optional[str],
    sort_order: str,
    page: int,
    page_size: int,
    signer: Optional[UrlSigner]
) -> List[Dict[str, Any]]:
    """Sort, paginate and sign one page of assisted search results."""
    ordered = sort_rows(rows, sort_field, sort_order)
    return await sign_resource_urls(paginate(ordered, page, page_size), signer)
