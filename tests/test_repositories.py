"""
Tests for the asyncpg repositories against a fake pool.

The fake records every statement so tests can check SQL shape, bound
values and the row-level security settings sent ahead of each query.
"""

from contextlib import asynccontextmanager
from datetime import date
from unittest.mock import AsyncMock

import asyncpg
import pytest

from propsearch.error_handling import DownstreamSearchError
from propsearch.models import DispatchParameters, LeaseFilters, LeaseListQuery, RequestContext
from propsearch.services.database import LeaseRepository, PropertyRepository, escape_like


CONTEXT = RequestContext(user_id="user-1", role="manager", account_id="acct-9")


class FakeConnection:
    def __init__(self, pages=None, totals=None):
        self.pages = list(pages or [[]])
        self.totals = list(totals or [0])
        self.executed = []
        self.fetched = []
        self.fetchval_calls = []
        self.transactions = 0

    async def execute(self, sql, *args):
        self.executed.append((sql, args))

    async def fetch(self, sql, *args):
        self.fetched.append((sql, args))
        return self.pages.pop(0) if self.pages else []

    async def fetchval(self, sql, *args):
        self.fetchval_calls.append((sql, args))
        return self.totals.pop(0) if self.totals else 0

    @asynccontextmanager
    async def transaction(self):
        self.transactions += 1
        yield


class FakePool:
    def __init__(self, conn):
        self.conn = conn

    @asynccontextmanager
    async def acquire(self):
        yield self.conn


@pytest.mark.asyncio
async def test_assisted_search_calls_procedure_with_named_args():
    """Test the procedure call, argument order and RLS settings."""
    conn = FakeConnection(pages=[[{"property_id": 1, "price": 10}]])
    repository = PropertyRepository(FakePool(conn))
    params = DispatchParameters(p_lat=1.5, p_lng=2.5, p_radius_m=100, p_max_price=2_000_000)

    rows = await repository.search_assisted(params, context=CONTEXT)

    assert rows == [{"property_id": 1, "price": 10}]
    sql, args = conn.fetched[0]
    assert "api.search_properties_by_radius_with_image(" in sql
    assert "p_lat => $1" in sql
    assert "p_address => $12" in sql
    assert args == tuple(params.to_rpc_args().values())
    assert conn.transactions == 1
    settings_sent = {args[0]: args[1] for _, args in conn.executed}
    assert settings_sent == {"app.user_id": "user-1", "app.role": "manager", "app.account_id": "acct-9"}


@pytest.mark.asyncio
async def test_assisted_search_wraps_database_errors():
    """Test that a Postgres error becomes DownstreamSearchError with its message."""
    conn = FakeConnection()
    conn.fetch = AsyncMock(side_effect=asyncpg.PostgresError("procedure exploded"))
    repository = PropertyRepository(FakePool(conn))

    with pytest.raises(DownstreamSearchError, match="procedure exploded"):
        await repository.search_assisted(DispatchParameters(p_state="TX"), context=CONTEXT)


@pytest.mark.asyncio
async def test_traditional_search_filters_sorts_and_pages():
    """Test the substring query."""
    conn = FakeConnection(pages=[[{"property_id": 3}]], totals=[12])
    repository = PropertyRepository(FakePool(conn))

    rows, total = await repository.search_traditional(
        "Oak_50%", "price", "asc", page=2, limit=9, context=CONTEXT,
    )

    assert rows == [{"property_id": 3}] and total == 12
    count_sql, count_args = conn.fetchval_calls[0]
    assert "status <> $1" in count_sql
    assert count_args == ("Review", r"%Oak\_50\%%")
    page_sql, page_args = conn.fetched[0]
    assert "name ILIKE $2" in page_sql and "status ILIKE $2" in page_sql
    assert "ORDER BY price ASC NULLS LAST" in page_sql
    assert page_args[-2:] == (9, 9)


@pytest.mark.asyncio
async def test_traditional_search_falls_back_to_unfiltered_page():
    """Test that a search matching nothing returns the unfiltered page."""
    conn = FakeConnection(pages=[[], [{"property_id": 1}]], totals=[0, 40])
    repository = PropertyRepository(FakePool(conn))

    rows, total = await repository.search_traditional("zzz", "name", "desc", page=1, limit=9)

    assert rows == [{"property_id": 1}]
    assert total == 40
    assert len(conn.fetchval_calls) == 2
    assert conn.fetchval_calls[1][1] == ("Review",)


@pytest.mark.asyncio
async def test_traditional_search_rejects_unknown_sort_column():
    """Test that an arbitrary sort field never reaches the SQL."""
    conn = FakeConnection(totals=[1], pages=[[{"property_id": 1}]])
    repository = PropertyRepository(FakePool(conn))

    await repository.search_traditional("", "price; DROP TABLE x", "desc", page=1, limit=9)

    assert "ORDER BY property_created_at DESC" in conn.fetched[0][0]
    assert conn.executed == []


@pytest.mark.asyncio
async def test_traditional_search_applies_ui_filters():
    """Test exact type and status filters."""
    conn = FakeConnection(totals=[2], pages=[[{"property_id": 1}]])
    repository = PropertyRepository(FakePool(conn))

    await repository.search_traditional(None, "name", "asc", 1, 9, property_type="Office", status="Leased")

    sql, args = conn.fetchval_calls[0]
    assert "type = $2" in sql and "status = $3" in sql
    assert args == ("Review", "Office", "Leased")


@pytest.mark.asyncio
async def test_lease_search_with_extracted_filters():
    """Test that extracted lease filters replace the substring search."""
    conn = FakeConnection(totals=[5], pages=[[{"lease_id": 1}]])
    repository = LeaseRepository(FakePool(conn))
    query = LeaseListQuery(search="Acme leases expiring", status="active", sort_field="lease_end", sort_order="asc")
    filters = LeaseFilters(tenant="Acme", status="expiring", lease_end_to="2025-12-31")

    rows, total = await repository.search(query, filters=filters, context=CONTEXT)

    assert total == 5
    sql, args = conn.fetchval_calls[0]
    assert "status = $1" in sql
    assert "tenant ILIKE $2" in sql
    assert "lease_end <= $3" in sql
    assert "comments" not in sql
    assert args == ("expiring", "%Acme%", date(2025, 12, 31))
    assert "ORDER BY lease_end ASC" in conn.fetched[0][0]


@pytest.mark.asyncio
async def test_lease_search_skips_relative_dates():
    """Test that a date the model wrote as a phrase adds no date condition."""
    conn = FakeConnection(totals=[0], pages=[[]])
    repository = LeaseRepository(FakePool(conn))
    filters = LeaseFilters(tenant="Acme", lease_start_from="next month", lease_end_to="2026-03-31")

    await repository.search(LeaseListQuery(search="Acme leases from next month"), filters=filters)

    sql, args = conn.fetchval_calls[0]
    assert "lease_start" not in sql
    assert "lease_end <= $2" in sql
    assert args == ("%Acme%", date(2026, 3, 31))


@pytest.mark.asyncio
async def test_lease_search_traditional():
    """Test substring search, property filter and status 'all'."""
    conn = FakeConnection(totals=[1], pages=[[{"lease_id": 1}]])
    repository = LeaseRepository(FakePool(conn))
    query = LeaseListQuery(search="Acme", property_id="p-1", status="all", page=3, page_size=20)

    await repository.search(query)

    sql, args = conn.fetchval_calls[0]
    assert "property_id::text = $1" in sql
    assert "comments ILIKE $2" in sql
    assert "status =" not in sql
    assert args == ("p-1", "%Acme%")
    assert conn.fetched[0][1][-2:] == (20, 40)


@pytest.mark.asyncio
async def test_lease_search_wraps_errors():
    """Test DownstreamSearchError on query failure."""
    conn = FakeConnection()
    conn.fetchval = AsyncMock(side_effect=asyncpg.PostgresError("relation does not exist"))

    with pytest.raises(DownstreamSearchError, match="relation does not exist"):
        await LeaseRepository(FakePool(conn)).search(LeaseListQuery())


def test_escape_like():
    """Test LIKE wildcard escaping."""
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"
