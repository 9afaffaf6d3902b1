"""
Row-level security scoping for pooled connections.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg

from ...models import RequestContext


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@asynccontextmanager
async def scoped_connection(
    pool: asyncpg.Pool,
    context: Optional[RequestContext]
) -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire a connection inside a transaction carrying the caller's identity.

    Settings are transaction-local (set_config(..., true)), so they are gone
    when the connection goes back to the pool.
    """
    async with pool.acquire() as conn:
        async with conn.transaction():
            if context is not None:
                for name, value in context.to_settings().items():
                    await conn.execute("SELECT set_config($1, $2, true)", name, value)
            yield conn
