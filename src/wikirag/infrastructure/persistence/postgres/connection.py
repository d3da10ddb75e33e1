"""PostgreSQL async connection pool."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. Caller must call await pool.open()
    before use (PoolLifespanMiddleware in the ASGI app, explicitly in the CLI).
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )


@asynccontextmanager
async def open_pool(conninfo: str) -> AsyncIterator[AsyncConnectionPool]:
    """Open a small pool for the lifetime of a script."""
    pool = create_pool(conninfo, min_size=1, max_size=2)
    await pool.open()
    try:
        yield pool
    finally:
        await pool.close()
