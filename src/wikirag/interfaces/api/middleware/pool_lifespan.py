"""Pool lifespan middleware - opens pool on startup, closes on shutdown."""

from typing import Any

import psycopg
from psycopg_pool import AsyncConnectionPool

from wikirag.log import get_logger

logger = get_logger(__name__)


class PoolLifespanMiddleware:
    """Opens the connection pool on ASGI startup and closes it on shutdown.

    With ``check_schema`` set, startup warns when the embeddings table is missing
    (migrations not applied); requests will then fail with database errors.
    """

    def __init__(self, pool: AsyncConnectionPool, check_schema: bool = False) -> None:
        self._pool = pool
        self._check_schema = check_schema

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open()
        logger.info("Database pool opened (min=%d, max=%d)", self._pool.min_size, self._pool.max_size)
        if self._check_schema:
            await self._warn_if_table_missing()

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("Database pool closed")

    async def _warn_if_table_missing(self) -> None:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute("SELECT to_regclass('document_embeddings')")
                row = await cur.fetchone()
        except psycopg.Error as e:
            logger.warning("Could not check database schema: %s", e)
            return
        if not row or row[0] is None:
            logger.warning("Table document_embeddings is missing; run alembic upgrade head")
