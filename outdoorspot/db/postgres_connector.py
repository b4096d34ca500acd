"""PostgreSQL database connector."""
import json
from typing import Any, Dict, List, Optional

import asyncpg

from outdoorspot.config import settings
from outdoorspot.logger import logger


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode json/jsonb columns to Python objects, and back."""
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog",
        )


class PostgresConnector:
    """Manages an asyncpg connection pool built from a database URL."""

    def __init__(self, database_url: str, max_size: int = settings.DB_POOL_MAX_SIZE):
        self.database_url = database_url
        self.max_size = max_size
        self._pool: Optional[asyncpg.Pool] = None

    async def connect(self):
        """Create the pool."""
        self._pool = await asyncpg.create_pool(
            dsn=self.database_url,
            max_size=self.max_size,
            init=_init_connection,
        )
        logger.info("asyncpg pool ready (max_size={size})", size=self.max_size)

    def _require_pool(self) -> asyncpg.Pool:
        if not self._pool:
            raise ConnectionError("Connection pool not initialized. Call .connect() first.")
        return self._pool

    async def execute_query(self, sql: str, *args) -> List[Dict[str, Any]]:
        """Run a query and return every row as a dict."""
        async with self._require_pool().acquire() as conn:
            rows = await conn.fetch(sql, *args)
            return [dict(row) for row in rows]

    async def fetch_one(self, sql: str, *args) -> Optional[Dict[str, Any]]:
        """Run a query and return the first row, or None."""
        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(sql, *args)
            return dict(row) if row is not None else None

    async def execute(self, sql: str, *args) -> str:
        """Run a statement and return its status, e.g. `DELETE 1`."""
        async with self._require_pool().acquire() as conn:
            return await conn.execute(sql, *args)

    async def close(self):
        """Close the pool."""
        if self._pool:
            await self._pool.close()
            self._pool = None
