"""Pool lifespan middleware - opens pool on startup, closes on shutdown."""

import asyncio
from typing import Any

from psycopg_pool import ConnectionPool


class PoolLifespanMiddleware:
    """Middleware that opens the connection pool on startup and closes on shutdown."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool when ASGI server starts."""
        await asyncio.to_thread(self._pool.open, wait=True)

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close pool when ASGI server shuts down."""
        await asyncio.to_thread(self._pool.close)
