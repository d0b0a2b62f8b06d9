"""PostgreSQL connection pool."""

from psycopg_pool import ConnectionPool


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    timeout_seconds: float = 5.0,
) -> ConnectionPool:
    """Create connection pool.

    Pool is created with open=False. Caller must call pool.open() before use
    (e.g. via PoolLifespanMiddleware in ASGI lifespan). Checkout waits at most
    ``timeout_seconds``; statements are cancelled by the server after the same
    bound.
    """
    statement_timeout_ms = int(timeout_seconds * 1000)
    return ConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout_seconds,
        kwargs={"options": f"-c statement_timeout={statement_timeout_ms}"},
        open=False,
    )

