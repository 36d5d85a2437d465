from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool, PoolTimeout

from omniextract.config.settings import Settings
from omniextract.storage.exceptions import StorageError

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    """Build a libpq connection string from the db_* settings."""
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
    )


def init_pool(settings: Settings) -> None:
    """Initialize the global connection pool from settings.

    The pipeline has a single writer, so the pool stays small.

    Raises:
        StorageError: if no connection can be established in time.
    """
    global _pool  # noqa: PLW0603
    _pool = ConnectionPool(build_conninfo(settings), min_size=1, max_size=2, open=True)
    try:
        _pool.wait(timeout=10.0)
    except PoolTimeout as exc:
        close_pool()
        raise StorageError(f"Could not connect to PostgreSQL at {settings.db_host}: {exc}") from exc


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a connection from the pool. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
