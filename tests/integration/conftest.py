import os
import uuid
from collections.abc import Generator

import pytest

from omniextract.config.settings import Settings
from omniextract.database.connection import close_pool, get_connection, init_pool
from omniextract.storage.postgres_store import PostgresKeyValueStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "omniextract_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def pg_store(integration_pool: None) -> PostgresKeyValueStore:
    store = PostgresKeyValueStore()
    store.ensure_table()
    return store


@pytest.fixture
def key_prefix(integration_pool: None) -> Generator[str, None, None]:
    prefix = f"test_{uuid.uuid4().hex[:8]}_"
    yield prefix
    with get_connection() as conn:
        conn.execute("DELETE FROM omniextract_kv WHERE key LIKE %s", (f"{prefix}%",))
        conn.commit()
