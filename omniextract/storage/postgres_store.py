from collections.abc import Mapping

import psycopg

from omniextract.database.connection import get_connection
from omniextract.storage.base import BaseKeyValueStore
from omniextract.storage.exceptions import StorageError

_UPSERT = """
    INSERT INTO omniextract_kv (key, value, updated_at)
    VALUES (%s, %s, NOW())
    ON CONFLICT (key)
    DO UPDATE SET value = EXCLUDED.value, updated_at = NOW()
"""


class PostgresKeyValueStore(BaseKeyValueStore):
    """Database operations for the omniextract_kv table."""

    def ensure_table(self) -> None:
        """Create the backing table if it does not exist yet."""
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS omniextract_kv (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                    )
                    """
                )
                conn.commit()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to create omniextract_kv table: {exc}") from exc

    def get(self, key: str) -> str | None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT value FROM omniextract_kv WHERE key = %s",
                        (key,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to read key '{key}': {exc}") from exc

        if row is None:
            return None
        return str(row[0])

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.executemany(_UPSERT, list(items.items()))
                conn.commit()
        except psycopg.Error as exc:
            keys = ", ".join(items)
            raise StorageError(f"Failed to write keys [{keys}]: {exc}") from exc
