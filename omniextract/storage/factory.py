from pathlib import Path

from omniextract.config.settings import Settings
from omniextract.storage.base import BaseKeyValueStore
from omniextract.storage.file_store import JsonFileKeyValueStore
from omniextract.storage.memory_store import InMemoryKeyValueStore
from omniextract.storage.postgres_store import PostgresKeyValueStore


class KeyValueStoreFactory:
    """Creates the configured key-value store.

    The postgres backend expects init_pool() to have been called.
    """

    @classmethod
    def create(cls, settings: Settings) -> BaseKeyValueStore:
        backend = settings.storage_backend.lower()
        if backend == "file":
            return JsonFileKeyValueStore(Path(settings.storage_path))
        if backend == "memory":
            return InMemoryKeyValueStore()
        if backend == "postgres":
            store = PostgresKeyValueStore()
            store.ensure_table()
            return store
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: ['file', 'memory', 'postgres']"
        )
