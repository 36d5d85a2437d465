from collections.abc import Mapping

from omniextract.storage.base import BaseKeyValueStore


class InMemoryKeyValueStore(BaseKeyValueStore):
    """Process-local store. State is lost on exit."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)
