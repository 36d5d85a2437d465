from abc import ABC, abstractmethod
from collections.abc import Mapping


class BaseKeyValueStore(ABC):
    """Contract for durable string key-value stores."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never set."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value.

        Raises:
            StorageError: if the value cannot be persisted.
        """

    @abstractmethod
    def set_many(self, items: Mapping[str, str]) -> None:
        """Store all *items* together: either every key is written or none is.

        Raises:
            StorageError: if the values cannot be persisted.
        """
