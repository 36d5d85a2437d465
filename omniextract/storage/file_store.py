import json
import os
from collections.abc import Mapping
from pathlib import Path

from omniextract.storage.base import BaseKeyValueStore
from omniextract.storage.exceptions import StorageError


class JsonFileKeyValueStore(BaseKeyValueStore):
    """Keeps all keys in a single JSON object on disk.

    Writes go to a sibling temp file that is then renamed over the original,
    so a crash mid-write leaves the previous state intact.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        data = self._read()
        data.update(items)
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise StorageError(f"Failed to write state file {self._path}: {exc}") from exc

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to read state file {self._path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StorageError(f"State file {self._path} must contain a JSON object")
        return {str(k): str(v) for k, v in raw.items()}
