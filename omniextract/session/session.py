"""Session state shared by the orchestrator and the exporter.

Holds the accumulated numbers, the export history and the export counter.
State is loaded once from a key-value store and written back on every change.
"""

import json
from collections.abc import Sequence
from typing import Any

from omniextract.export.exceptions import ExportRecordNotFoundError
from omniextract.export.models import ExportRecord
from omniextract.logging.logger import Log
from omniextract.processor.models import ExtractedNumber
from omniextract.storage.base import BaseKeyValueStore
from omniextract.storage.exceptions import StorageError

HISTORY_KEY = "omniextract_history"
COUNTER_KEY = "omniextract_count"
RESULTS_KEY = "omniextract_results"


class Session:
    """Accumulated numbers, export history and export counter."""

    def __init__(
        self,
        store: BaseKeyValueStore,
        *,
        history_capacity: int = 5,
        numbers: Sequence[ExtractedNumber] = (),
        history: Sequence[ExportRecord] = (),
        export_counter: int = 0,
    ) -> None:
        if history_capacity < 1:
            raise ValueError("history_capacity must be at least 1")
        self._store = store
        self._history_capacity = history_capacity
        self._numbers: list[ExtractedNumber] = []
        self._known: set[str] = set()
        self._append_unique(numbers)
        self._history: list[ExportRecord] = list(history)[:history_capacity]
        self._export_counter = export_counter

    @classmethod
    def load(cls, store: BaseKeyValueStore, *, history_capacity: int = 5) -> "Session":
        """Build a session from whatever the store holds.

        Raises:
            StorageError: if a stored value is corrupt.
        """
        try:
            numbers = [
                ExtractedNumber.from_dict(raw) for raw in _load_json_list(store, RESULTS_KEY)
            ]
            history = [
                ExportRecord.from_dict(raw) for raw in _load_json_list(store, HISTORY_KEY)
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"Stored session record is malformed: {exc}") from exc
        session = cls(
            store,
            history_capacity=history_capacity,
            numbers=numbers,
            history=history,
            export_counter=_load_counter(store),
        )
        Log.info(
            f"Session loaded: {len(session.numbers)} numbers, "
            f"{len(session.history)} exports, counter={session.export_counter}"
        )
        return session

    @property
    def numbers(self) -> tuple[ExtractedNumber, ...]:
        return tuple(self._numbers)

    @property
    def history(self) -> tuple[ExportRecord, ...]:
        """Export records, most recent first."""
        return tuple(self._history)

    @property
    def export_counter(self) -> int:
        return self._export_counter

    def canonical_numbers(self) -> list[str]:
        """Canonical forms in discovery order."""
        return [n.canonical for n in self._numbers]

    def merge(self, new_numbers: Sequence[ExtractedNumber]) -> int:
        """Append numbers not yet in the session and persist. Returns how many were added."""
        added = self._append_unique(new_numbers)
        if added:
            self._persist_numbers()
        return added

    def record_export(self, record: ExportRecord) -> None:
        """Prepend *record* to the bounded history and bump the export counter."""
        history = [record, *self._history][: self._history_capacity]
        counter = self._export_counter + 1
        # history and counter are written together or not at all
        self._store.set_many(
            {
                HISTORY_KEY: _dump_history(history),
                COUNTER_KEY: str(counter),
            }
        )
        self._history = history
        self._export_counter = counter

    def find_export(self, record_id: str) -> ExportRecord:
        for record in self._history:
            if record.id == record_id:
                return record
        raise ExportRecordNotFoundError(f"No export with id '{record_id}' in history")

    def reset(self, *, include_history: bool = False) -> None:
        """Forget all accumulated numbers; optionally wipe history and counter too."""
        cleared = {RESULTS_KEY: "[]"}
        if include_history:
            cleared.update({HISTORY_KEY: _dump_history([]), COUNTER_KEY: "0"})
        self._store.set_many(cleared)
        self._numbers = []
        self._known = set()
        if include_history:
            self._history = []
            self._export_counter = 0
        Log.info(f"Session reset (include_history={include_history})")

    def _append_unique(self, numbers: Sequence[ExtractedNumber]) -> int:
        added = 0
        for number in numbers:
            if number.canonical in self._known:
                continue
            self._known.add(number.canonical)
            self._numbers.append(number)
            added += 1
        return added

    def _persist_numbers(self) -> None:
        self._store.set(RESULTS_KEY, json.dumps([n.to_dict() for n in self._numbers]))


def _dump_history(history: Sequence[ExportRecord]) -> str:
    return json.dumps([r.to_dict() for r in history])


def _load_json_list(store: BaseKeyValueStore, key: str) -> list[dict[str, Any]]:
    raw = store.get(key)
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageError(f"Stored value for '{key}' is not valid JSON: {exc}") from exc
    if not isinstance(parsed, list) or not all(isinstance(item, dict) for item in parsed):
        raise StorageError(f"Stored value for '{key}' must be a list of objects")
    return parsed


def _load_counter(store: BaseKeyValueStore) -> int:
    raw = store.get(COUNTER_KEY)
    if not raw:
        return 0
    try:
        counter = int(raw)
    except ValueError as exc:
        raise StorageError(f"Stored export counter is not an integer: {raw!r}") from exc
    if counter < 0:
        raise StorageError(f"Stored export counter is negative: {counter}")
    return counter
