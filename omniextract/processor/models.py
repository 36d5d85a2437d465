import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from omniextract.processor.exceptions import InvalidStatusTransitionError

ImageSource = Path | bytes


def new_id() -> str:
    """Opaque unique identifier for queue items, numbers and exports."""
    return uuid.uuid4().hex


class ItemStatus(str, Enum):
    """Lifecycle of a queue item."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


_ALLOWED_TRANSITIONS: dict[ItemStatus, frozenset[ItemStatus]] = {
    ItemStatus.PENDING: frozenset({ItemStatus.PROCESSING}),
    ItemStatus.PROCESSING: frozenset({ItemStatus.COMPLETED, ItemStatus.ERROR}),
    ItemStatus.COMPLETED: frozenset(),
    # failed items become eligible again on the next pass
    ItemStatus.ERROR: frozenset({ItemStatus.PROCESSING}),
}


@dataclass
class QueueItem:
    """One uploaded image awaiting or undergoing processing."""

    name: str
    source: ImageSource
    id: str = field(default_factory=new_id)
    status: ItemStatus = ItemStatus.PENDING
    progress: int = 0
    raw_text: str | None = None
    error: str | None = None

    def start(self) -> None:
        self._advance(ItemStatus.PROCESSING)
        self.error = None
        self.progress = 20

    def checkpoint(self, progress: int) -> None:
        self.progress = max(0, min(100, progress))

    def record_text(self, text: str) -> None:
        """Store OCR output. Set once, never overwritten."""
        if self.raw_text is None:
            self.raw_text = text

    def complete(self) -> None:
        self._advance(ItemStatus.COMPLETED)
        self.progress = 100

    def fail(self, reason: str) -> None:
        self._advance(ItemStatus.ERROR)
        self.error = reason

    def _advance(self, target: ItemStatus) -> None:
        if target not in _ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransitionError(
                f"Item {self.name} cannot move from {self.status.value} to {target.value}"
            )
        self.status = target


@dataclass(frozen=True)
class ExtractedNumber:
    """A unique canonical phone number surfaced from a batch."""

    canonical: str
    original: str
    source: str
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "canonical": self.canonical,
            "original": self.original,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, str]) -> "ExtractedNumber":
        return cls(
            canonical=raw["canonical"],
            original=raw.get("original", raw["canonical"]),
            source=raw.get("source", ""),
            id=raw.get("id") or new_id(),
        )


@dataclass
class BatchReport:
    """Outcome of one orchestrator pass."""

    new_numbers: list[ExtractedNumber] = field(default_factory=list)
    completed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    duplicates: int = 0
