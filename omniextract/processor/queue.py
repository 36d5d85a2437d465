from collections.abc import Iterator, Sequence
from pathlib import Path

from omniextract.logging.logger import Log
from omniextract.processor.models import ImageSource, QueueItem


class UploadQueue:
    """Ordered queue of uploaded images.

    Each ingest call accepts at most ``max_items_per_upload`` sources; the rest
    are dropped, not deferred.
    """

    def __init__(self, max_items_per_upload: int = 20) -> None:
        if max_items_per_upload < 1:
            raise ValueError("max_items_per_upload must be at least 1")
        self._max_items = max_items_per_upload
        self._items: list[QueueItem] = []

    def __iter__(self) -> Iterator[QueueItem]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple[QueueItem, ...]:
        return tuple(self._items)

    def ingest(self, sources: Sequence[ImageSource | tuple[str, bytes]]) -> list[QueueItem]:
        """Append up to the per-upload cap of *sources* and return the new items.

        A source is a file path, raw bytes, or a ``(name, bytes)`` pair.
        """
        accepted = sources[: self._max_items]
        dropped = len(sources) - len(accepted)
        new_items = [self._to_item(source, len(self._items) + i) for i, source in enumerate(accepted)]
        self._items.extend(new_items)
        Log.info(f"Ingested {len(new_items)} images into processing queue")
        if dropped:
            Log.info(f"Dropped {dropped} images over the per-upload limit of {self._max_items}")
        return new_items

    def clear(self) -> None:
        self._items.clear()

    @staticmethod
    def _to_item(source: ImageSource | tuple[str, bytes], position: int) -> QueueItem:
        if isinstance(source, tuple):
            name, data = source
            return QueueItem(name=name, source=data)
        if isinstance(source, Path):
            return QueueItem(name=source.name, source=source)
        return QueueItem(name=f"image-{position + 1}", source=source)
