from abc import ABC, abstractmethod
from pathlib import Path

from omniextract.export.exceptions import ExportError
from omniextract.logging.logger import Log


class BaseFileSaver(ABC):
    """Contract for the save-to-disk side effect of an export."""

    @abstractmethod
    def save(self, content: bytes, filename: str) -> None:
        """Persist *content* under *filename*."""


class LocalFileSaver(BaseFileSaver):
    """Writes exported files into an output directory."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    def save(self, content: bytes, filename: str) -> None:
        path = self._output_dir / Path(filename).name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise ExportError(f"Failed to write {path}: {exc}") from exc
        Log.info(f"Saved {len(content)} bytes to {path}")
