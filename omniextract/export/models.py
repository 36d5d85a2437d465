import time
from dataclasses import dataclass, field
from typing import Any

from omniextract.processor.models import new_id


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ExportRecord:
    """One completed export, including the exact bytes that were saved."""

    filename: str
    count: int
    data: str
    timestamp: int = field(default_factory=now_ms)
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "filename": self.filename,
            "timestamp": self.timestamp,
            "count": self.count,
            "data": self.data,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ExportRecord":
        return cls(
            id=str(raw["id"]),
            filename=str(raw["filename"]),
            timestamp=int(raw["timestamp"]),
            count=int(raw["count"]),
            data=str(raw["data"]),
        )
