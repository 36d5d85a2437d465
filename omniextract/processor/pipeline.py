from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from omniextract.matching.dedup import DedupAccumulator
from omniextract.matching.matcher import NumberMatch
from omniextract.processor.models import ExtractedNumber, QueueItem


@dataclass(slots=True)
class ItemContext:
    item: QueueItem
    accumulator: DedupAccumulator
    payload: str = ""
    text: str = ""
    matches: list[NumberMatch] = field(default_factory=list)
    new_numbers: list[ExtractedNumber] = field(default_factory=list)
    duplicates: int = 0


class ItemStep(ABC):
    # advisory progress reported once the step has finished
    progress: ClassVar[int]

    @abstractmethod
    def run(self, context: ItemContext) -> ItemContext:
        raise NotImplementedError
