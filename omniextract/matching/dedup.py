from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Partition(Generic[T]):
    """Candidates split into first sightings and repeats."""

    new: list[T] = field(default_factory=list)
    duplicates: list[T] = field(default_factory=list)


class DedupAccumulator:
    """Tracks canonical numbers seen so far in a session.

    Seeded with the session's known numbers; every candidate reported as new is
    remembered, so a number repeated later in the same batch counts as a duplicate.
    """

    def __init__(self, known: Iterable[str] = ()) -> None:
        self._seen: set[str] = set(known)

    def __contains__(self, canonical: object) -> bool:
        return canonical in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def partition(self, candidates: Iterable[str]) -> Partition[str]:
        return self.partition_by(candidates, key=lambda c: c)

    def partition_by(self, candidates: Iterable[T], *, key: Callable[[T], str]) -> Partition[T]:
        """Partition arbitrary candidates using *key* to get their canonical form."""
        result: Partition[T] = Partition()
        for candidate in candidates:
            canonical = key(candidate)
            if canonical in self._seen:
                result.duplicates.append(candidate)
            else:
                self._seen.add(canonical)
                result.new.append(candidate)
        return result
