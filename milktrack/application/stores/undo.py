from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class UndoEntry(Generic[T]):
    record: T
    # records deleted together with `record` (checks, sub-records)
    dependents: list[Any] = field(default_factory=list)


class UndoBuffer(Generic[T]):
    """Most recent deletions of one entity type.

    With the default capacity of 1 a new deletion replaces the previous one.
    """

    def __init__(self, capacity: int = 1) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._entries: deque[UndoEntry[T]] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 1

    @property
    def can_undo(self) -> bool:
        return bool(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def remember(self, record: T, dependents: Iterable[Any] = ()) -> UndoEntry[T]:
        entry = UndoEntry(record=record, dependents=list(dependents))
        self._entries.append(entry)
        return entry

    def peek(self) -> UndoEntry[T] | None:
        return self._entries[-1] if self._entries else None

    def discard(self, entry: UndoEntry[T]) -> None:
        """Drop an entry once it has been restored."""
        try:
            self._entries.remove(entry)
        except ValueError:
            pass
