from __future__ import annotations

from collections import deque
from typing import Deque, Iterator


class ReadyQueue:
    """
    FIFO of process indices awaiting the CPU, bounded by the batch size.

    Round Robin enqueues each live process at most once at any moment, so the
    queue never needs more than one slot per process. Exceeding the capacity
    means the scheduler admitted a process twice.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self._items: Deque[int] = deque()

    def push(self, index: int) -> None:
        if len(self._items) >= self.capacity:
            raise OverflowError(f"ready queue full (capacity {self.capacity}), cannot enqueue {index}")
        self._items.append(index)

    def pop(self) -> int:
        if not self._items:
            raise IndexError("pop from an empty ready queue")
        return self._items.popleft()

    def __contains__(self, index: object) -> bool:
        return index in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"ReadyQueue({list(self._items)!r}, capacity={self.capacity})"
