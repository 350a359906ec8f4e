# src/valuecheck/engine/reorder_buffer.py
"""Reorder buffer: releases finished items in submission order.

Units finish in whatever order the pool happens to run them (a slow adapter
call on one sample, a timeout on another). The buffer holds each finished
outcome until everything submitted before it has finished too. That is
what makes a Report independent of pool size.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class BufferEntry(Generic[T]):
    """A finished item, released in submission order.

    Attributes:
        submit_index: Position in submission order (0-indexed)
        complete_index: Position in completion order
        result: The stored value
        submit_timestamp: time.perf_counter() at submit()
        complete_timestamp: time.perf_counter() at complete()
    """

    submit_index: int
    complete_index: int
    result: T
    submit_timestamp: float
    complete_timestamp: float

    @property
    def duration_ms(self) -> float:
        return (self.complete_timestamp - self.submit_timestamp) * 1000


class ReorderBuffer(Generic[T]):
    """Thread-safe holding area keyed by submission index.

    Usage:
        buffer: ReorderBuffer[UnitOutcome] = ReorderBuffer()

        idx = buffer.submit()
        # ... a worker runs the unit ...
        buffer.complete(idx, outcome)

        for entry in buffer.get_ready_results():
            handle(entry.result)
    """

    def __init__(self) -> None:
        self._lock = Lock()
        # Submitted but not yet complete: index -> submit timestamp
        self._in_flight: dict[int, float] = {}
        # Complete but held back behind an earlier index
        self._held: dict[int, BufferEntry[T]] = {}
        self._submitted = 0
        self._completed = 0
        self._released = 0

    @property
    def pending_count(self) -> int:
        """Items submitted but not yet released."""
        with self._lock:
            return self._submitted - self._released

    def submit(self) -> int:
        """Reserve the next index."""
        with self._lock:
            index = self._submitted
            self._in_flight[index] = time.perf_counter()
            self._submitted += 1
            return index

    def complete(self, index: int, result: T) -> None:
        """Record the result for a submitted index.

        Raises:
            KeyError: If index was never submitted
            ValueError: If index was already completed
        """
        with self._lock:
            if index in self._held or 0 <= index < self._released:
                raise ValueError(f"Index {index} was already completed")
            if index not in self._in_flight:
                raise KeyError(f"Index {index} was never submitted")
            self._held[index] = BufferEntry(
                submit_index=index,
                complete_index=self._completed,
                result=result,
                submit_timestamp=self._in_flight.pop(index),
                complete_timestamp=time.perf_counter(),
            )
            self._completed += 1

    def get_ready_results(self) -> list[BufferEntry[T]]:
        """Release every held item whose predecessors have all been released."""
        with self._lock:
            ready: list[BufferEntry[T]] = []
            while self._released in self._held:
                ready.append(self._held.pop(self._released))
                self._released += 1
            return ready
