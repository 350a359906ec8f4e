# src/valuecheck/engine/pool.py
"""Unit executor: parallel, time-bounded, cancellable, order-preserving.

Runs units while:
- Bounding concurrency to pool_size worker threads
- Guarding each unit with a timeout (overruns become TIMEOUT violations)
- Refusing to start new units once the run is cancelled
- Reordering outcomes to match submission order
"""

from __future__ import annotations

import threading
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from threading import Lock
from types import TracebackType
from typing import Any

from valuecheck.core.config import RunSettings
from valuecheck.core.logging import get_logger
from valuecheck.engine.cancellation import CancellationToken
from valuecheck.engine.reorder_buffer import BufferEntry, ReorderBuffer
from valuecheck.engine.units import Unit, UnitOutcome

logger = get_logger(__name__)

UnitFn = Callable[[Unit], UnitOutcome]


@dataclass
class ExceptionResult:
    """Wrapper for exceptions that must propagate out of a worker thread.

    Adapter faults are captured inside the unit. Anything else escaping a
    unit is an engine bug: the worker wraps it here and execute() re-raises
    it in the calling thread.
    """

    exception: BaseException
    traceback: str


class UnitExecutor:
    """Executor for units with strict output ordering.

    execute() blocks until every unit has an outcome, then returns them
    in the order the units were given.

    A unit that overruns its timeout is abandoned on a daemon thread; the
    pool worker that was waiting for it moves on. Abandoned threads do not
    keep the interpreter alive.

    Usage:
        with UnitExecutor(settings, cancellation) as executor:
            entries = executor.execute(units, run_unit)
        outcomes = [entry.result for entry in entries]
    """

    def __init__(self, settings: RunSettings, cancellation: CancellationToken) -> None:
        self._pool_size = settings.pool_size
        self._unit_timeout = settings.unit_guard_seconds
        self._cancellation = cancellation

        self._thread_pool = ThreadPoolExecutor(max_workers=settings.pool_size, thread_name_prefix="valuecheck")
        self._buffer: ReorderBuffer[UnitOutcome | ExceptionResult] = ReorderBuffer()

        # Serializes execute() calls; the buffer's indices are run-global
        self._batch_lock = Lock()

        self._stats_lock = Lock()
        self._active_workers: int = 0
        self._max_concurrent: int = 0
        self._timeouts: int = 0
        self._skipped: int = 0

    @property
    def pool_size(self) -> int:
        return self._pool_size

    def __enter__(self) -> UnitExecutor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown(wait=exc_type is None)

    def shutdown(self, wait: bool = True) -> None:
        """Shut the worker pool down. Without wait, queued units are dropped."""
        self._thread_pool.shutdown(wait=wait, cancel_futures=not wait)

    def get_stats(self) -> dict[str, Any]:
        """Executor statistics for logging."""
        with self._stats_lock:
            return {
                "pool_size": self._pool_size,
                "unit_timeout_seconds": self._unit_timeout,
                "max_concurrent_reached": self._max_concurrent,
                "timeouts": self._timeouts,
                "skipped": self._skipped,
            }

    def _increment_active_workers(self) -> None:
        with self._stats_lock:
            self._active_workers += 1
            if self._active_workers > self._max_concurrent:
                self._max_concurrent = self._active_workers

    def _decrement_active_workers(self) -> None:
        with self._stats_lock:
            self._active_workers -= 1

    def execute(self, units: Sequence[Unit], run_fn: UnitFn) -> list[BufferEntry[UnitOutcome]]:
        """Run units and return their outcomes in submission order.

        Args:
            units: Units in report order
            run_fn: Runs one unit; must capture adapter faults itself

        Returns:
            One BufferEntry per unit, in the order given

        Raises:
            Exception: The first (by submission order) exception that
                escaped run_fn, after every unit has finished
        """
        if not units:
            return []

        with self._batch_lock:
            entries = self._execute_locked(units, run_fn)

        outcomes: list[BufferEntry[UnitOutcome]] = []
        for entry in entries:
            if isinstance(entry.result, ExceptionResult):
                raise entry.result.exception
            outcomes.append(entry)  # type: ignore[arg-type]
        return outcomes

    def _execute_locked(
        self,
        units: Sequence[Unit],
        run_fn: UnitFn,
    ) -> list[BufferEntry[UnitOutcome | ExceptionResult]]:
        futures: dict[Future[tuple[int, UnitOutcome | ExceptionResult]], int] = {}

        for unit in units:
            buffer_idx = self._buffer.submit()
            future = self._thread_pool.submit(self._execute_single, buffer_idx, unit, run_fn)
            futures[future] = buffer_idx

        entries: list[BufferEntry[UnitOutcome | ExceptionResult]] = []
        for future in as_completed(futures):
            buffer_idx, result = future.result()
            self._buffer.complete(buffer_idx, result)
            entries.extend(self._buffer.get_ready_results())

        # Final drain: the last completion may not have been at the head
        while self._buffer.pending_count > 0:
            ready = self._buffer.get_ready_results()
            if not ready:
                break
            entries.extend(ready)

        if len(entries) != len(units):
            raise RuntimeError(f"Executor returned {len(entries)} outcomes for {len(units)} units")
        return entries

    def _execute_single(
        self,
        buffer_idx: int,
        unit: Unit,
        run_fn: UnitFn,
    ) -> tuple[int, UnitOutcome | ExceptionResult]:
        if self._cancellation.cancelled:
            with self._stats_lock:
                self._skipped += 1
            logger.debug("unit_skipped", unit=unit.label, reason=self._cancellation.reason)
            return (buffer_idx, UnitOutcome.skipped(unit))

        self._increment_active_workers()
        try:
            return (buffer_idx, self._run_guarded(unit, run_fn))
        finally:
            self._decrement_active_workers()

    @staticmethod
    def _capture(unit: Unit, run_fn: UnitFn) -> UnitOutcome | ExceptionResult:
        try:
            return run_fn(unit)
        except Exception as exc:
            return ExceptionResult(exception=exc, traceback=traceback.format_exc())

    def _run_guarded(self, unit: Unit, run_fn: UnitFn) -> UnitOutcome | ExceptionResult:
        """Run a unit, giving up on it after the configured timeout."""
        if self._unit_timeout is None:
            return self._capture(unit, run_fn)

        box: list[UnitOutcome | ExceptionResult] = []
        worker = threading.Thread(
            target=lambda: box.append(self._capture(unit, run_fn)),
            name=f"valuecheck-unit-{unit.position}",
            daemon=True,
        )
        worker.start()
        worker.join(self._unit_timeout)

        if worker.is_alive():
            with self._stats_lock:
                self._timeouts += 1
            logger.warning("unit_timed_out", unit=unit.label, timeout_seconds=self._unit_timeout)
            return UnitOutcome.timed_out(unit, self._unit_timeout)

        if not box:
            # The thread died on a BaseException that _capture does not catch
            return ExceptionResult(
                exception=RuntimeError(f"unit {unit.label} ended without an outcome"),
                traceback="",
            )
        return box[0]
