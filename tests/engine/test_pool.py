# tests/engine/test_pool.py
"""Tests for UnitExecutor: ordering, timeouts, cancellation, error propagation."""

from __future__ import annotations

import threading
import time
from typing import Any

import pytest

from valuecheck.contracts.enums import UnitStatus, ViolationKind
from valuecheck.core.config import RunSettings
from valuecheck.engine.cancellation import CancellationToken
from valuecheck.engine.pool import UnitExecutor
from valuecheck.engine.properties.base import Property
from valuecheck.engine.units import Unit, UnitOutcome


def _units(count: int) -> list[Unit]:
    prop = Property("noop", lambda ctx, anchor: iter(()))
    return [Unit(position=i, prop=prop, anchor=i) for i in range(count)]


def _passed(unit: Unit) -> UnitOutcome:
    return UnitOutcome.from_violations(unit, [])


class TestOrdering:
    @pytest.mark.parametrize("pool_size", [1, 4])
    def test_outcomes_in_submission_order(self, pool_size: int) -> None:
        """Later units finish first but outcomes keep submission order."""
        units = _units(8)

        def run(unit: Unit) -> UnitOutcome:
            time.sleep(0.002 * (8 - unit.position))
            return _passed(unit)

        with UnitExecutor(RunSettings(pool_size=pool_size, unit_timeout_seconds=None), CancellationToken()) as executor:
            entries = executor.execute(units, run)

        assert [e.result.unit.position for e in entries] == list(range(8))
        assert all(e.result.status is UnitStatus.PASSED for e in entries)

    def test_concurrency_is_bounded(self) -> None:
        units = _units(6)
        barrier = threading.Barrier(3, timeout=5)

        def run(unit: Unit) -> UnitOutcome:
            barrier.wait()
            return _passed(unit)

        with UnitExecutor(RunSettings(pool_size=3, unit_timeout_seconds=None), CancellationToken()) as executor:
            executor.execute(units, run)
            stats = executor.get_stats()

        assert stats["max_concurrent_reached"] == 3
        assert stats["pool_size"] == 3

    def test_empty(self) -> None:
        with UnitExecutor(RunSettings(), CancellationToken()) as executor:
            assert executor.execute([], _passed) == []


class TestTimeouts:
    def test_overrun_becomes_timeout_violation(self) -> None:
        units = _units(2)
        release = threading.Event()

        def run(unit: Unit) -> UnitOutcome:
            if unit.position == 0:
                release.wait(5)
            return _passed(unit)

        try:
            with UnitExecutor(RunSettings(unit_timeout_seconds=0.05), CancellationToken()) as executor:
                entries = executor.execute(units, run)
                stats = executor.get_stats()
        finally:
            release.set()

        first, second = (e.result for e in entries)
        assert first.status is UnitStatus.TIMED_OUT
        assert first.violations[0].kind is ViolationKind.TIMEOUT
        assert second.status is UnitStatus.PASSED
        assert stats["timeouts"] == 1

    def test_run_bound_guards_units_without_their_own(self) -> None:
        units = _units(1)
        release = threading.Event()

        def hang(unit: Unit) -> UnitOutcome:
            release.wait(5)
            return _passed(unit)

        settings = RunSettings(unit_timeout_seconds=None, run_timeout_seconds=0.05)
        try:
            with UnitExecutor(settings, CancellationToken()) as executor:
                (entry,) = executor.execute(units, hang)
        finally:
            release.set()

        assert entry.result.status is UnitStatus.TIMED_OUT
        assert "within 0.05s" in entry.result.violations[0].message


class TestCancellation:
    def test_cancelled_before_start_skips_everything(self) -> None:
        token = CancellationToken()
        token.cancel("stop")
        ran: list[int] = []

        def run(unit: Unit) -> UnitOutcome:
            ran.append(unit.position)
            return _passed(unit)

        with UnitExecutor(RunSettings(), token) as executor:
            entries = executor.execute(_units(3), run)
            stats = executor.get_stats()

        assert ran == []
        assert [e.result.status for e in entries] == [UnitStatus.SKIPPED] * 3
        assert stats["skipped"] == 3

    def test_cancel_during_run_skips_the_rest(self) -> None:
        token = CancellationToken()

        def run(unit: Unit) -> UnitOutcome:
            if unit.position == 1:
                token.cancel("enough")
            return _passed(unit)

        with UnitExecutor(RunSettings(pool_size=1, unit_timeout_seconds=None), token) as executor:
            entries = executor.execute(_units(4), run)

        assert [e.result.status for e in entries] == [
            UnitStatus.PASSED,
            UnitStatus.PASSED,
            UnitStatus.SKIPPED,
            UnitStatus.SKIPPED,
        ]


class TestErrorPropagation:
    @pytest.mark.parametrize("unit_timeout", [None, 5.0])
    def test_first_engine_error_is_reraised(self, unit_timeout: float | None) -> None:
        def run(unit: Unit) -> Any:
            if unit.position == 1:
                raise ZeroDivisionError("engine bug")
            if unit.position == 2:
                raise KeyError("later bug")
            return _passed(unit)

        with pytest.raises(ZeroDivisionError, match="engine bug"):
            with UnitExecutor(RunSettings(pool_size=2, unit_timeout_seconds=unit_timeout), CancellationToken()) as executor:
                executor.execute(_units(4), run)
