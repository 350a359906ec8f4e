# src/valuecheck/engine/verifier.py
"""Verifier: runs the property suite against one adapter and descriptor.

Lifecycle (one run per Verifier):

    CONFIGURING -> VALIDATING -> RUNNING -> REPORTING -> DONE

- VALIDATING raises ConfigurationError on any descriptor/adapter mismatch.
  No property runs and no Report is produced.
- RUNNING executes every applicable (property, anchor) unit. Adapter faults
  and timeouts become Violations; one failing unit never stops another.
- REPORTING merges violations in suite order, then anchor order.
- DONE is terminal. Calling run() again raises VerifierStateError.
"""

from __future__ import annotations

import copy
import threading
from collections import Counter
from collections.abc import Sequence

from valuecheck.contracts.enums import UnitStatus, VerifierPhase
from valuecheck.contracts.errors import AdapterFault, ConfigurationError, VerifierStateError
from valuecheck.contracts.report import Report, Violation
from valuecheck.core.config import CapabilityDescriptor, RunSettings
from valuecheck.core.logging import get_logger
from valuecheck.core.samples import SampleSet
from valuecheck.engine.cancellation import CancellationToken, cancel_after
from valuecheck.engine.pool import UnitExecutor
from valuecheck.engine.probe import AdapterProbe
from valuecheck.engine.properties import SUITE, Property, select_properties
from valuecheck.engine.properties.base import CheckEnvironment
from valuecheck.engine.units import Unit, UnitOutcome, execute_unit, plan_units

logger = get_logger(__name__)


class Verifier:
    """Checks one candidate type, once.

    Usage:
        verifier = Verifier(QuantityAdapter(), CapabilityDescriptor(
            ordered=True,
            hashable=True,
            sample_values=[{"amount": 1, "unit": "m"}, {"amount": 2, "unit": "m"}],
        ))
        report = verifier.run()
        assert report.passed, report.to_dict()
    """

    def __init__(
        self,
        adapter: object,
        descriptor: CapabilityDescriptor,
        *,
        settings: RunSettings | None = None,
        cancellation: CancellationToken | None = None,
        suite: tuple[Property, ...] = SUITE,
    ) -> None:
        self._phase = VerifierPhase.CONFIGURING
        self._phase_lock = threading.Lock()
        self._descriptor = descriptor
        self._settings = settings if settings is not None else RunSettings()
        self._cancellation = cancellation if cancellation is not None else CancellationToken()
        self._suite = suite
        self._probe = AdapterProbe(adapter)
        self._samples = SampleSet.from_descriptor(descriptor)
        self._log = logger.bind(adapter=type(adapter).__name__)

    @property
    def phase(self) -> VerifierPhase:
        return self._phase

    @property
    def samples(self) -> SampleSet:
        return self._samples

    def _transition(self, phase: VerifierPhase) -> None:
        self._log.debug("verifier_phase", previous=self._phase.value, phase=phase.value)
        self._phase = phase

    def run(self) -> Report:
        """Validate, run every applicable property, and report.

        Returns:
            A fresh Report

        Raises:
            ConfigurationError: If the descriptor does not fit the adapter
            VerifierStateError: If this Verifier has already run
        """
        with self._phase_lock:
            if self._phase != VerifierPhase.CONFIGURING:
                raise VerifierStateError(f"Verifier already used (phase={self._phase.value}); create a new one per run")
            self._transition(VerifierPhase.VALIDATING)

        try:
            self._validate()
            self._transition(VerifierPhase.RUNNING)
            outcomes = self._execute()
            self._transition(VerifierPhase.REPORTING)
            report = self._build_report(outcomes)
        finally:
            self._transition(VerifierPhase.DONE)

        self._log.info(
            "conformance_run_finished",
            passed=report.passed,
            complete=report.complete,
            violations=len(report.violations),
            stats=dict(report.stats),
        )
        return report

    def _validate(self) -> None:
        """Static descriptor/adapter checks, then checks that need the samples.

        Sample and identity args must survive a deep copy; every construction
        during the run works on one.
        """
        problems = self._descriptor.problems_with(self._probe.adapter)
        if problems:
            raise ConfigurationError(problems)

        instances = []
        for sample in self._samples:
            try:
                args = sample.fresh_args()
            except Exception as exc:
                problems.append(f"{sample.label} args cannot be copied: {type(exc).__name__}: {exc}")
                continue
            try:
                instances.append(self._probe.construct(args))
            except AdapterFault as fault:
                problems.append(f"cannot construct {sample.label}: {fault.describe()}")

        for name, identity in (
            ("additive_identity", self._descriptor.additive_identity),
            ("multiplicative_identity", self._descriptor.multiplicative_identity),
        ):
            if identity is None:
                continue
            try:
                args = copy.deepcopy(identity)
            except Exception as exc:
                problems.append(f"{name} args cannot be copied: {type(exc).__name__}: {exc}")
                continue
            try:
                self._probe.construct(args)
            except AdapterFault as fault:
                problems.append(f"cannot construct {name}: {fault.describe()}")

        for bad in self._samples.malformed:
            try:
                copy.deepcopy(bad.representation)
            except Exception as exc:
                problems.append(f"{bad.label} cannot be copied: {type(exc).__name__}: {exc}")

        if problems:
            raise ConfigurationError(problems)

        if self._descriptor.ordered and not self._has_distinct_pair(instances[: len(self._samples.plain)]):
            raise ConfigurationError(["'ordered' requires at least two sample values that are not equal"])

    def _has_distinct_pair(self, instances: Sequence[object]) -> bool:
        for i, left in enumerate(instances):
            for right in instances[i + 1 :]:
                try:
                    if not self._probe.equals(left, right):
                        return True
                except AdapterFault as fault:
                    raise ConfigurationError([f"equals raised while checking sample distinctness: {fault.describe()}"]) from fault
        return False

    def _execute(self) -> list[UnitOutcome]:
        env = CheckEnvironment(
            probe=self._probe,
            samples=self._samples,
            descriptor=self._descriptor,
            settings=self._settings,
        )
        properties = select_properties(self._descriptor, self._probe, self._suite)
        units = plan_units(properties, env)
        self._log.info(
            "conformance_run_started",
            capabilities=sorted(c.value for c in self._descriptor.capabilities),
            properties=[p.name for p in properties],
            samples=len(self._samples),
            units=len(units),
            pool_size=self._settings.pool_size,
        )

        def run_unit(unit: Unit) -> UnitOutcome:
            return execute_unit(unit, env)

        timer = None
        if self._settings.run_timeout_seconds is not None:
            timer = cancel_after(self._cancellation, self._settings.run_timeout_seconds)
        try:
            with UnitExecutor(self._settings, self._cancellation) as executor:
                entries = executor.execute(units, run_unit)
                self._log.debug("executor_stats", **executor.get_stats())
        finally:
            if timer is not None:
                timer.cancel()

        outcomes = [entry.result for entry in entries]
        for entry in entries:
            if entry.result.violations:
                self._log.debug(
                    "unit_violated",
                    unit=entry.result.unit.label,
                    status=entry.result.status.value,
                    violations=len(entry.result.violations),
                    duration_ms=round(entry.duration_ms, 3),
                )
        return outcomes

    def _build_report(self, outcomes: Sequence[UnitOutcome]) -> Report:
        counts = Counter(outcome.status for outcome in outcomes)
        violations: list[Violation] = []
        for outcome in outcomes:
            violations.extend(outcome.violations)
        stats = {"units": len(outcomes)} | {status.value: counts.get(status, 0) for status in UnitStatus}
        return Report(
            violations=tuple(violations),
            complete=counts.get(UnitStatus.SKIPPED, 0) == 0,
            stats=stats,
        )


def verify(
    adapter: object,
    descriptor: CapabilityDescriptor,
    *,
    settings: RunSettings | None = None,
    cancellation: CancellationToken | None = None,
) -> Report:
    """Run a fresh Verifier once and return its Report.

    Raises:
        ConfigurationError: If the descriptor does not fit the adapter
    """
    return Verifier(adapter, descriptor, settings=settings, cancellation=cancellation).run()
