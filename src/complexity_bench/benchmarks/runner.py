"""Benchmark runner: times work over a range of sizes and validates the curve.

Eg::

    runner = BenchmarkRunner()
    runner.assert_performance_linear("bench_sum", lambda n: sum(range(n)), 0.9)
"""

from __future__ import annotations

import gc
import sys
from dataclasses import asdict, dataclass, field
from typing import Callable, Sequence, TextIO

import structlog

from complexity_bench.core.cases import BenchmarkCase, DefaultBenchmarkCase
from complexity_bench.core.models import (
    BenchmarkDefinition,
    FitFamily,
    RunState,
    SampleSet,
    Validation,
    ValidationSpec,
    WorkCallback,
)
from complexity_bench.core.ranges import RangeSpec, resolve_range
from complexity_bench.fitting.curves import get_fitter, linear_slope
from complexity_bench.shared.config import RunnerConfig

from .progress import TimingPrinter
from .registry import BenchmarkRegistry


@dataclass(frozen=True, slots=True)
class BenchmarkOutcome:
    name: str
    passed: bool
    range: list[float] = field(default_factory=list)
    times: list[float] = field(default_factory=list)
    reason: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


class BenchmarkRunner:
    """Runs benchmarks sequentially and reports through a :class:`BenchmarkCase`."""

    def __init__(
        self,
        case: BenchmarkCase | None = None,
        *,
        config: RunnerConfig | None = None,
        stream: TextIO | None = None,
        default_range: RangeSpec | None = None,
    ) -> None:
        self.case = case or DefaultBenchmarkCase()
        self.config = config or RunnerConfig.default()
        self.state = RunState.IDLE
        self._default_range = default_range if default_range is not None else self.config.default_range
        self._printer = TimingPrinter(stream=stream or sys.stdout, sync=self.config.sync_output)
        self._logger = structlog.get_logger(__name__)

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def measure(self, name: str, work: WorkCallback, *, range_spec: RangeSpec | None = None) -> SampleSet:
        """Calls ``work`` once per input size and records the elapsed seconds."""

        self.state = RunState.RANGING
        xs = resolve_range(range_spec, default=self._default_range)

        self.state = RunState.SAMPLING
        self._logger.info("benchmark-started", benchmark=name, sizes=len(xs))
        clock = self.config.clock
        samples = SampleSet()

        self._printer.start(name)
        for x in xs:
            if self.config.collect_garbage:
                gc.collect()
            t0 = clock()
            work(x)
            elapsed = clock() - t0

            self._printer.sample(elapsed)
            samples.add(x, elapsed)
            self._logger.debug("benchmark-sample", benchmark=name, x=x, elapsed=elapsed)
        self._printer.finish()

        return samples

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validation_for_fit(self, family: FitFamily | str, threshold: float) -> Validation:
        """Returns a validation asserting the times fit ``family`` within ``threshold``.

        Constant rate is checked as a linear slope within ``1 - threshold`` of
        zero; the other families require ``r^2 >= threshold``.
        """

        spec = ValidationSpec(FitFamily(family), threshold)

        if spec.family is FitFamily.CONSTANT:

            def validate_constant(range_: Sequence[float], times: Sequence[float]) -> None:
                slope = linear_slope(range_, times)
                self.case.assert_in_delta(0, slope, 1 - spec.threshold)

            return validate_constant

        fitter = get_fitter(spec.family)

        def validate_fit(range_: Sequence[float], times: Sequence[float]) -> None:
            _a, _b, rr = fitter(range_, times)
            self.case.assert_operator(rr, ">=", spec.threshold)

        return validate_fit

    def validate(self, name: str, validation: ValidationSpec | Validation, samples: SampleSet) -> None:
        self.state = RunState.VALIDATING
        if isinstance(validation, ValidationSpec):
            validation = self.validation_for_fit(validation.family, validation.threshold)

        validation(samples.xs, samples.ys)

        self.state = RunState.REPORTED
        self._logger.info("benchmark-validated", benchmark=name)

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def assert_performance(
        self,
        name: str,
        validation: ValidationSpec | Validation,
        work: WorkCallback,
        *,
        range_spec: RangeSpec | None = None,
    ) -> SampleSet:
        """Times ``work`` over the range, then passes range and times to ``validation``."""

        samples = self.measure(name, work, range_spec=range_spec)
        self.validate(name, validation, samples)
        return samples

    def assert_performance_constant(
        self, name: str, work: WorkCallback, threshold: float = 0.99, *, range_spec: RangeSpec | None = None
    ) -> SampleSet:
        return self.assert_performance(
            name, self.validation_for_fit(FitFamily.CONSTANT, threshold), work, range_spec=range_spec
        )

    def assert_performance_linear(
        self, name: str, work: WorkCallback, threshold: float = 0.99, *, range_spec: RangeSpec | None = None
    ) -> SampleSet:
        return self.assert_performance(
            name, self.validation_for_fit(FitFamily.LINEAR, threshold), work, range_spec=range_spec
        )

    def assert_performance_exponential(
        self, name: str, work: WorkCallback, threshold: float = 0.99, *, range_spec: RangeSpec | None = None
    ) -> SampleSet:
        return self.assert_performance(
            name, self.validation_for_fit(FitFamily.EXPONENTIAL, threshold), work, range_spec=range_spec
        )

    def assert_performance_power(
        self, name: str, work: WorkCallback, threshold: float = 0.99, *, range_spec: RangeSpec | None = None
    ) -> SampleSet:
        return self.assert_performance(
            name, self.validation_for_fit(FitFamily.POWER, threshold), work, range_spec=range_spec
        )

    def run(self, definition: BenchmarkDefinition) -> SampleSet:
        return self.assert_performance(
            definition.name, definition.validation, definition.work, range_spec=definition.range_spec
        )


def run_benchmarks(
    registry: BenchmarkRegistry,
    *,
    case_factory: Callable[[], BenchmarkCase] | None = None,
    config: RunnerConfig | None = None,
    stream: TextIO | None = None,
) -> list[BenchmarkOutcome]:
    """Runs every registered benchmark in registration order.

    Assertion failures are recorded and the next benchmark runs; any other
    error aborts the whole run.
    """

    logger = structlog.get_logger(__name__)
    config = config or RunnerConfig.default()
    outcomes: list[BenchmarkOutcome] = []

    for definition in registry:
        case = case_factory() if case_factory is not None else DefaultBenchmarkCase()
        runner = BenchmarkRunner(case, config=config, stream=stream, default_range=registry.default_range)

        case.setup()
        try:
            if config.collect_garbage:
                gc.collect()
            samples = runner.measure(definition.name, definition.work, range_spec=definition.range_spec)
            try:
                runner.validate(definition.name, definition.validation, samples)
            except AssertionError as exc:
                logger.warning("benchmark-failed", benchmark=definition.name, reason=str(exc))
                outcomes.append(
                    BenchmarkOutcome(
                        name=definition.name,
                        passed=False,
                        range=list(samples.xs),
                        times=list(samples.ys),
                        reason=str(exc),
                    )
                )
            else:
                outcomes.append(
                    BenchmarkOutcome(
                        name=definition.name,
                        passed=True,
                        range=list(samples.xs),
                        times=list(samples.ys),
                    )
                )
        finally:
            case.teardown()

    failed = sum(1 for outcome in outcomes if not outcome.passed)
    logger.info("benchmark-suite-finished", total=len(outcomes), failed=failed)
    return outcomes
