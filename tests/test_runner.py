"""Tests for the benchmark runner."""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest

from complexity_bench.benchmarks import BenchmarkRegistry, BenchmarkRunner, run_benchmarks
from complexity_bench.core.errors import (
    BenchmarkAssertionError,
    DegenerateInputError,
    DomainError,
    InvalidArgumentError,
)
from complexity_bench.core.models import BenchmarkDefinition, FitFamily, RunState, ValidationSpec
from complexity_bench.core.ranges import ExponentialRange, LinearRange
from complexity_bench.shared import RunnerConfig

from tests.timing import constant_cost, exponential_cost, linear_cost, quadratic_cost


def test_measure_times_each_size_in_order(clock, config, stream) -> None:
    seen: list[int] = []

    def work(x):
        seen.append(x)
        clock.advance(x / 1000)

    samples = BenchmarkRunner(config=config, stream=stream).measure("bench_sizes", work)

    assert seen == [1, 10, 100, 1000, 10000]
    assert samples.xs == [1, 10, 100, 1000, 10000]
    assert samples.ys == pytest.approx([0.001, 0.01, 0.1, 1.0, 10.0])


def test_progress_output_is_tab_separated_six_decimals(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)
    runner.measure("bench_out", clock.work(lambda x: x / 4), range_spec=LinearRange(1, 3, 1))

    assert stream.getvalue() == "bench_out:\t\t 0.250000\t 0.500000\t 0.750000\n"


class _CountingStream(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


def test_progress_output_is_flushed_per_sample_when_synced(clock, config) -> None:
    stream = _CountingStream()
    BenchmarkRunner(config=config, stream=stream).measure(
        "bench_flush", clock.work(lambda x: 0.1), range_spec=LinearRange(1, 3, 1)
    )

    # name, three samples, newline
    assert stream.flushes == 5


def test_progress_output_is_not_flushed_when_sync_disabled(clock) -> None:
    stream = _CountingStream()
    config = RunnerConfig(sync_output=False, collect_garbage=False, clock=clock)
    BenchmarkRunner(config=config, stream=stream).measure(
        "bench_buffered", clock.work(lambda x: 0.1), range_spec=LinearRange(1, 3, 1)
    )

    assert stream.flushes == 0


def test_gc_is_requested_before_each_sample(clock, stream) -> None:
    config = RunnerConfig(collect_garbage=True, clock=clock)
    with patch("complexity_bench.benchmarks.runner.gc.collect") as collect:
        BenchmarkRunner(config=config, stream=stream).measure(
            "bench_gc", clock.work(lambda x: 0.1), range_spec=LinearRange(1, 4, 1)
        )

    assert collect.call_count == 4


def test_gc_hint_can_be_disabled(clock, config, stream) -> None:
    with patch("complexity_bench.benchmarks.runner.gc.collect") as collect:
        BenchmarkRunner(config=config, stream=stream).measure("bench_nogc", clock.work(lambda x: 0.1))

    collect.assert_not_called()


def test_real_clock_produces_non_negative_times(stream) -> None:
    captured = {}

    def validation(range_, times):
        captured["range"] = list(range_)
        captured["times"] = list(times)

    runner = BenchmarkRunner(config=RunnerConfig(collect_garbage=False), stream=stream)
    runner.assert_performance("bench_real", validation, lambda x: sum(range(x)), range_spec=LinearRange(1, 3, 1))

    assert captured["range"] == [1, 2, 3]
    assert len(captured["times"]) == 3
    assert all(t >= 0 for t in captured["times"])


def test_constant_work_passes_constant_and_fails_linear(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)

    runner.assert_performance_constant("bench_flat", clock.work(constant_cost()))

    with pytest.raises(BenchmarkAssertionError):
        runner.assert_performance_linear("bench_flat", clock.work(constant_cost()), 0.99)


def test_linear_work_passes_linear_and_fails_constant(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)

    runner.assert_performance_linear("bench_linear", clock.work(linear_cost), 0.9)

    with pytest.raises(BenchmarkAssertionError):
        runner.assert_performance_constant("bench_linear", clock.work(linear_cost), 0.99)


def test_quadratic_work_passes_power(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)

    samples = runner.assert_performance_power("bench_square", clock.work(quadratic_cost), 0.99)

    assert len(samples) == 5


def test_exponential_work_passes_exponential(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)

    runner.assert_performance_exponential(
        "bench_exp", clock.work(exponential_cost), 0.99, range_spec=LinearRange(1, 10, 1)
    )


def test_perfectly_flat_times_pass_constant(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)

    runner.assert_performance_constant("bench_exact", clock.work(lambda x: 0.25))

    assert runner.state is RunState.REPORTED


def test_perfectly_flat_times_are_degenerate_for_r2_families(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)

    with pytest.raises(DegenerateInputError):
        runner.assert_performance_linear("bench_exact", clock.work(lambda x: 0.25))


def test_zero_times_are_a_domain_error_for_power_fit(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)

    with pytest.raises(DomainError):
        runner.assert_performance_power("bench_instant", lambda x: None)


def test_invalid_threshold_is_rejected_before_running(clock, config, stream) -> None:
    calls: list[int] = []
    runner = BenchmarkRunner(config=config, stream=stream)

    with pytest.raises(InvalidArgumentError):
        runner.assert_performance_linear("bench_bad", calls.append, 0.0)

    assert calls == []


def test_state_machine_reaches_reported(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)
    assert runner.state is RunState.IDLE

    runner.assert_performance_linear("bench_state", clock.work(linear_cost))

    assert runner.state is RunState.REPORTED


def test_work_errors_propagate_and_abort_sampling(config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)

    def work(x):
        if x == 100:
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        runner.assert_performance_linear("bench_boom", work)

    assert runner.state is RunState.SAMPLING


def test_failed_validation_stops_in_validating_state(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream)

    with pytest.raises(BenchmarkAssertionError):
        runner.assert_performance_constant("bench_slow", clock.work(linear_cost))

    assert runner.state is RunState.VALIDATING


def test_run_uses_definition_range_and_validation(clock, config, stream) -> None:
    definition = BenchmarkDefinition(
        name="bench_def",
        work=clock.work(linear_cost),
        validation=ValidationSpec(FitFamily.LINEAR, 0.95),
        range_spec=LinearRange(10, 50, 10),
    )

    samples = BenchmarkRunner(config=config, stream=stream).run(definition)

    assert samples.xs == [10, 20, 30, 40, 50]


def test_runner_default_range_overrides_builtin_default(clock, config, stream) -> None:
    runner = BenchmarkRunner(config=config, stream=stream, default_range=ExponentialRange(2, 8, 2))

    samples = runner.measure("bench_default", clock.work(lambda x: 0.1))

    assert samples.xs == [2, 4, 8]


def test_custom_validation_with_failing_assert(clock, config, stream) -> None:
    def validation(range_, times):
        assert times[-1] < times[0], "expected times to shrink"

    runner = BenchmarkRunner(config=config, stream=stream)
    with pytest.raises(AssertionError, match="shrink"):
        runner.assert_performance("bench_custom", validation, clock.work(linear_cost))


class _RecordingCase:
    def __init__(self, events: list[str]) -> None:
        self.events = events

    def setup(self) -> None:
        self.events.append("setup")

    def teardown(self) -> None:
        self.events.append("teardown")

    def assert_in_delta(self, expected, actual, delta) -> None:
        self.events.append("assert_in_delta")
        if abs(expected - actual) > delta:
            raise AssertionError("not constant")

    def assert_operator(self, left, op, right) -> None:
        self.events.append(f"assert_operator {op}")
        if not left >= right:
            raise AssertionError("poor fit")


def test_validation_goes_through_the_case_primitives(clock, config, stream) -> None:
    events: list[str] = []
    runner = BenchmarkRunner(_RecordingCase(events), config=config, stream=stream)

    runner.assert_performance_linear("bench_a", clock.work(linear_cost))
    runner.assert_performance_constant("bench_b", clock.work(constant_cost()))

    assert events == ["assert_operator >=", "assert_in_delta"]


def test_run_benchmarks_records_failures_and_continues(clock, config, stream) -> None:
    registry = BenchmarkRegistry()
    registry.register("slow", clock.work(linear_cost), validation=ValidationSpec(FitFamily.CONSTANT, 0.99))
    registry.register("steady", clock.work(linear_cost), validation=ValidationSpec(FitFamily.LINEAR, 0.9))

    events: list[str] = []
    outcomes = run_benchmarks(registry, case_factory=lambda: _RecordingCase(events), config=config, stream=stream)

    assert [(o.name, o.passed) for o in outcomes] == [("bench_slow", False), ("bench_steady", True)]
    assert outcomes[0].reason == "not constant"
    assert outcomes[1].range == [1, 10, 100, 1000, 10000]
    assert len(outcomes[1].times) == 5
    assert events == [
        "setup",
        "assert_in_delta",
        "teardown",
        "setup",
        "assert_operator >=",
        "teardown",
    ]
    assert stream.getvalue().startswith("bench_slow:\t")
    assert outcomes[1].to_dict()["name"] == "bench_steady"


def test_run_benchmarks_uses_registry_default_range(clock, config, stream) -> None:
    registry = BenchmarkRegistry()

    @registry.bench_range
    def sizes():
        return [5, 10, 15]

    registry.register("steady", clock.work(linear_cost), validation=ValidationSpec(FitFamily.LINEAR, 0.9))

    outcomes = run_benchmarks(registry, config=config, stream=stream)

    assert outcomes[0].range == [5, 10, 15]


def test_run_benchmarks_aborts_on_work_errors_after_teardown(config, stream) -> None:
    registry = BenchmarkRegistry()
    registry.register("broken", lambda x: 1 / 0, validation=ValidationSpec(FitFamily.LINEAR))
    registry.register("never", lambda x: None, validation=ValidationSpec(FitFamily.LINEAR))

    events: list[str] = []
    with pytest.raises(ZeroDivisionError):
        run_benchmarks(registry, case_factory=lambda: _RecordingCase(events), config=config, stream=stream)

    assert events == ["setup", "teardown"]
