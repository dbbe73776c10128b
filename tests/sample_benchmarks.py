"""Registry imported by the CLI tests."""

from __future__ import annotations

from complexity_bench.benchmarks import BenchmarkRegistry
from complexity_bench.core.ranges import LinearRange

benchmarks = BenchmarkRegistry()
calls: list[tuple[str, float]] = []


@benchmarks.bench("records sizes", lambda range_, times: None, range_spec=LinearRange(1, 3, 1))
def _record(x):
    calls.append(("records sizes", x))


failing = BenchmarkRegistry()


@failing.bench("always fails", lambda range_, times: failing_validation())
def _noop(x):
    return None


def failing_validation() -> None:
    raise AssertionError("too slow")


broken = BenchmarkRegistry()


@broken.bench("raises", lambda range_, times: None)
def _boom(x):
    raise RuntimeError("work exploded")


not_a_registry = object()
