"""Explicit registry of benchmark definitions.

Eg::

    benchmarks = BenchmarkRegistry()

    @benchmarks.bench_performance_linear("list append", threshold=0.95)
    def _(n):
        items = []
        for i in range(n):
            items.append(i)
"""

from __future__ import annotations

import re
from typing import Callable, Iterator

from complexity_bench.core.errors import InvalidArgumentError
from complexity_bench.core.models import (
    BenchmarkDefinition,
    FitFamily,
    Validation,
    ValidationSpec,
    WorkCallback,
)
from complexity_bench.core.ranges import RangeSpec

_NON_WORD = re.compile(r"\W+")


def benchmark_method_name(name: str) -> str:
    """Returns the canonical ``bench_*`` name for a human readable benchmark name."""

    return "bench_" + _NON_WORD.sub("_", name)


class BenchmarkRegistry:
    """Ordered mapping from benchmark name to its definition."""

    def __init__(self, *, default_range: RangeSpec | None = None) -> None:
        self._definitions: dict[str, BenchmarkDefinition] = {}
        self.default_range = default_range

    def register(
        self,
        name: str,
        work: WorkCallback,
        *,
        validation: ValidationSpec | Validation,
        range_spec: RangeSpec | None = None,
    ) -> BenchmarkDefinition:
        """Adds a benchmark; names must be unique after normalization."""

        key = benchmark_method_name(name)
        if key in self._definitions:
            raise InvalidArgumentError(f"benchmark {key!r} is already registered")
        if not callable(work):
            raise InvalidArgumentError(f"work for benchmark {key!r} is not callable")

        definition = BenchmarkDefinition(name=key, work=work, validation=validation, range_spec=range_spec)
        self._definitions[key] = definition
        return definition

    # ------------------------------------------------------------------
    # Decorators
    # ------------------------------------------------------------------

    def bench(
        self,
        name: str,
        validation: ValidationSpec | Validation,
        *,
        range_spec: RangeSpec | None = None,
    ) -> Callable[[WorkCallback], WorkCallback]:
        def decorator(work: WorkCallback) -> WorkCallback:
            self.register(name, work, validation=validation, range_spec=range_spec)
            return work

        return decorator

    def bench_range(self, func: Callable[[], list]) -> Callable[[], list]:
        """Sets the range used by benchmarks that declare none."""

        self.default_range = func
        return func

    def bench_performance_constant(
        self, name: str, threshold: float = 0.99, *, range_spec: RangeSpec | None = None
    ) -> Callable[[WorkCallback], WorkCallback]:
        return self.bench(name, ValidationSpec(FitFamily.CONSTANT, threshold), range_spec=range_spec)

    def bench_performance_linear(
        self, name: str, threshold: float = 0.9, *, range_spec: RangeSpec | None = None
    ) -> Callable[[WorkCallback], WorkCallback]:
        return self.bench(name, ValidationSpec(FitFamily.LINEAR, threshold), range_spec=range_spec)

    def bench_performance_exponential(
        self, name: str, threshold: float = 0.99, *, range_spec: RangeSpec | None = None
    ) -> Callable[[WorkCallback], WorkCallback]:
        return self.bench(name, ValidationSpec(FitFamily.EXPONENTIAL, threshold), range_spec=range_spec)

    def bench_performance_power(
        self, name: str, threshold: float = 0.99, *, range_spec: RangeSpec | None = None
    ) -> Callable[[WorkCallback], WorkCallback]:
        return self.bench(name, ValidationSpec(FitFamily.POWER, threshold), range_spec=range_spec)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def get(self, name: str) -> BenchmarkDefinition | None:
        return self._definitions.get(benchmark_method_name(name)) or self._definitions.get(name)

    def names(self) -> list[str]:
        return list(self._definitions)

    def __iter__(self) -> Iterator[BenchmarkDefinition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None


__all__ = ["BenchmarkRegistry", "benchmark_method_name"]
