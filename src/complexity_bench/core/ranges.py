"""Input size ranges that drive benchmarks and feed the regression.

Eg::

    bench_exp(2, 16, 2)       # => [2, 4, 8, 16]
    bench_linear(20, 40, 10)  # => [20, 30, 40]
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Union

from .errors import DomainError, InvalidArgumentError

Number = Union[int, float]


def _floor_log(value: Number, base: Number) -> int:
    exponent = math.floor(math.log(value) / math.log(base))
    # math.log(1000) / math.log(10) == 2.9999999999999996
    try:
        next_power_fits = base ** (exponent + 1) <= value
    except OverflowError:
        next_power_fits = False

    if next_power_fits:
        exponent += 1
    elif base**exponent > value:
        exponent -= 1
    return exponent


def bench_exp(min: Number, max: Number, base: Number = 10) -> List[Number]:
    """Returns powers of ``base`` from floor(log_base(min)) to floor(log_base(max))."""

    if min <= 0 or max <= 0:
        raise DomainError(f"exponential range bounds must be positive, got ({min!r}, {max!r})")
    if base <= 1:
        raise InvalidArgumentError(f"exponential range base must be greater than 1, got {base!r}")
    if min > max:
        raise InvalidArgumentError(f"range minimum {min!r} exceeds maximum {max!r}")

    lo = _floor_log(min, base)
    hi = _floor_log(max, base)
    return [base**m for m in range(lo, hi + 1)]


def bench_linear(min: Number, max: Number, step: Number = 10) -> List[Number]:
    """Returns every value from ``min`` to ``max`` inclusive, stepped by ``step``."""

    if step <= 0:
        raise InvalidArgumentError(f"linear range step must be positive, got {step!r}")
    if min > max:
        raise InvalidArgumentError(f"range minimum {min!r} exceeds maximum {max!r}")

    count = math.floor((max - min) / step) + 1
    return [min + i * step for i in range(count)]


@dataclass(frozen=True, slots=True)
class ExponentialRange:
    min: Number
    max: Number
    base: Number = 10

    def __post_init__(self) -> None:
        # Fail at declaration time rather than at the first run.
        self.values()

    def values(self) -> List[Number]:
        return bench_exp(self.min, self.max, self.base)


@dataclass(frozen=True, slots=True)
class LinearRange:
    min: Number
    max: Number
    step: Number = 10

    def __post_init__(self) -> None:
        self.values()

    def values(self) -> List[Number]:
        return bench_linear(self.min, self.max, self.step)


RangeSpec = Union[ExponentialRange, LinearRange, Callable[[], List[Number]]]

DEFAULT_RANGE = ExponentialRange(1, 10_000, 10)


def resolve_range(spec: RangeSpec | None, *, default: RangeSpec | None = None) -> List[Number]:
    """Turns a range declaration into the concrete list of input sizes.

    ``None`` falls back to ``default`` and then to :data:`DEFAULT_RANGE`.
    """

    if spec is None:
        spec = default if default is not None else DEFAULT_RANGE

    if isinstance(spec, (ExponentialRange, LinearRange)):
        values = spec.values()
    elif callable(spec):
        values = list(spec())
    else:
        raise InvalidArgumentError(f"unsupported range declaration: {spec!r}")

    if not values:
        raise InvalidArgumentError("range produced no input sizes")
    return values


__all__ = [
    "DEFAULT_RANGE",
    "ExponentialRange",
    "LinearRange",
    "RangeSpec",
    "bench_exp",
    "bench_linear",
    "resolve_range",
]
