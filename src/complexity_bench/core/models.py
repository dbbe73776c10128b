"""Data model shared by ranges, fitting and the benchmark runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, List, NamedTuple, Sequence, Union

from .errors import InvalidArgumentError

if TYPE_CHECKING:
    from .ranges import RangeSpec


class FitFamily(str, Enum):
    """Hypothesized relationship between input size and elapsed time."""

    CONSTANT = "constant"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    POWER = "power"


class RunState(str, Enum):
    """Lifecycle of a single benchmark run."""

    IDLE = "idle"
    RANGING = "ranging"
    SAMPLING = "sampling"
    VALIDATING = "validating"
    REPORTED = "reported"


class FitResult(NamedTuple):
    """Fitted curve parameters and the coefficient of determination.

    For the linear family ``a`` is the slope and ``b`` the intercept. For the
    exponential and power families ``a`` is the scale and ``b`` the exponent.
    """

    a: float
    b: float
    r2: float


@dataclass(slots=True)
class SampleSet:
    """Input sizes and the elapsed time measured for each of them."""

    xs: List[float] = field(default_factory=list)
    ys: List[float] = field(default_factory=list)

    def add(self, x: float, y: float) -> None:
        self.xs.append(x)
        self.ys.append(y)

    def pairs(self) -> list[tuple[float, float]]:
        return list(zip(self.xs, self.ys))

    def __len__(self) -> int:
        return len(self.xs)


Validation = Callable[[Sequence[float], Sequence[float]], None]
WorkCallback = Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class ValidationSpec:
    """A fit family together with the threshold it has to meet."""

    family: FitFamily
    threshold: float = 0.99

    def __post_init__(self) -> None:
        if not 0.0 < self.threshold <= 1.0:
            raise InvalidArgumentError(f"threshold must be in (0, 1], got {self.threshold!r}")
        object.__setattr__(self, "family", FitFamily(self.family))


@dataclass(frozen=True, slots=True)
class BenchmarkDefinition:
    """A named unit of work with its range and validation policy."""

    name: str
    work: WorkCallback
    validation: Union[ValidationSpec, Validation]
    range_spec: "RangeSpec | None" = None
