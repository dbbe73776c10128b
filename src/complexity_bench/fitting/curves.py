"""Closed-form least-squares fits for benchmark timings.

Every family is reduced to a linear regression through a change of variables
and solved directly from its normal equations. R^2 is always scored against the
original, untransformed y values.

See:
- http://mathworld.wolfram.com/LeastSquaresFitting.html
- http://mathworld.wolfram.com/LeastSquaresFittingExponential.html
- http://mathworld.wolfram.com/LeastSquaresFittingPowerLaw.html
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, Sequence

from complexity_bench.core.errors import DegenerateInputError, DomainError, InvalidArgumentError
from complexity_bench.core.models import FitFamily, FitResult

Fitter = Callable[[Sequence[float], Sequence[float]], FitResult]


def sigma(values: Iterable, projection: Callable[..., float] | None = None) -> float:
    """Sums ``values``, mapping each through ``projection`` first if given.

    Pairs are unpacked into the projection, so ``sigma(xys, lambda x, y: x * y)``
    computes sum(x*y). Eg::

        sigma([1, 2, 3])                     # => 6
        sigma([1, 2, 3], lambda n: n ** 2)   # => 14
    """

    if projection is None:
        return math.fsum(values)
    return math.fsum(projection(*v) if isinstance(v, (tuple, list)) else projection(v) for v in values)


def fit_error(xys: Sequence[tuple[float, float]], predict: Callable[[float], float]) -> float:
    """Returns the coefficient of determination of ``predict`` over ``xys``.

    See: http://en.wikipedia.org/wiki/Coefficient_of_determination
    """

    if not xys:
        raise InvalidArgumentError("cannot score a fit without samples")

    y_bar = sigma(xys, lambda x, y: y) / len(xys)
    ss_tot = sigma(xys, lambda x, y: (y - y_bar) ** 2)
    if ss_tot == 0.0:
        raise DegenerateInputError("all y values are identical; R^2 is undefined")
    ss_err = sigma(xys, lambda x, y: (predict(x) - y) ** 2)

    return 1.0 - ss_err / ss_tot


def _pairs(xs: Sequence[float], ys: Sequence[float]) -> list[tuple[float, float]]:
    if len(xs) != len(ys):
        raise InvalidArgumentError(f"x and y lengths differ ({len(xs)} != {len(ys)})")
    if len(xs) < 2:
        raise InvalidArgumentError(f"regression needs at least two samples, got {len(xs)}")
    xys = [(float(x), float(y)) for x, y in zip(xs, ys)]
    _require_spread([x for x, _ in xys], label="x")
    return xys


def _require_spread(values: Sequence[float], *, label: str) -> None:
    # Identical values leave a zero denominator that rounding may hide.
    if max(values) == min(values):
        raise DegenerateInputError(f"all {label} values are identical; the regression is undefined")


def _ln(value: float, *, label: str) -> float:
    if value <= 0:
        raise DomainError(f"log-space fit requires positive {label} values, got {value!r}")
    return math.log(value)


def _solve(numerator: float, denominator: float) -> float:
    if denominator == 0.0:
        raise DegenerateInputError("regression denominator is zero (all x values identical)")
    return numerator / denominator


def linear_slope(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Returns only the slope of the least-squares line through the samples."""

    return fit_linear_params(_pairs(xs, ys))[0]


def fit_linear_params(xys: Sequence[tuple[float, float]]) -> tuple[float, float]:
    n = len(xys)
    sx = sigma(xys, lambda x, y: x)
    sy = sigma(xys, lambda x, y: y)
    sxy = sigma(xys, lambda x, y: x * y)
    sxx = sigma(xys, lambda x, y: x * x)

    m = _solve(n * sxy - sx * sy, n * sxx - sx**2)
    b = (sy - m * sx) / n
    return m, b


def fit_linear(xs: Sequence[float], ys: Sequence[float]) -> FitResult:
    """Fits ``y = a*x + b``.

    Note the result is (slope, intercept, r^2), unlike the other families which
    return (scale, exponent, r^2).
    """

    xys = _pairs(xs, ys)
    m, b = fit_linear_params(xys)
    return FitResult(m, b, fit_error(xys, lambda x: m * x + b))


def fit_exponential(xs: Sequence[float], ys: Sequence[float]) -> FitResult:
    """Fits ``y = a*e^(b*x)`` without weighting."""

    xys = _pairs(xs, ys)
    n = len(xys)
    lny = [_ln(y, label="y") for _, y in xys]
    sxlny = sigma(zip((x for x, _ in xys), lny), lambda x, ly: x * ly)
    slny = math.fsum(lny)
    sx2 = sigma(xys, lambda x, y: x * x)
    sx = sigma(xys, lambda x, y: x)

    d = n * sx2 - sx**2
    a = _solve(slny * sx2 - sx * sxlny, d)
    b = _solve(n * sxlny - sx * slny, d)

    return FitResult(math.exp(a), b, fit_error(xys, lambda x: math.exp(a + b * x)))


def fit_exponential_weighted(xs: Sequence[float], ys: Sequence[float]) -> FitResult:
    """Fits ``y = a*e^(b*x)`` weighting each point by y.

    Weighting reduces the bias the log transform gives to small y values. Not
    used by any built-in validation.
    """

    xys = _pairs(xs, ys)
    lny = [_ln(y, label="y") for _, y in xys]
    weighted = [(x, y, ly) for (x, y), ly in zip(xys, lny)]
    sy = sigma(xys, lambda x, y: y)
    sx2y = sigma(xys, lambda x, y: x * x * y)
    sxy = sigma(xys, lambda x, y: x * y)
    sxylny = sigma(weighted, lambda x, y, ly: x * y * ly)
    sylny = sigma(weighted, lambda x, y, ly: y * ly)

    # A = ln(a), B = b
    d = sy * sx2y - sxy**2
    a = _solve(sx2y * sylny - sxy * sxylny, d)
    b = _solve(sy * sxylny - sxy * sylny, d)

    return FitResult(math.exp(a), b, fit_error(xys, lambda x: math.exp(a + b * x)))


def fit_power(xs: Sequence[float], ys: Sequence[float]) -> FitResult:
    """Fits ``y = a*x^b``."""

    xys = _pairs(xs, ys)
    n = len(xys)
    logs = [(_ln(x, label="x"), _ln(y, label="y")) for x, y in xys]
    _require_spread([lx for lx, _ in logs], label="ln(x)")
    slnxlny = sigma(logs, lambda lx, ly: lx * ly)
    slnx = sigma(logs, lambda lx, ly: lx)
    slny = sigma(logs, lambda lx, ly: ly)
    slnx2 = sigma(logs, lambda lx, ly: lx**2)

    b = _solve(n * slnxlny - slnx * slny, n * slnx2 - slnx**2)
    a = (slny - b * slnx) / n

    return FitResult(math.exp(a), b, fit_error(xys, lambda x: math.exp(a) * x**b))


_FITTERS: dict[FitFamily, Fitter] = {
    FitFamily.LINEAR: fit_linear,
    FitFamily.EXPONENTIAL: fit_exponential,
    FitFamily.POWER: fit_power,
}


def get_fitter(family: FitFamily | str) -> Fitter:
    """Returns the fit function that scores ``family`` by R^2."""

    family = FitFamily(family)
    try:
        return _FITTERS[family]
    except KeyError:
        raise InvalidArgumentError(f"{family.value} validation has no R^2 fitter; use linear_slope") from None


__all__ = [
    "Fitter",
    "fit_error",
    "fit_exponential",
    "fit_exponential_weighted",
    "fit_linear",
    "fit_linear_params",
    "fit_power",
    "get_fitter",
    "linear_slope",
    "sigma",
]
