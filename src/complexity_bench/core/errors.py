"""Error types raised by ranges, curve fitting and benchmark validation."""

from __future__ import annotations


class ComplexityBenchError(Exception):
    """Base class for misuse of the benchmarking API."""


class DomainError(ComplexityBenchError, ValueError):
    """A logarithm of a non-positive value was required."""


class InvalidArgumentError(ComplexityBenchError, ValueError):
    """An argument is outside of its accepted range."""


class DegenerateInputError(ComplexityBenchError, ArithmeticError):
    """Sample data carries no information to fit or score against."""


class BenchmarkAssertionError(AssertionError):
    """Measured times do not match the declared complexity."""
