"""Narrow interface between the benchmark runner and a host test framework."""

from __future__ import annotations

import operator as _operator
import unittest
from typing import Any, Callable, Protocol

from .errors import BenchmarkAssertionError, InvalidArgumentError

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "<": _operator.lt,
    "<=": _operator.le,
    "==": _operator.eq,
    "!=": _operator.ne,
    ">=": _operator.ge,
    ">": _operator.gt,
}


def compare(left: Any, op: str, right: Any) -> bool:
    try:
        func = _OPERATORS[op]
    except KeyError:
        raise InvalidArgumentError(f"unsupported comparison operator: {op!r}") from None
    return bool(func(left, right))


class BenchmarkCase(Protocol):
    """Hooks and assertion primitives a benchmark needs from its test case."""

    def setup(self) -> None:
        """Prepares state before the benchmark runs."""

    def teardown(self) -> None:
        """Releases state after the benchmark ran."""

    def assert_in_delta(self, expected: float, actual: float, delta: float) -> None:
        """Fails unless ``|expected - actual| <= delta``."""

    def assert_operator(self, left: Any, op: str, right: Any) -> None:
        """Fails unless ``left <op> right`` holds."""


class DefaultBenchmarkCase:
    """Stand-alone case used when no test framework is involved."""

    def setup(self) -> None:
        return None

    def teardown(self) -> None:
        return None

    def assert_in_delta(self, expected: float, actual: float, delta: float) -> None:
        difference = abs(expected - actual)
        if not difference <= delta:
            raise BenchmarkAssertionError(
                f"Expected |{expected} - {actual}| ({difference}) to be <= {delta}"
            )

    def assert_operator(self, left: Any, op: str, right: Any) -> None:
        if not compare(left, op, right):
            raise BenchmarkAssertionError(f"Expected {left!r} to be {op} {right!r}")


class UnitTestCaseAdapter:
    """Exposes a :class:`unittest.TestCase` through :class:`BenchmarkCase`."""

    def __init__(self, test_case: unittest.TestCase) -> None:
        self._test_case = test_case

    def setup(self) -> None:
        self._test_case.setUp()

    def teardown(self) -> None:
        self._test_case.tearDown()

    def assert_in_delta(self, expected: float, actual: float, delta: float) -> None:
        self._test_case.assertAlmostEqual(expected, actual, delta=delta)

    def assert_operator(self, left: Any, op: str, right: Any) -> None:
        self._test_case.assertTrue(compare(left, op, right), f"Expected {left!r} to be {op} {right!r}")


__all__ = ["BenchmarkCase", "DefaultBenchmarkCase", "UnitTestCaseAdapter", "compare"]
