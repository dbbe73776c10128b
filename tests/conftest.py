"""Shared pytest fixtures."""

from __future__ import annotations

import io

import pytest

from complexity_bench.shared import RunnerConfig

from tests.timing import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config(clock: FakeClock) -> RunnerConfig:
    return RunnerConfig(collect_garbage=False, clock=clock)


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()
