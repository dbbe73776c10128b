"""Runner configuration."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from typing import Callable

from complexity_bench.core.ranges import RangeSpec

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


@dataclass(slots=True)
class RunnerConfig:
    """Options of a benchmark run.

    - ``sync_output``: flush the progress stream after every sample.
    - ``collect_garbage``: request a collection before each sample (best-effort).
    - ``clock``: monotonic clock used to time work, in seconds.
    - ``default_range``: range used by benchmarks that declare none.
    """

    sync_output: bool = True
    collect_garbage: bool = True
    clock: Callable[[], float] = field(default=time.perf_counter)
    default_range: RangeSpec | None = None

    @classmethod
    def default(cls) -> "RunnerConfig":
        """Creates the default configuration."""

        return cls()

    @classmethod
    def from_env(cls) -> "RunnerConfig":
        """Reads overrides from the environment.

        - ``COMPLEXITY_BENCH_SYNC_OUTPUT`` (default: on)
        - ``COMPLEXITY_BENCH_DISABLE_GC`` (default: off)
        """

        return cls(
            sync_output=_env_flag("COMPLEXITY_BENCH_SYNC_OUTPUT", True),
            collect_garbage=not _env_flag("COMPLEXITY_BENCH_DISABLE_GC", False),
        )
