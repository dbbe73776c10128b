"""Benchmark registration and execution.

This package provides:
- an explicit registry of named benchmarks,
- the runner that times work and validates its complexity curve,
- streamed tab-separated timing output.
"""

from .registry import BenchmarkRegistry, benchmark_method_name
from .runner import BenchmarkOutcome, BenchmarkRunner, run_benchmarks

__all__ = [
    "BenchmarkOutcome",
    "BenchmarkRegistry",
    "BenchmarkRunner",
    "benchmark_method_name",
    "run_benchmarks",
]
