"""complexity-bench: validate how benchmark timings scale with input size."""

__all__ = [
    "core",
    "fitting",
    "benchmarks",
    "shared",
]
