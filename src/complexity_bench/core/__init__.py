"""Domain model, ranges and the test-case capability interface."""

from . import cases, models, ranges
from .errors import (
	BenchmarkAssertionError,
	ComplexityBenchError,
	DegenerateInputError,
	DomainError,
	InvalidArgumentError,
)

__all__ = [
	"cases",
	"models",
	"ranges",
	"BenchmarkAssertionError",
	"ComplexityBenchError",
	"DegenerateInputError",
	"DomainError",
	"InvalidArgumentError",
]
