"""Least-squares curve fitting and goodness-of-fit scoring."""

from .curves import (
	fit_error,
	fit_exponential,
	fit_exponential_weighted,
	fit_linear,
	fit_power,
	get_fitter,
	linear_slope,
	sigma,
)

__all__ = [
	"fit_error",
	"fit_exponential",
	"fit_exponential_weighted",
	"fit_linear",
	"fit_power",
	"get_fitter",
	"linear_slope",
	"sigma",
]
