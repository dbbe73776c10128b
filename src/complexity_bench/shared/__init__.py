"""Shared modules: configuration, logging, error reports."""

from .config import RunnerConfig
from .error_reporting import ErrorReport, get_error_reports_dir, write_error_report
from .logging import configure_logging

__all__ = [
	"RunnerConfig",
	"configure_logging",
	"ErrorReport",
	"get_error_reports_dir",
	"write_error_report",
]
