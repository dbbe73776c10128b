"""Command line entry point for running a module's registered benchmarks."""

from __future__ import annotations

import importlib
import sys
from argparse import ArgumentParser, Namespace

import structlog

from complexity_bench.benchmarks import BenchmarkRegistry, run_benchmarks
from complexity_bench.shared import RunnerConfig, configure_logging, write_error_report


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="complexity-bench",
        description="Run registered benchmarks and check how their timings scale.",
    )
    parser.add_argument(
        "module",
        help="Importable module holding a BenchmarkRegistry (e.g. benchmarks.lists)",
    )
    parser.add_argument(
        "--attr",
        default="benchmarks",
        help="Name of the registry attribute in the module (default: benchmarks)",
    )
    parser.add_argument(
        "--no-gc",
        action="store_true",
        help="Do not request garbage collection before each sample",
    )
    parser.add_argument(
        "--no-sync",
        action="store_true",
        help="Buffer timing output instead of flushing after each sample",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every individual sample",
    )
    return parser


def _load_registry(module_name: str, attr: str) -> BenchmarkRegistry:
    module = importlib.import_module(module_name)
    registry = getattr(module, attr, None)
    if not isinstance(registry, BenchmarkRegistry):
        raise TypeError(f"{module_name}.{attr} is not a BenchmarkRegistry")
    return registry


def _run(args: Namespace) -> int:
    logger = structlog.get_logger(__name__)

    try:
        registry = _load_registry(args.module, args.attr)
    except (ImportError, TypeError) as exc:
        logger.error("registry-not-found", module=args.module, attr=args.attr, error=str(exc))
        return 1

    if not len(registry):
        logger.warning("no-benchmarks-registered", module=args.module)
        return 0

    config = RunnerConfig.from_env()
    if args.no_gc:
        config.collect_garbage = False
    if args.no_sync:
        config.sync_output = False

    try:
        outcomes = run_benchmarks(registry, config=config)
    except Exception as exc:
        report = write_error_report(exc, where="run_benchmarks", context={"module": args.module})
        logger.exception("benchmark-run-failed", error=str(exc), report=str(report.path))
        return 1

    for outcome in outcomes:
        if outcome.passed:
            logger.info("benchmark-passed", benchmark=outcome.name)
        else:
            logger.error("benchmark-failed", benchmark=outcome.name, reason=outcome.reason)

    return 0 if all(outcome.passed for outcome in outcomes) else 1


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=10 if args.verbose else 20)
    return _run(args)


if __name__ == "__main__":
    sys.exit(main())
