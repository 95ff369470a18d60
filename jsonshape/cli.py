"""Command line entry point for jsonshape."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .engine import ShapeEngine
from .exceptions import JsonShapeError
from .models import ComparisonMode, JsonDocument, LogLevel
from .runner import ShapeRunner
from .suite import load_document


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonshape",
        description="Compare the shapes of JSON documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jsonshape run shapes.yaml -r report.json
  jsonshape compare actual.json expected.json
  jsonshape compare actual.json template.json --contains --ignore-additional-props
        """
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="Logging level (defaults to the suite's log_level)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run a YAML/JSON shape suite")
    run.add_argument("suite", help="Path to suite file")
    run.add_argument("-r", "--report", help="Path to output JSON report file")
    run.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")

    cmp = subparsers.add_parser("compare", help="Compare two JSON/YAML files")
    cmp.add_argument("actual", help="Path to the actual document")
    cmp.add_argument("expected", help="Path to the expected document")
    cmp.add_argument("--contains", action="store_true",
                     help="Treat array elements as interchangeable")
    cmp.add_argument("--ignore-additional-props", action="store_true",
                     help="Drop additionalProp placeholder paths (with --contains)")

    return parser


def _configure_logging(level: LogLevel):
    logging.basicConfig(
        level=level.to_logging(),
        format="%(levelname)s %(name)s: %(message)s"
    )


def _run(args: argparse.Namespace) -> int:
    runner = ShapeRunner(args.suite)
    level = LogLevel(args.log_level) if args.log_level else runner.config.log_level
    _configure_logging(level)

    if not args.quiet:
        print(f"Suite: {args.suite}")
        if args.report:
            print(f"Report: {args.report}")
        print()

    report = runner.run(print_report=not args.quiet)

    if args.report:
        with open(args.report, 'w') as f:
            json.dump(report.to_dict(), indent=2, fp=f)
        if not args.quiet:
            print(f"\nReport saved to: {args.report}")

    return 0 if report.failed == 0 else 1


def _compare(args: argparse.Namespace) -> int:
    _configure_logging(LogLevel(args.log_level) if args.log_level else LogLevel.INFO)

    actual = JsonDocument(load_document(args.actual))
    expected = JsonDocument(load_document(args.expected))
    mode = ComparisonMode.CONTAINS if args.contains else ComparisonMode.SAME

    result = ShapeEngine().compare(
        actual, expected, mode, ignore_additional_props=args.ignore_additional_props
    )
    if result.matched:
        print("The inputs have the same schema.")
        return 0
    print(result.message, end="")
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    for attr in ("suite", "actual", "expected"):
        value = getattr(args, attr, None)
        if value and not Path(value).exists():
            print(f"Error: File not found: {value}", file=sys.stderr)
            return 2

    try:
        if args.command == "run":
            return _run(args)
        return _compare(args)
    except JsonShapeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
