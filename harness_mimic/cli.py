"""Command line front end mimicking the arguments of libtest."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn, TextIO

from pydantic import ValidationError

from harness_mimic.engine import Evaluator, run_tests
from harness_mimic.errors import HarnessError
from harness_mimic.models.config import ColorSetting, FormatSetting, RunConfiguration
from harness_mimic.models.descriptor import TestDescriptor


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    """Create the parser for libtest-style arguments."""
    parser = argparse.ArgumentParser(
        prog=prog,
        usage="%(prog)s [OPTIONS] [FILTER]",
        epilog=(
            "By default, all tests run on the calling thread. Use "
            "--test-threads to run them on a pool of worker threads."
        ),
    )
    parser.add_argument(
        "filter",
        nargs="?",
        metavar="FILTER",
        help="Only run tests whose names contain FILTER",
    )
    parser.add_argument(
        "--include-ignored",
        action="store_true",
        help="Run ignored and non-ignored tests",
    )
    parser.add_argument("--ignored", action="store_true", help="Run only ignored tests")

    kind_group = parser.add_mutually_exclusive_group()
    kind_group.add_argument(
        "--test", action="store_true", help="Run tests and not benchmarks"
    )
    kind_group.add_argument(
        "--bench", action="store_true", help="Run benchmarks instead of tests"
    )

    parser.add_argument(
        "--list", action="store_true", help="List all tests and benchmarks"
    )
    parser.add_argument(
        "--nocapture",
        action="store_true",
        help="No-op (output of tests is never captured)",
    )
    parser.add_argument(
        "--exact",
        action="store_true",
        help="Exactly match filters rather than by substring",
    )

    format_group = parser.add_mutually_exclusive_group()
    format_group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Display one character per test instead of one line (--format=terse)",
    )
    format_group.add_argument(
        "--format",
        choices=[f.value for f in FormatSetting],
        default=None,
        help="Configure formatting of output (json is reserved and rejected)",
    )

    parser.add_argument(
        "--test-threads",
        type=int,
        metavar="N",
        help="Number of worker threads; 1 runs every test on the calling thread",
    )
    parser.add_argument(
        "--logfile",
        type=Path,
        metavar="PATH",
        help="Write the report to the specified file instead of stdout",
    )
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        metavar="FILTER",
        help="Skip tests whose names contain FILTER (can be given multiple times)",
    )
    parser.add_argument(
        "--color",
        choices=[c.value for c in ColorSetting],
        default=ColorSetting.AUTO.value,
        help="Configure coloring of output",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Level of diagnostic logging written to stderr",
    )
    return parser


def to_configuration(args: argparse.Namespace) -> RunConfiguration:
    """Resolve parsed arguments into a run configuration."""
    if args.quiet:
        output_format = FormatSetting.TERSE
    else:
        output_format = FormatSetting(args.format or FormatSetting.PRETTY)

    return RunConfiguration(
        filter=args.filter,
        exact=args.exact,
        skip=tuple(args.skip),
        include_ignored=args.include_ignored,
        ignored_only=args.ignored,
        test_only=args.test,
        bench_only=args.bench,
        list_only=args.list,
        test_threads=args.test_threads,
        format=output_format,
        color=ColorSetting(args.color),
        logfile=args.logfile,
    )


def parse_command_line(
    parser: argparse.ArgumentParser, argv: Sequence[str] | None = None
) -> tuple[argparse.Namespace, RunConfiguration]:
    """Parse arguments with ``parser`` and resolve them into a configuration.

    Invalid arguments print usage to stderr and exit with status 2.
    """
    args = parser.parse_args(argv)
    try:
        return args, to_configuration(args)
    except ValidationError as e:
        parser.error(str(e))


def parse_args(argv: Sequence[str] | None = None) -> RunConfiguration:
    """Parse command line arguments into a run configuration."""
    _, config = parse_command_line(build_parser(), argv)
    return config


def run_main[D](
    tests: Sequence[TestDescriptor[D]],
    evaluate: Evaluator[D],
    argv: Sequence[str] | None = None,
    out: TextIO | None = None,
) -> NoReturn:
    """Run tests as configured on the command line and exit.

    Exits with 0 if no test failed and 101 otherwise.
    """
    parser = build_parser()
    args, config = parse_command_line(parser, argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    log = logging.getLogger("harness_mimic")

    try:
        report = run_tests(tests, config, evaluate, out=out)
    except HarnessError as e:
        log.error("%s", e)
        parser.exit(1, f"error: {e}\n")

    sys.exit(report.summary.exit_code())
