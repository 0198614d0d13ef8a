"""Rendering of run progress and results in libtest's textual formats."""

import logging
from collections.abc import Sequence
from enum import Enum, auto
from types import TracebackType
from typing import Self, TextIO

from rich.console import Console
from rich.text import Text

from harness_mimic.errors import RendererStateError, SinkError, UnsupportedFormatError
from harness_mimic.models.config import ColorSetting, FormatSetting, RunConfiguration
from harness_mimic.models.descriptor import TestDescriptor
from harness_mimic.models.outcome import Failed, Ignored, Measured, Outcome, Passed
from harness_mimic.models.summary import Failure, RunSummary

log = logging.getLogger(__name__)

OUTCOME_STYLES = {
    Passed: "green",
    Failed: "red",
    Ignored: "yellow",
    Measured: "cyan",
}

TERSE_SYMBOLS = {
    Passed: ".",
    Failed: "F",
    Ignored: "i",
    Measured: "M",
}


class PrinterState(Enum):
    """Position of the printer in the report."""

    IDLE = auto()
    LISTED = auto()
    TITLE_PRINTED = auto()
    ANNOUNCING = auto()
    OUTCOME_PRINTED = auto()
    FAILURES_PRINTED = auto()
    SUMMARY_PRINTED = auto()


def create_console(
    color: ColorSetting, out: TextIO | None = None, *, owns_file: bool = False
) -> Console:
    """Create the console that owns the sink and colors outcome tokens.

    Reports written to a file only get colors when they are forced, since
    ``auto`` would otherwise depend on the file never being a terminal.
    """
    if owns_file and color is not ColorSetting.ALWAYS:
        color = ColorSetting.NEVER

    options = {
        "file": out,
        "highlight": False,
        "markup": False,
        "emoji": False,
        "soft_wrap": True,
    }
    match color:
        case ColorSetting.ALWAYS:
            return Console(force_terminal=True, color_system="standard", **options)
        case ColorSetting.NEVER:
            return Console(color_system=None, **options)
        case _:
            return Console(**options)


def open_logfile(config: RunConfiguration) -> TextIO | None:
    """Open the configured logfile for writing, if any."""
    if config.logfile is None:
        return None

    try:
        return config.logfile.open("w", encoding="utf-8")
    except OSError as e:
        raise SinkError(f"Failed to create logfile '{config.logfile}': {e}") from e


class Printer:
    """Writes the report of one run.

    Events must arrive in report order: title, then per test an announcement
    and its outcome, then optionally the failures, then the summary. Listing
    is a separate, single event. Column widths are computed up front from all
    tests that survived filtering, so pretty output stays aligned whatever
    order outcomes arrive in.
    """

    def __init__(
        self,
        config: RunConfiguration,
        tests: Sequence[TestDescriptor[object]],
        out: TextIO | None = None,
    ) -> None:
        if config.format is FormatSetting.JSON:
            raise UnsupportedFormatError("The 'json' output format is not supported")

        self.format = config.format
        self.state = PrinterState.IDLE

        self._logfile = None if out is not None else open_logfile(config)
        if self._logfile is not None:
            log.debug("Writing report to %s", config.logfile)
            out = self._logfile

        self.console = create_console(
            config.color, out, owns_file=self._logfile is not None
        )

        # Code points, not display cells; good enough for aligning ASCII names.
        self.name_width = max((len(t.name) for t in tests), default=0)
        self.kind_width = max((len(t.display_kind) for t in tests), default=0)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the logfile if the printer opened one."""
        if self._logfile is not None:
            self._logfile.close()
            self._logfile = None

    def print_list(
        self, tests: Sequence[TestDescriptor[object]], ignored_only: bool
    ) -> None:
        """Print every test as ``name: test`` or ``name: bench``."""
        self._advance({PrinterState.IDLE}, PrinterState.LISTED)

        num_tests = num_benches = 0
        for test in tests:
            if ignored_only and not test.is_ignored:
                continue

            if test.is_bench:
                num_benches += 1
            else:
                num_tests += 1
            label = "bench" if test.is_bench else "test"
            self._write(f"{test.display_kind}{test.name}: {label}\n")

        if self.format is FormatSetting.PRETTY:
            self._write(
                f"\n{_plural(num_tests, 'test')}, "
                f"{_plural(num_benches, 'benchmark')}\n"
            )

    def print_title(self, num_tests: int) -> None:
        """Print the first line, e.g. ``running 3 tests``."""
        self._advance({PrinterState.IDLE}, PrinterState.TITLE_PRINTED)
        self._write(f"\nrunning {_plural(num_tests, 'test')}\n")

    def print_test(self, test: TestDescriptor[object]) -> None:
        """Announce a test before it runs. Prints nothing in terse mode."""
        self._advance(
            {PrinterState.TITLE_PRINTED, PrinterState.OUTCOME_PRINTED},
            PrinterState.ANNOUNCING,
        )
        if self.format is FormatSetting.PRETTY:
            self._write(self._announcement(test))

    def print_single_outcome(self, outcome: Outcome) -> None:
        """Print the outcome of the announced test."""
        self._advance({PrinterState.ANNOUNCING}, PrinterState.OUTCOME_PRINTED)
        self._write(self._outcome_text(outcome))

    def print_test_with_outcome(
        self, test: TestDescriptor[object], outcome: Outcome
    ) -> None:
        """Print announcement and outcome of a finished test in a single write.

        Used when tests run concurrently: nothing is printed for a test until
        it finished, so lines from different workers never interleave.
        """
        self._advance(
            {PrinterState.TITLE_PRINTED, PrinterState.OUTCOME_PRINTED},
            PrinterState.OUTCOME_PRINTED,
        )
        announcement = ""
        if self.format is FormatSetting.PRETTY:
            announcement = self._announcement(test)
        self._write(announcement + self._outcome_text(outcome))

    def print_failures(self, failures: Sequence[Failure[object]]) -> None:
        """Print the messages of all failed tests, then their names.

        Messages are written as they are, control characters included.
        """
        self._advance(
            {PrinterState.TITLE_PRINTED, PrinterState.OUTCOME_PRINTED},
            PrinterState.FAILURES_PRINTED,
        )

        lines = ["", "failures:", ""]
        for failure in failures:
            lines.append(f"---- {failure.descriptor.name} ----")
            if failure.message is not None:
                lines.append(failure.message)
            lines.append("")

        lines.extend(["", "failures:"])
        lines.extend(f"    {failure.descriptor.name}" for failure in failures)
        self._write("\n".join(lines) + "\n")

    def print_summary(self, summary: RunSummary) -> None:
        """Print the final ``test result: ...`` line."""
        self._advance(
            {
                PrinterState.TITLE_PRINTED,
                PrinterState.OUTCOME_PRINTED,
                PrinterState.FAILURES_PRINTED,
            },
            PrinterState.SUMMARY_PRINTED,
        )

        if summary.has_failed():
            result = self._styled("FAILED", OUTCOME_STYLES[Failed])
        else:
            result = self._styled("ok", OUTCOME_STYLES[Passed])
        self._write(
            f"\ntest result: {result}. {summary.num_passed} passed; "
            f"{summary.num_failed} failed; {summary.num_ignored} ignored; "
            f"{summary.num_measured} measured; "
            f"{summary.num_filtered_out} filtered out\n\n"
        )

    def _announcement(self, test: TestDescriptor[object]) -> str:
        return (
            f"test {test.display_kind:<{self.kind_width}}"
            f"{test.name:<{self.name_width}} ... "
        )

    def _outcome_text(self, outcome: Outcome) -> str:
        style = OUTCOME_STYLES[type(outcome)]
        if self.format is FormatSetting.TERSE:
            return self._styled(TERSE_SYMBOLS[type(outcome)], style)

        match outcome:
            case Passed():
                return self._styled("ok", style) + "\n"
            case Failed():
                return self._styled("FAILED", style) + "\n"
            case Ignored():
                return self._styled("ignored", style) + "\n"
            case Measured(average_ns=average, variance_ns=variance):
                return (
                    self._styled("bench", style)
                    + f": {average:>11,} ns/iter (+/- {variance:,})\n"
                )

    def _styled(self, token: str, style: str) -> str:
        """Render a fixed token with the console's color settings."""
        with self.console.capture() as capture:
            self.console.print(Text(token, style=style), end="")
        return capture.get()

    def _write(self, text: str) -> None:
        # Bypasses rich rendering, which strips control codes and expands tabs.
        self.console.file.write(text)
        self.console.file.flush()

    def _advance(self, allowed: set[PrinterState], new_state: PrinterState) -> None:
        if self.state not in allowed:
            raise RendererStateError(
                f"Cannot move printer from {self.state.name} to {new_state.name}"
            )
        self.state = new_state


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
