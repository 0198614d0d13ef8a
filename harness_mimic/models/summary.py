"""Models for the aggregated result of a test run."""

import sys
from dataclasses import dataclass, replace

from harness_mimic.models.descriptor import TestDescriptor
from harness_mimic.models.outcome import Failed, Ignored, Measured, Outcome, Passed

EXIT_SUCCESS = 0
EXIT_FAILURE = 101


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Counts of every outcome in a run.

    After a real run, filtered out + passed + failed + ignored + measured equals
    the size of the catalog. ``num_benches`` counts benchmarks that produced an
    outcome of any kind and is not part of that sum.
    """

    num_filtered_out: int = 0
    num_passed: int = 0
    num_failed: int = 0
    num_ignored: int = 0
    num_measured: int = 0
    num_benches: int = 0

    def record(self, outcome: Outcome, is_bench: bool) -> "RunSummary":
        """Return a new summary with one more outcome counted."""
        benches = self.num_benches + 1 if is_bench else self.num_benches

        match outcome:
            case Passed():
                return replace(self, num_passed=self.num_passed + 1, num_benches=benches)
            case Failed():
                return replace(self, num_failed=self.num_failed + 1, num_benches=benches)
            case Ignored():
                return replace(
                    self, num_ignored=self.num_ignored + 1, num_benches=benches
                )
            case Measured():
                return replace(
                    self, num_measured=self.num_measured + 1, num_benches=benches
                )

    def __add__(self, other: "RunSummary") -> "RunSummary":
        return RunSummary(
            num_filtered_out=self.num_filtered_out + other.num_filtered_out,
            num_passed=self.num_passed + other.num_passed,
            num_failed=self.num_failed + other.num_failed,
            num_ignored=self.num_ignored + other.num_ignored,
            num_measured=self.num_measured + other.num_measured,
            num_benches=self.num_benches + other.num_benches,
        )

    @property
    def total(self) -> int:
        """Number of catalog entries accounted for."""
        return (
            self.num_filtered_out
            + self.num_passed
            + self.num_failed
            + self.num_ignored
            + self.num_measured
        )

    def has_failed(self) -> bool:
        return self.num_failed > 0

    def exit_code(self) -> int:
        """Process exit code for this run: 0 on success, 101 on any failure."""
        return EXIT_FAILURE if self.has_failed() else EXIT_SUCCESS

    def exit_if_failed(self) -> None:
        """Exit the process with status 101 if any test failed.

        Returns normally otherwise, so callers can go on after a clean run.
        """
        if self.has_failed():
            sys.exit(EXIT_FAILURE)


@dataclass(frozen=True, kw_only=True)
class Failure[D]:
    """A failed test together with its failure message."""

    descriptor: TestDescriptor[D]
    message: str | None = None


@dataclass(frozen=True, kw_only=True)
class RunReport[D]:
    """Everything a run hands back to the caller."""

    summary: RunSummary
    failures: tuple[Failure[D], ...] = ()
    listed_only: bool = False
