"""Selection of the tests that take part in a run."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from harness_mimic.models.config import RunConfiguration
from harness_mimic.models.descriptor import TestDescriptor


class Selection(StrEnum):
    """How a run treats a single descriptor."""

    FILTERED_OUT = "filtered_out"
    IGNORED = "ignored"
    RUNNABLE = "runnable"


@dataclass(frozen=True, kw_only=True)
class SelectedTest[D]:
    """A descriptor that survived filtering, with its selection."""

    descriptor: TestDescriptor[D]
    selection: Selection

    @property
    def is_ignored(self) -> bool:
        return self.selection is Selection.IGNORED


@dataclass(frozen=True, kw_only=True)
class Partition[D]:
    """Result of applying the selector to a whole catalog."""

    tests: Sequence[SelectedTest[D]]
    num_filtered_out: int

    @property
    def runnable(self) -> Sequence[TestDescriptor[D]]:
        return [t.descriptor for t in self.tests if not t.is_ignored]

    @property
    def ignored(self) -> Sequence[TestDescriptor[D]]:
        return [t.descriptor for t in self.tests if t.is_ignored]


def matches(name: str, pattern: str, exact: bool) -> bool:
    """Check a test name against a filter or skip pattern."""
    return name == pattern if exact else pattern in name


def is_filtered_out(descriptor: TestDescriptor[object], config: RunConfiguration) -> bool:
    """Check whether the name filter or any skip pattern excludes a test."""
    if config.filter is not None and not matches(
        descriptor.name, config.filter, config.exact
    ):
        return True

    return any(matches(descriptor.name, skip, config.exact) for skip in config.skip)


def is_ignored(descriptor: TestDescriptor[object], config: RunConfiguration) -> bool:
    """Check whether a test is counted but not executed."""
    return (
        (descriptor.is_ignored and not config.runs_ignored)
        or (config.ignored_only and not descriptor.is_ignored)
        or (descriptor.is_bench and config.test_only)
        or (not descriptor.is_bench and config.bench_only)
    )


def classify(descriptor: TestDescriptor[object], config: RunConfiguration) -> Selection:
    """Decide how a run treats a descriptor.

    Filtering is applied first so that name filters and skip patterns remove a
    test from every count before ignore and bench rules are considered.
    """
    if is_filtered_out(descriptor, config):
        return Selection.FILTERED_OUT
    if is_ignored(descriptor, config):
        return Selection.IGNORED
    return Selection.RUNNABLE


def partition[D](
    catalog: Sequence[TestDescriptor[D]], config: RunConfiguration
) -> Partition[D]:
    """Classify a whole catalog, keeping catalog order for the kept tests."""
    kept: list[SelectedTest[D]] = []
    num_filtered_out = 0

    for descriptor in catalog:
        selection = classify(descriptor, config)
        if selection is Selection.FILTERED_OUT:
            num_filtered_out += 1
        else:
            kept.append(SelectedTest(descriptor=descriptor, selection=selection))

    return Partition(tests=kept, num_filtered_out=num_filtered_out)
