"""Accumulation of outcomes into the final run report."""

from dataclasses import dataclass, field

from harness_mimic.models.descriptor import TestDescriptor
from harness_mimic.models.outcome import Failed, Outcome
from harness_mimic.models.summary import Failure, RunReport, RunSummary


@dataclass(kw_only=True)
class ReportAggregator[D]:
    """Folds outcomes into a summary and keeps the failures in arrival order.

    Only the coordinating thread touches an aggregator; workers hand their
    outcomes over through the completion queue.
    """

    summary: RunSummary = field(default_factory=RunSummary)
    failures: list[Failure[D]] = field(default_factory=list)

    def add(self, descriptor: TestDescriptor[D], outcome: Outcome) -> None:
        self.summary = self.summary.record(outcome, descriptor.is_bench)
        if isinstance(outcome, Failed):
            self.failures.append(Failure(descriptor=descriptor, message=outcome.message))

    def finish(self) -> RunReport[D]:
        return RunReport(summary=self.summary, failures=tuple(self.failures))
