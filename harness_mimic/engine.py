"""Test execution engine: selection, dispatch and reporting of one run."""

import logging
import queue
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TextIO

from harness_mimic.aggregator import ReportAggregator
from harness_mimic.models.config import RunConfiguration
from harness_mimic.models.descriptor import TestDescriptor
from harness_mimic.models.outcome import Ignored, Outcome
from harness_mimic.models.summary import RunReport, RunSummary
from harness_mimic.printer import Printer
from harness_mimic.selector import Partition, partition

log = logging.getLogger(__name__)

type Evaluator[D] = Callable[[TestDescriptor[D]], Outcome]

# A worker either delivers an outcome or the exception its evaluation raised.
type Completion[D] = tuple[TestDescriptor[D], Outcome | BaseException]


def run_tests[D](
    catalog: Sequence[TestDescriptor[D]],
    config: RunConfiguration,
    evaluate: Evaluator[D],
    *,
    out: TextIO | None = None,
) -> RunReport[D]:
    """Run all selected tests and report on them.

    Args:
        catalog: Every test known to the caller, in the order to report them
        config: Resolved run configuration
        evaluate: Called once per executed test; never called for tests that
            are ignored in this run
        out: Stream the report is written to (default: standard output, or
            ``config.logfile`` when set)

    Returns:
        The run summary and the failed tests. When ``config.list_only`` is set
        nothing runs and the summary is empty.

    Raises:
        UnsupportedFormatError: If the configured output format is not
            implemented; nothing is printed or executed
        SinkError: If the logfile cannot be created

    Exceptions raised by ``evaluate`` are not turned into failures; they
    abort the run and propagate to the caller.

    """
    selected = partition(catalog, config)
    if selected.num_filtered_out:
        log.debug("Filtered out %d test(s)", selected.num_filtered_out)

    kept = [t.descriptor for t in selected.tests]
    with Printer(config, kept, out) as printer:
        if config.list_only:
            printer.print_list(kept, config.ignored_only)
            return RunReport(summary=RunSummary(), listed_only=True)

        printer.print_title(len(kept))

        aggregator: ReportAggregator[D] = ReportAggregator(
            summary=RunSummary(num_filtered_out=selected.num_filtered_out)
        )
        if config.is_concurrent:
            _run_concurrent(selected, config, evaluate, printer, aggregator)
        else:
            _run_sequential(selected, evaluate, printer, aggregator)

        report = aggregator.finish()
        if report.failures:
            printer.print_failures(report.failures)
        printer.print_summary(report.summary)

    log.info(
        "Test run finished: %d passed, %d failed, %d ignored, %d measured",
        report.summary.num_passed,
        report.summary.num_failed,
        report.summary.num_ignored,
        report.summary.num_measured,
    )
    return report


def _run_sequential[D](
    selected: Partition[D],
    evaluate: Evaluator[D],
    printer: Printer,
    aggregator: ReportAggregator[D],
) -> None:
    """Run every test on the calling thread, in catalog order."""
    log.info("Running %d test(s) on the calling thread", len(selected.tests))

    for test in selected.tests:
        printer.print_test(test.descriptor)
        outcome = Ignored() if test.is_ignored else evaluate(test.descriptor)
        printer.print_single_outcome(outcome)
        aggregator.add(test.descriptor, outcome)


def _run_concurrent[D](
    selected: Partition[D],
    config: RunConfiguration,
    evaluate: Evaluator[D],
    printer: Printer,
    aggregator: ReportAggregator[D],
) -> None:
    """Run tests on a worker pool and report them in completion order.

    Workers only evaluate and post to the completion queue; printing and
    aggregation happen on the calling thread as completions are drained.
    Ignored tests are posted directly and interleave with real completions.
    """
    completions: queue.SimpleQueue[Completion[D]] = queue.SimpleQueue()
    log.info(
        "Running %d test(s) on %d worker thread(s)",
        len(selected.tests),
        config.test_threads,
    )

    def work(descriptor: TestDescriptor[D]) -> None:
        try:
            result: Outcome | BaseException = evaluate(descriptor)
        except BaseException as e:
            result = e
        completions.put((descriptor, result))

    pool = ThreadPoolExecutor(
        max_workers=config.test_threads, thread_name_prefix="harness-worker"
    )
    try:
        for test in selected.tests:
            if test.is_ignored:
                completions.put((test.descriptor, Ignored()))
            else:
                log.debug("Dispatching %s", test.descriptor.name)
                pool.submit(work, test.descriptor)

        for _ in range(len(selected.tests)):
            descriptor, result = completions.get()
            if isinstance(result, BaseException):
                log.error("Evaluation of %s raised %r", descriptor.name, result)
                raise result

            log.debug("Completed %s", descriptor.name)
            printer.print_test_with_outcome(descriptor, result)
            aggregator.add(descriptor, result)
    except BaseException:
        pool.shutdown(wait=False, cancel_futures=True)
        raise
    else:
        pool.shutdown(wait=True)