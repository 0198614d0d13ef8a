"""Test factories for generating test data."""

from polyfactory.factories import DataclassFactory

from harness_mimic.models.descriptor import TestDescriptor
from harness_mimic.models.summary import RunSummary


class TestDescriptorFactory(DataclassFactory[TestDescriptor[None]]):
    """Factory for plain, non-ignored TestDescriptor instances."""

    __test__ = False
    __model__ = TestDescriptor

    kind = ""
    is_ignored = False
    is_bench = False
    payload = None


class RunSummaryFactory(DataclassFactory[RunSummary]):
    """Factory for RunSummary."""

    __model__ = RunSummary
