"""Shared fixtures for unit tests."""

import io

import pytest

from harness_mimic.models.config import ColorSetting, RunConfiguration
from harness_mimic.models.descriptor import TestDescriptor


@pytest.fixture
def out() -> io.StringIO:
    """In-memory sink for report output."""
    return io.StringIO()


@pytest.fixture
def config() -> RunConfiguration:
    """Sequential, colorless configuration."""
    return RunConfiguration(color=ColorSetting.NEVER)


@pytest.fixture
def catalog() -> list[TestDescriptor[None]]:
    """Two plain tests around an ignored one."""
    return [
        TestDescriptor.test("a"),
        TestDescriptor(name="b", is_ignored=True),
        TestDescriptor.test("c"),
    ]
