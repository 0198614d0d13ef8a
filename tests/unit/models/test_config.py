"""Tests for RunConfiguration and TestDescriptor models."""

import pytest
from pydantic import ValidationError

from harness_mimic.models.config import ColorSetting, FormatSetting, RunConfiguration
from harness_mimic.models.descriptor import TestDescriptor


def test_defaults() -> None:
    """Default configuration runs everything sequentially in pretty format."""
    config = RunConfiguration()

    assert config.filter is None
    assert list(config.skip) == []
    assert config.format is FormatSetting.PRETTY
    assert config.color is ColorSetting.AUTO
    assert not config.is_concurrent
    assert not config.runs_ignored


@pytest.mark.parametrize(
    ("threads", "concurrent"), [(None, False), (0, False), (1, False), (2, True)]
)
def test_is_concurrent(threads: int | None, concurrent: bool) -> None:
    """Only more than one worker thread runs tests concurrently."""
    assert RunConfiguration(test_threads=threads).is_concurrent is concurrent


def test_rejects_negative_thread_count() -> None:
    """Thread count must not be negative."""
    with pytest.raises(ValidationError):
        RunConfiguration(test_threads=-1)


def test_rejects_test_and_bench_only() -> None:
    """test_only and bench_only cannot be combined."""
    with pytest.raises(ValidationError) as exc_info:
        RunConfiguration(test_only=True, bench_only=True)

    assert "mutually exclusive" in str(exc_info.value)


def test_parses_settings_from_strings() -> None:
    """Settings are accepted by their command line spelling."""
    config = RunConfiguration(format="terse", color="always")

    assert config.format is FormatSetting.TERSE
    assert config.color is ColorSetting.ALWAYS


def test_is_frozen() -> None:
    """Configuration cannot change once built."""
    config = RunConfiguration()

    with pytest.raises(ValidationError):
        config.exact = True  # type: ignore[misc]


@pytest.mark.parametrize(
    ("include_ignored", "ignored_only", "expected"),
    [(False, False, False), (True, False, True), (False, True, True)],
)
def test_runs_ignored(include_ignored: bool, ignored_only: bool, expected: bool) -> None:
    """Either ignored flag makes ignored tests run."""
    config = RunConfiguration(include_ignored=include_ignored, ignored_only=ignored_only)

    assert config.runs_ignored is expected


def test_descriptor_constructors() -> None:
    """test() and bench() create non-ignored descriptors."""
    test = TestDescriptor.test("foo", payload={"path": "foo.txt"})
    bench = TestDescriptor.bench("bar", kind="perf")

    assert not test.is_bench
    assert not test.is_ignored
    assert test.payload == {"path": "foo.txt"}
    assert bench.is_bench
    assert bench.display_kind == "[perf] "
    assert test.display_kind == ""


def test_descriptor_rejects_empty_name() -> None:
    """A test needs a name."""
    with pytest.raises(ValueError, match="must not be empty"):
        TestDescriptor.test("")
