"""Models for the resolved configuration of one test run."""

from collections.abc import Sequence
from enum import StrEnum
from pathlib import Path
from typing import Self

from pydantic import Field, model_validator

from harness_mimic.models.base import Model


class ColorSetting(StrEnum):
    """Possible values for the ``--color`` option."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class FormatSetting(StrEnum):
    """Possible values for the ``--format`` option."""

    PRETTY = "pretty"
    TERSE = "terse"
    JSON = "json"


class RunConfiguration(Model):
    """Everything that decides which tests run and how the report looks."""

    filter: str | None = Field(
        default=None, description="Only run tests whose name matches this filter"
    )
    exact: bool = Field(
        default=False, description="Match filters exactly rather than by substring"
    )
    skip: Sequence[str] = Field(
        default_factory=tuple, description="Skip tests whose name matches any of these"
    )
    include_ignored: bool = Field(
        default=False, description="Run ignored and non-ignored tests"
    )
    ignored_only: bool = Field(default=False, description="Run only ignored tests")
    test_only: bool = Field(default=False, description="Run tests, not benchmarks")
    bench_only: bool = Field(default=False, description="Run benchmarks, not tests")
    list_only: bool = Field(
        default=False, description="List tests and benchmarks instead of running"
    )
    test_threads: int | None = Field(
        default=None,
        ge=0,
        description="Worker threads (None, 0 or 1 runs on the calling thread)",
    )
    format: FormatSetting = Field(
        default=FormatSetting.PRETTY, description="Output format"
    )
    color: ColorSetting = Field(default=ColorSetting.AUTO, description="Coloring")
    logfile: Path | None = Field(
        default=None, description="Write the report to this file instead of stdout"
    )

    @model_validator(mode="after")
    def _check_test_bench_conflict(self) -> Self:
        if self.test_only and self.bench_only:
            raise ValueError("test_only and bench_only are mutually exclusive")
        return self

    @property
    def runs_ignored(self) -> bool:
        """Whether tests marked as ignored are executed in this run."""
        return self.include_ignored or self.ignored_only

    @property
    def is_concurrent(self) -> bool:
        """Whether tests are dispatched to a worker pool."""
        return self.test_threads is not None and self.test_threads > 1
