"""Models for the outcome of evaluating a single test."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Passed:
    """The test passed."""


@dataclass(frozen=True)
class Failed:
    """The test or benchmark failed.

    The message, if any, is shown in the failure listing after all tests ran.
    """

    message: str | None = None


@dataclass(frozen=True)
class Ignored:
    """The test or benchmark was not executed."""


@dataclass(frozen=True)
class Measured:
    """The benchmark ran successfully."""

    average_ns: int
    variance_ns: int


type Outcome = Passed | Failed | Ignored | Measured
