"""Write custom test runners that look and behave like libtest."""

from harness_mimic.engine import Evaluator, run_tests
from harness_mimic.errors import (
    ConfigurationError,
    HarnessError,
    SinkError,
    UnsupportedFormatError,
)
from harness_mimic.models.config import ColorSetting, FormatSetting, RunConfiguration
from harness_mimic.models.descriptor import TestDescriptor
from harness_mimic.models.outcome import Failed, Ignored, Measured, Outcome, Passed
from harness_mimic.models.summary import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    Failure,
    RunReport,
    RunSummary,
)

__all__ = [
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "ColorSetting",
    "ConfigurationError",
    "Evaluator",
    "Failed",
    "Failure",
    "FormatSetting",
    "HarnessError",
    "Ignored",
    "Measured",
    "Outcome",
    "Passed",
    "RunConfiguration",
    "RunReport",
    "RunSummary",
    "SinkError",
    "TestDescriptor",
    "UnsupportedFormatError",
    "run_tests",
]
