"""Errors raised by the harness itself (never by a failing test)."""


class HarnessError(Exception):
    """Base class for fatal harness errors."""


class ConfigurationError(HarnessError):
    """Raised when the run configuration cannot be honoured."""


class UnsupportedFormatError(ConfigurationError):
    """Raised when an output format is requested that is not implemented."""


class SinkError(HarnessError):
    """Raised when the output destination cannot be opened."""


class RendererStateError(HarnessError):
    """Raised when printer events arrive out of order."""
