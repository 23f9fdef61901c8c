# vitaltimeline/core/exceptions.py
from __future__ import annotations


class TimelineError(Exception):
    """Base error for all timeline-engine exceptions."""


# ---- Validation / construction errors ----
class InvalidSignalDefinition(TimelineError):
    """Raised when a SignalDefinition violates its bound ordering."""


class InvalidSeries(TimelineError):
    """Raised when a SignalSeries is constructed with invalid inputs."""


class InvalidTimeline(TimelineError):
    """Raised when a Timeline / grid parameter is invalid."""


class CsvImportError(TimelineError, ValueError):
    """Raised when a CSV table cannot be imported; nothing is committed."""


# ---- Lookup errors (also behave like KeyError / IndexError) ----
class UnknownSignal(TimelineError, KeyError):
    """Raised when a signal key or column name is not in the catalog."""


class SignalNotInitialized(TimelineError, KeyError):
    """Raised when an operation targets a signal that was never selected."""


class ControlPointIndexError(TimelineError, IndexError):
    """Raised when a control point index is out of range."""
