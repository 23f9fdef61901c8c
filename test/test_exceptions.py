# test/test_exceptions.py
import pytest

from vitaltimeline.core import (
    TimelineError,
    InvalidSignalDefinition,
    InvalidSeries,
    InvalidTimeline,
    CsvImportError,
    UnknownSignal,
    SignalNotInitialized,
    ControlPointIndexError,
)


def test_exception_inheritance_validation():
    assert issubclass(InvalidSignalDefinition, TimelineError)
    assert issubclass(InvalidSeries, TimelineError)
    assert issubclass(InvalidTimeline, TimelineError)
    assert issubclass(CsvImportError, TimelineError)
    assert issubclass(CsvImportError, ValueError)


def test_exception_inheritance_lookup():
    assert issubclass(UnknownSignal, KeyError)
    assert issubclass(UnknownSignal, TimelineError)
    assert issubclass(SignalNotInitialized, KeyError)
    assert issubclass(SignalNotInitialized, TimelineError)
    assert issubclass(ControlPointIndexError, IndexError)
    assert issubclass(ControlPointIndexError, TimelineError)


def test_lookup_errors_can_be_raised_and_caught_as_builtin():
    with pytest.raises(KeyError):
        raise UnknownSignal("CVP")

    with pytest.raises(KeyError):
        raise SignalNotInitialized("HR")

    with pytest.raises(IndexError):
        raise ControlPointIndexError("index 3 out of range")
