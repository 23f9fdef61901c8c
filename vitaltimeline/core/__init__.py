# vitaltimeline/core/__init__.py
"""
Core domain objects for vitaltimeline.

This module defines the pure, I/O-free timeline engine:
- SignalKey / SignalDefinition: closed catalog of editable signals
- SignalSeries: dense per-sample arrays on the grid
- SignalState: samples + control points + view state of one signal
- Timeline: aggregate with pure transition methods
- TimelineHistory: bounded undo/redo of Timeline snapshots
"""

from .signals import (
    SignalKey,
    SignalDefinition,
    SIGNALS,
    UQ_HEADERS,
    REQUIRED_COLUMNS,
    DEFAULT_ACTIVE,
    definition,
    default_columns,
    signal_key_for_name,
)
from .grid import sample_count, grid_size, grid_times, duration_ms
from .series import DataPoint, SignalSeries
from .interpolate import interpolate_at, interpolate_grid, regenerate_series
from .resample import resize_duration, resample_rate
from .cascade import apply_cascade, last_edit_offset
from .zoom import ZoomScale, ZoomState, zoom_to, zoom_from_start, detect_scale, snap_interval, snap_time
from .state import SignalState
from .timeline import Timeline, PointLike, DEFAULT_DURATION_SEC, DEFAULT_SAMPLE_RATE_MS
from .history import TimelineHistory
from .exceptions import (
    TimelineError,
    InvalidSignalDefinition,
    InvalidSeries,
    InvalidTimeline,
    CsvImportError,
    UnknownSignal,
    SignalNotInitialized,
    ControlPointIndexError,
)


__all__ = [
    # catalog
    "SignalKey",
    "SignalDefinition",
    "SIGNALS",
    "UQ_HEADERS",
    "REQUIRED_COLUMNS",
    "DEFAULT_ACTIVE",
    "definition",
    "default_columns",
    "signal_key_for_name",

    # grid
    "sample_count",
    "grid_size",
    "grid_times",
    "duration_ms",

    # samples and engines
    "DataPoint",
    "SignalSeries",
    "interpolate_at",
    "interpolate_grid",
    "regenerate_series",
    "resize_duration",
    "resample_rate",
    "apply_cascade",
    "last_edit_offset",

    # view state
    "ZoomScale",
    "ZoomState",
    "zoom_to",
    "zoom_from_start",
    "detect_scale",
    "snap_interval",
    "snap_time",

    # aggregate
    "SignalState",
    "Timeline",
    "PointLike",
    "TimelineHistory",
    "DEFAULT_DURATION_SEC",
    "DEFAULT_SAMPLE_RATE_MS",

    # exceptions
    "TimelineError",
    "InvalidSignalDefinition",
    "InvalidSeries",
    "InvalidTimeline",
    "CsvImportError",
    "UnknownSignal",
    "SignalNotInitialized",
    "ControlPointIndexError",
]
