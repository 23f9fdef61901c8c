# vitaltimeline/core/grid.py
"""
Sample grid arithmetic shared by every other component.

The grid for (duration_sec, sample_rate_ms) is
    {0, rate, 2*rate, ..., sample_count*rate}
with sample_count = floor(duration_sec * 1000 / rate), i.e. it holds
sample_count + 1 timestamps and the last one never exceeds the duration.
"""
from __future__ import annotations

import math

import numpy as np

from .exceptions import InvalidTimeline


def validate_grid(duration_sec: float, sample_rate_ms: int) -> None:
    if not isinstance(duration_sec, (int, float)) or not math.isfinite(duration_sec) or duration_sec <= 0:
        raise InvalidTimeline(f"duration must be a positive number of seconds, got {duration_sec!r}")
    if isinstance(sample_rate_ms, bool) or not isinstance(sample_rate_ms, (int, np.integer)) or sample_rate_ms <= 0:
        raise InvalidTimeline(
            f"sample rate must be a positive integer number of ms, got {sample_rate_ms!r}"
        )


def duration_ms(duration_sec: float) -> int:
    # Floor to whole ms; the epsilon absorbs float error such as 0.1 * 3 * 1000.
    return int(math.floor(duration_sec * 1000 + 1e-9))


def sample_count(duration_sec: float, sample_rate_ms: int) -> int:
    return duration_ms(duration_sec) // int(sample_rate_ms)


def grid_size(duration_sec: float, sample_rate_ms: int) -> int:
    return sample_count(duration_sec, sample_rate_ms) + 1


def grid_times(duration_sec: float, sample_rate_ms: int) -> np.ndarray:
    """All grid timestamps in ms (int64, strictly increasing)."""
    n = sample_count(duration_sec, sample_rate_ms)
    return np.arange(n + 1, dtype=np.int64) * np.int64(sample_rate_ms)


def nearest_index(time_ms: float, duration_sec: float, sample_rate_ms: int) -> int:
    """Index of the grid timestamp closest to `time_ms` (clamped to the grid)."""
    n = sample_count(duration_sec, sample_rate_ms)
    idx = int(math.floor(time_ms / sample_rate_ms + 0.5))
    return min(max(idx, 0), n)
