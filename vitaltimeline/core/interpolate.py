# vitaltimeline/core/interpolate.py
"""
Control point interpolation.

The dense samples of a signal are a pure function of its control points and
its default value: piecewise-linear between points, held flat before the
first and after the last point, and the default when there are no points.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from .series import DataPoint, SignalSeries
from .signals import SignalDefinition


def interpolate_at(control_points: Sequence[DataPoint], time_ms: float, default: float) -> float:
    if not control_points:
        return float(default)

    first, last = control_points[0], control_points[-1]
    if time_ms <= first.time_ms:
        return first.value
    if time_ms >= last.time_ms:
        return last.value

    for p1, p2 in zip(control_points, control_points[1:]):
        if p1.time_ms <= time_ms <= p2.time_ms:
            if time_ms == p1.time_ms:
                return p1.value
            if time_ms == p2.time_ms:
                return p2.value
            return p1.value + (p2.value - p1.value) * (time_ms - p1.time_ms) / (p2.time_ms - p1.time_ms)

    # Unreachable for time-ordered input.
    return last.value


def interpolate_grid(
    control_points: Sequence[DataPoint],
    times: np.ndarray,
    default: float,
) -> np.ndarray:
    """Vectorised `interpolate_at` over every timestamp in `times`."""
    times = np.asarray(times, dtype=np.float64)
    if not control_points:
        return np.full(times.shape, float(default))

    xp = np.array([p.time_ms for p in control_points], dtype=np.float64)
    fp = np.array([p.value for p in control_points], dtype=np.float64)
    # np.interp holds the end values outside [xp[0], xp[-1]].
    return np.interp(times, xp, fp)


def modified_mask(control_points: Sequence[DataPoint], times: np.ndarray, sample_rate_ms: int) -> np.ndarray:
    """Flag the grid sample nearest to each control point as user-modified."""
    mask = np.zeros(np.asarray(times).shape, dtype=bool)
    if mask.size == 0:
        return mask
    last = mask.size - 1
    for p in control_points:
        idx = int(np.floor(p.time_ms / sample_rate_ms + 0.5))
        if 0 <= idx <= last:
            mask[idx] = True
    return mask


def regenerate_series(
    control_points: Sequence[DataPoint],
    times: np.ndarray,
    definition: SignalDefinition,
    sample_rate_ms: int,
) -> SignalSeries:
    """Rebuild a signal's dense samples from scratch out of its control points."""
    values = interpolate_grid(control_points, times, definition.default)
    return SignalSeries(
        time=times,
        values=np.clip(values, definition.min, definition.max),
        modified=modified_mask(control_points, times, sample_rate_ms),
    )
