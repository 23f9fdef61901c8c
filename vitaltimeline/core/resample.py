# vitaltimeline/core/resample.py
"""
Carry a signal's dense samples over to a new grid.

Both transformations keep any sample whose timestamp exists in the new grid
verbatim (value and user-modified flag), so going to another grid and back
restores the original samples exactly.
"""
from __future__ import annotations

import numpy as np

from .series import SignalSeries
from .signals import SignalDefinition


def _exact_matches(old_t: np.ndarray, new_t: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Left insertion points of `new_t` into `old_t` and the exact-hit mask."""
    idx = np.searchsorted(old_t, new_t, side="left")
    if old_t.size == 0:
        return idx, np.zeros(new_t.shape, dtype=bool)
    safe = np.minimum(idx, old_t.size - 1)
    exact = (idx < old_t.size) & (old_t[safe] == new_t)
    return idx, exact


def resize_duration(series: SignalSeries, new_times: np.ndarray, definition: SignalDefinition) -> SignalSeries:
    """
    Extend or truncate to `new_times` at an unchanged sample rate.

    Samples at shared timestamps are copied; every other timestamp gets a
    baseline sample (definition.default, not user-modified). Existing values
    are never altered.
    """
    new_t = np.asarray(new_times, dtype=np.int64)
    idx, exact = _exact_matches(series.time, new_t)

    values = np.full(new_t.shape, float(definition.default))
    modified = np.zeros(new_t.shape, dtype=bool)
    values[exact] = series.values[idx[exact]]
    modified[exact] = series.modified[idx[exact]]

    return SignalSeries(time=new_t, values=values, modified=modified)


def resample_rate(series: SignalSeries, new_times: np.ndarray, definition: SignalDefinition) -> SignalSeries:
    """
    Map samples onto a grid with a different sample rate.

    Exact timestamp hits are copied. Otherwise the value is linearly
    interpolated between the nearest old samples strictly before and after,
    and is user-modified if either source was. With only one neighbour its
    value is held; with none, the definition default is used.
    """
    new_t = np.asarray(new_times, dtype=np.int64)
    old_t = series.time
    n_old = old_t.size

    idx, exact = _exact_matches(old_t, new_t)
    has_before = idx > 0
    has_after = idx < n_old

    values = np.full(new_t.shape, float(definition.default))
    modified = np.zeros(new_t.shape, dtype=bool)

    if n_old:
        b = np.clip(idx - 1, 0, n_old - 1)
        a = np.clip(idx, 0, n_old - 1)

        both = ~exact & has_before & has_after
        t1 = old_t[b[both]].astype(np.float64)
        t2 = old_t[a[both]].astype(np.float64)
        v1 = series.values[b[both]]
        v2 = series.values[a[both]]
        values[both] = v1 + (v2 - v1) * (new_t[both] - t1) / (t2 - t1)
        modified[both] = series.modified[b[both]] | series.modified[a[both]]

        only_before = ~exact & has_before & ~has_after
        values[only_before] = series.values[b[only_before]]
        modified[only_before] = series.modified[b[only_before]]

        only_after = ~exact & ~has_before & has_after
        values[only_after] = series.values[a[only_after]]
        modified[only_after] = series.modified[a[only_after]]

        values[exact] = series.values[idx[exact]]
        modified[exact] = series.modified[idx[exact]]

    return SignalSeries(
        time=new_t,
        values=np.clip(values, definition.min, definition.max),
        modified=modified,
    )
