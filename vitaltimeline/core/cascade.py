# vitaltimeline/core/cascade.py
from __future__ import annotations

import numpy as np

from .series import SignalSeries
from .signals import SignalDefinition


def last_edit_offset(series: SignalSeries, previous_max_ms: int, definition: SignalDefinition) -> float | None:
    """
    Offset of the last user edit from the baseline, or None if it must not cascade.

    Looks for the rightmost user-modified sample at or before `previous_max_ms`.
    Returns None when there is none, or when a modified sample exists after it.
    """
    old_region = series.time <= previous_max_ms
    candidates = np.flatnonzero(series.modified & old_region)
    if candidates.size == 0:
        return None

    last = int(candidates[-1])
    if np.any(series.modified[last + 1:]):
        return None
    return float(series.values[last]) - float(definition.default)


def apply_cascade(series: SignalSeries, previous_max_ms: int, definition: SignalDefinition) -> SignalSeries:
    """
    Continue the last user edit into samples created after `previous_max_ms`.

    New, non-modified samples get `default + delta` (clamped), where delta is
    the last edit's distance from the default: an additive offset, not a copy
    of the last value.
    """
    delta = last_edit_offset(series, previous_max_ms, definition)
    if delta is None:
        return series

    target = (series.time > previous_max_ms) & ~series.modified
    if not np.any(target):
        return series

    values = np.array(series.values, copy=True)
    values[target] = definition.clamp(definition.default + delta)
    return series.with_values(values)
