# vitaltimeline/core/zoom.py
"""
Per-signal view window (seconds) and the zoom presets used by editors.

View state only: nothing here touches sample data.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class ZoomScale(str, Enum):
    S5 = "5s"
    S30 = "30s"
    M5 = "5m"
    M10 = "10m"
    FULL = "full"


# Visible width of each preset in seconds; FULL spans the whole duration.
_WINDOW_SEC = {
    ZoomScale.S5: 4.0,
    ZoomScale.S30: 30.0,
    ZoomScale.M5: 300.0,
    ZoomScale.M10: 600.0,
}

_SNAP_SEC = {
    ZoomScale.S5: 1.0,
    ZoomScale.S30: 5.0,
    ZoomScale.M5: 30.0,
    ZoomScale.M10: 60.0,
    ZoomScale.FULL: 60.0,
}


@dataclass(frozen=True, slots=True)
class ZoomState:
    scale: ZoomScale = ZoomScale.FULL
    start_time: float = 0.0
    end_time: float = 0.0

    @classmethod
    def full(cls, duration_sec: float) -> "ZoomState":
        return cls(ZoomScale.FULL, 0.0, float(duration_sec))

    @property
    def center(self) -> float:
        return (self.start_time + self.end_time) / 2.0

    def clamp_to(self, duration_sec: float) -> "ZoomState":
        """Keep the window inside [0, duration]; FULL always tracks the duration."""
        if self.scale is ZoomScale.FULL:
            return ZoomState.full(duration_sec)
        width = min(self.end_time - self.start_time, float(duration_sec))
        start = min(max(0.0, self.start_time), float(duration_sec) - width)
        return ZoomState(self.scale, start, start + width)


def window_width(scale: ZoomScale, duration_sec: float) -> float:
    if scale is ZoomScale.FULL:
        return float(duration_sec)
    return min(_WINDOW_SEC[scale], float(duration_sec))


def zoom_to(scale: ZoomScale | str, center: float, duration_sec: float) -> ZoomState:
    """Window of the preset `scale` centred on `center`, shifted to fit the duration."""
    scale = ZoomScale(scale)
    if scale is ZoomScale.FULL:
        return ZoomState.full(duration_sec)

    width = window_width(scale, duration_sec)
    start = max(0.0, center - width / 2.0)
    if start + width > duration_sec:
        start = max(0.0, duration_sec - width)
    return ZoomState(scale, start, start + width)


def zoom_from_start(scale: ZoomScale | str, start_time: float, duration_sec: float) -> ZoomState:
    """Window of the preset `scale` beginning at `start_time` (pan)."""
    scale = ZoomScale(scale)
    if scale is ZoomScale.FULL:
        return ZoomState.full(duration_sec)
    width = window_width(scale, duration_sec)
    return ZoomState(scale, start_time, start_time + width).clamp_to(duration_sec)


def detect_scale(range_sec: float) -> ZoomScale:
    """Preset matching a free-form zoom range."""
    if range_sec <= 7:
        return ZoomScale.S5
    if range_sec <= 60:
        return ZoomScale.S30
    if range_sec <= 360:
        return ZoomScale.M5
    if range_sec <= 720:
        return ZoomScale.M10
    return ZoomScale.FULL


def snap_interval(scale: ZoomScale | str) -> float:
    return _SNAP_SEC[ZoomScale(scale)]


def snap_time(time_sec: float, scale: ZoomScale | str) -> float:
    """Round a clicked time to the snap grid of the current zoom level."""
    step = snap_interval(scale)
    return math.floor(time_sec / step + 0.5) * step
