# vitaltimeline/core/series.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

import numpy as np

from .exceptions import InvalidSeries


@dataclass(frozen=True, slots=True)
class DataPoint:
    """One (time, value) sample; also used for sparse control points."""

    time_ms: int
    value: float
    user_modified: bool = False

    def __post_init__(self) -> None:
        if self.time_ms < 0:
            raise InvalidSeries(f"time_ms must be >= 0, got {self.time_ms}")
        object.__setattr__(self, "time_ms", int(self.time_ms))
        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "user_modified", bool(self.user_modified))


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, copy=True)
    a.flags.writeable = False
    return a


@dataclass(frozen=True, slots=True, eq=False)
class SignalSeries:
    """
    Immutable dense samples of one signal on the timeline grid.

    Three aligned 1D arrays: `time` (int64 ms, strictly increasing),
    `values` (float64) and `modified` (bool user-modified flags).
    Arrays are copied and made read-only on construction.
    """

    time: np.ndarray = field(repr=False)
    values: np.ndarray = field(repr=False)
    modified: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        t = np.asarray(self.time)
        v = np.asarray(self.values, dtype=np.float64)
        m = np.asarray(self.modified, dtype=bool)

        for label, arr in (("time", t), ("values", v), ("modified", m)):
            if arr.ndim != 1:
                raise InvalidSeries(f"`{label}` must be 1D, got shape {arr.shape}")
        if not (t.size == v.size == m.size):
            raise InvalidSeries(
                f"`time`, `values`, `modified` must have same length, got {t.size}, {v.size}, {m.size}"
            )

        if t.size > 0:
            if not np.issubdtype(t.dtype, np.integer):
                if not np.isfinite(t).all() or not np.array_equal(t, np.round(t)):
                    raise InvalidSeries("`time` must hold whole milliseconds.")
            if np.any(t < 0):
                raise InvalidSeries("`time` must be non-negative.")
            if np.any(np.diff(t) <= 0):
                raise InvalidSeries("`time` must be strictly increasing.")
            if not np.isfinite(v).all():
                raise InvalidSeries("`values` contains non-finite values (NaN/Inf).")

        object.__setattr__(self, "time", _frozen(t.astype(np.int64)))
        object.__setattr__(self, "values", _frozen(v))
        object.__setattr__(self, "modified", _frozen(m))

    # ---- constructors ----
    @classmethod
    def baseline(cls, times: np.ndarray, default: float) -> "SignalSeries":
        times = np.asarray(times, dtype=np.int64)
        return cls(
            time=times,
            values=np.full(times.shape, float(default)),
            modified=np.zeros(times.shape, dtype=bool),
        )

    @classmethod
    def from_points(cls, points: Iterable[DataPoint]) -> "SignalSeries":
        pts = list(points)
        return cls(
            time=np.array([p.time_ms for p in pts], dtype=np.int64),
            values=np.array([p.value for p in pts], dtype=np.float64),
            modified=np.array([p.user_modified for p in pts], dtype=bool),
        )

    # ---- accessors ----
    @property
    def n(self) -> int:
        return int(self.time.size)

    def __len__(self) -> int:
        return self.n

    @property
    def t_start(self) -> int | None:
        return None if self.n == 0 else int(self.time[0])

    @property
    def t_end(self) -> int | None:
        return None if self.n == 0 else int(self.time[-1])

    def point(self, i: int) -> DataPoint:
        return DataPoint(int(self.time[i]), float(self.values[i]), bool(self.modified[i]))

    def points(self) -> Iterator[DataPoint]:
        for i in range(self.n):
            yield self.point(i)

    def index_of(self, time_ms: int) -> int | None:
        """Index of the sample stored exactly at `time_ms`, if any."""
        i = int(np.searchsorted(self.time, time_ms))
        if i < self.n and int(self.time[i]) == int(time_ms):
            return i
        return None

    def point_at(self, time_ms: int) -> DataPoint | None:
        i = self.index_of(time_ms)
        return None if i is None else self.point(i)

    # ---- transformations ----
    def with_values(self, values: np.ndarray, modified: np.ndarray | None = None) -> "SignalSeries":
        return SignalSeries(
            time=self.time,
            values=values,
            modified=self.modified if modified is None else modified,
        )

    def clamped(self, lo: float, hi: float) -> "SignalSeries":
        return self.with_values(np.clip(self.values, lo, hi))

    def to_numpy(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray]:
        if copy:
            return self.time.copy(), self.values.copy()
        return self.time, self.values

    def equals(self, other: "SignalSeries") -> bool:
        return (
            np.array_equal(self.time, other.time)
            and np.array_equal(self.values, other.values)
            and np.array_equal(self.modified, other.modified)
        )
