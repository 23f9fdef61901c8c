# vitaltimeline/core/timeline.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, Mapping

import numpy as np

from . import grid
from .cascade import apply_cascade
from .exceptions import ControlPointIndexError, InvalidTimeline, SignalNotInitialized
from .interpolate import regenerate_series
from .resample import resample_rate, resize_duration
from .series import DataPoint, SignalSeries
from .signals import SIGNALS, SignalKey
from .state import SignalState
from .zoom import ZoomScale, ZoomState, zoom_to


DEFAULT_DURATION_SEC = 30 * 60
DEFAULT_SAMPLE_RATE_MS = 1000

# A stored DataPoint or a raw (time_ms, value) pair from a gesture.
PointLike = DataPoint | tuple[float, float]


@dataclass(frozen=True, slots=True, eq=False)
class Timeline:
    """
    Timeline = duration + sample rate + one SignalState per initialised signal.

    Design goals:
    - dict-like access: tl[SignalKey.HR] or tl["HR"]
    - immutable: every operation returns a new Timeline, the old one is untouched
    - consistent: every signal's samples sit exactly on the shared grid
    """
    duration: float = DEFAULT_DURATION_SEC
    sample_rate: int = DEFAULT_SAMPLE_RATE_MS
    signals: Mapping[SignalKey, SignalState] = field(default_factory=dict, repr=False)
    selected: tuple[SignalKey, ...] = ()
    cascade_enabled: bool = True
    zoom_sync: bool = False

    def __post_init__(self) -> None:
        grid.validate_grid(self.duration, self.sample_rate)
        object.__setattr__(self, "sample_rate", int(self.sample_rate))

        if not isinstance(self.signals, Mapping):
            raise InvalidTimeline("Timeline.signals must be a mapping (e.g., dict).")

        times = grid.grid_times(self.duration, self.sample_rate)
        normalized: dict[SignalKey, SignalState] = {}
        for key, state in self.signals.items():
            key = SignalKey.parse(key)
            if not isinstance(state, SignalState):
                raise InvalidTimeline("Timeline.signals values must be SignalState instances.")
            if state.key is not key:
                raise InvalidTimeline(
                    f"Signal key mismatch: key '{key}' but SignalState.key is '{state.key}'."
                )
            if not np.array_equal(state.data.time, times):
                raise InvalidTimeline(
                    f"Signal '{key}' has {state.data.n} samples off the "
                    f"{self.duration}s/{self.sample_rate}ms grid ({times.size} expected)."
                )
            normalized[key] = state

        selected = tuple(dict.fromkeys(SignalKey.parse(k) for k in self.selected))
        for key in selected:
            if key not in normalized:
                raise InvalidTimeline(f"Selected signal '{key}' has no state.")

        object.__setattr__(self, "signals", normalized)
        object.__setattr__(self, "selected", selected)

    # ---- dict-like API ----
    def __len__(self) -> int:
        return len(self.signals)

    def __iter__(self) -> Iterator[SignalKey]:
        return iter(self.signals)

    def __contains__(self, key: object) -> bool:
        try:
            return SignalKey.parse(key) in self.signals  # type: ignore[arg-type]
        except KeyError:
            return False

    def keys(self) -> Iterable[SignalKey]:
        return self.signals.keys()

    def items(self) -> Iterable[tuple[SignalKey, SignalState]]:
        return self.signals.items()

    def values(self) -> Iterable[SignalState]:
        return self.signals.values()

    def __getitem__(self, key: SignalKey | str) -> SignalState:
        parsed = SignalKey.parse(key)
        try:
            return self.signals[parsed]
        except KeyError as e:
            raise SignalNotInitialized(parsed.value) from e

    def get(self, key: SignalKey | str, default: SignalState | None = None) -> SignalState | None:
        return self.signals.get(SignalKey.parse(key), default)

    # ---- derived grid ----
    @property
    def duration_ms(self) -> int:
        return grid.duration_ms(self.duration)

    @property
    def sample_count(self) -> int:
        return grid.sample_count(self.duration, self.sample_rate)

    @property
    def times(self) -> np.ndarray:
        return grid.grid_times(self.duration, self.sample_rate)

    def visible_signals(self) -> list[SignalState]:
        """Visible signal states in stacking order."""
        return sorted((s for s in self.signals.values() if s.visible), key=lambda s: s.order)

    def next_order(self) -> int:
        return max((s.order for s in self.signals.values()), default=0) + 1

    # ---- selection / view state ----
    def select_signals(self, keys: Iterable[SignalKey | str]) -> "Timeline":
        """
        Make `keys` the selected set.

        New signals start from baseline; deselected ones are hidden, not
        dropped; re-selected ones become visible again with their data intact.
        """
        wanted = tuple(dict.fromkeys(SignalKey.parse(k) for k in keys))
        new_signals = dict(self.signals)
        times = self.times

        order = self.next_order() - 1
        for key in wanted:
            if key in self.selected:
                continue
            state = new_signals.get(key)
            if state is None:
                order += 1
                new_signals[key] = SignalState(
                    key=key,
                    data=SignalSeries.baseline(times, SIGNALS[key].default),
                    order=order,
                )
            else:
                new_signals[key] = state.with_visible(True)

        for key in self.selected:
            if key not in wanted:
                new_signals[key] = new_signals[key].with_visible(False)

        return replace(self, signals=new_signals, selected=wanted)

    def toggle_visibility(self, key: SignalKey | str) -> "Timeline":
        state = self[key]
        return self.with_state(state.with_visible(not state.visible))

    def set_zoom(self, key: SignalKey | str, zoom: ZoomState | None) -> "Timeline":
        """Set a signal's view window; with zoom sync on, every signal follows."""
        if zoom is not None:
            zoom = zoom.clamp_to(self.duration)
        if not self.zoom_sync:
            return self.with_state(self[key].with_zoom(zoom))
        self[key]  # unknown signal still raises
        return replace(self, signals={k: s.with_zoom(zoom) for k, s in self.signals.items()})

    def zoom_preset(self, key: SignalKey | str, scale: ZoomScale | str) -> "Timeline":
        """Switch to a preset window centred on the signal's current view."""
        current = self[key].zoom or ZoomState.full(self.duration)
        return self.set_zoom(key, zoom_to(scale, current.center, self.duration))

    def set_cascade_enabled(self, enabled: bool) -> "Timeline":
        return replace(self, cascade_enabled=bool(enabled))

    def set_zoom_sync(self, enabled: bool) -> "Timeline":
        return replace(self, zoom_sync=bool(enabled))

    # ---- grid changes ----
    def with_duration(self, seconds: float) -> "Timeline":
        """
        Extend/truncate every signal to the new duration.

        Shared timestamps keep their samples; new ones start at baseline and,
        if the duration grew and cascading is on, continue the last edit.
        """
        grid.validate_grid(seconds, self.sample_rate)
        times = grid.grid_times(seconds, self.sample_rate)
        previous_max = int(self.times[-1])
        grew = int(times[-1]) > previous_max

        new_signals: dict[SignalKey, SignalState] = {}
        for key, state in self.signals.items():
            data = resize_duration(state.data, times, state.definition)
            if grew and self.cascade_enabled:
                data = apply_cascade(data, previous_max, state.definition)
            zoom = None if state.zoom is None else state.zoom.clamp_to(seconds)
            new_signals[key] = replace(state, data=data, zoom=zoom)

        return replace(self, duration=seconds, signals=new_signals)

    def with_sample_rate(self, ms: int) -> "Timeline":
        """Re-grid every signal by interpolating its existing samples."""
        grid.validate_grid(self.duration, ms)
        times = grid.grid_times(self.duration, ms)
        new_signals = {
            key: state.with_data(resample_rate(state.data, times, state.definition))
            for key, state in self.signals.items()
        }
        return replace(self, sample_rate=int(ms), signals=new_signals)

    # ---- control points ----
    def clamp_point(self, key: SignalKey | str, point: PointLike) -> DataPoint:
        """
        Constrain a point to [0, duration] x [min, max]; marks it user-modified.

        Accepts a raw (time_ms, value) pair, so a drag past either edge of the
        timeline lands on the edge instead of failing DataPoint validation.
        """
        definition = SIGNALS[SignalKey.parse(key)]
        time_ms, value = (point.time_ms, point.value) if isinstance(point, DataPoint) else point
        time_ms = min(max(int(round(time_ms)), 0), self.duration_ms)
        return DataPoint(time_ms, definition.clamp(value), True)

    def add_control_point(self, key: SignalKey | str, point: PointLike) -> "Timeline":
        state = self[key]
        point = self.clamp_point(state.key, point)
        points = [p for p in state.control_points if p.time_ms != point.time_ms]
        points.append(point)
        return self._with_control_points(state, points)

    def move_control_point(self, key: SignalKey | str, index: int, point: PointLike) -> "Timeline":
        state = self[key]
        self._check_index(state, index)
        point = self.clamp_point(state.key, point)
        points = [p for i, p in enumerate(state.control_points) if i != index and p.time_ms != point.time_ms]
        points.append(point)
        return self._with_control_points(state, points)

    def delete_control_point(self, key: SignalKey | str, index: int) -> "Timeline":
        state = self[key]
        self._check_index(state, index)
        points = [p for i, p in enumerate(state.control_points) if i != index]
        return self._with_control_points(state, points)

    def reset_signal(self, key: SignalKey | str) -> "Timeline":
        """Drop control points and edits; visibility, order and zoom are kept."""
        state = self[key]
        return self._with_control_points(state, [])

    def edit_samples(self, key: SignalKey | str, edits: Mapping[int, float]) -> "Timeline":
        """
        Overwrite dense samples directly (e.g. dragging the curve itself).

        Values are clamped and flagged user-modified. Timestamps that are not
        on the grid are ignored.
        """
        state = self[key]
        definition = state.definition
        values = np.array(state.data.values, copy=True)
        modified = np.array(state.data.modified, copy=True)
        for time_ms, value in edits.items():
            i = state.data.index_of(int(time_ms))
            if i is None:
                continue
            values[i] = definition.clamp(value)
            modified[i] = True
        return self.with_state(state.with_data(state.data.with_values(values, modified)))

    # ---- comparison ----
    def equals(self, other: "Timeline") -> bool:
        if (
            self.duration != other.duration
            or self.sample_rate != other.sample_rate
            or self.selected != other.selected
            or self.cascade_enabled != other.cascade_enabled
            or self.zoom_sync != other.zoom_sync
            or list(self.signals) != list(other.signals)
        ):
            return False
        return all(s.equals(other.signals[k]) for k, s in self.signals.items())

    # ---- internals ----
    def with_state(self, state: SignalState) -> "Timeline":
        new_signals = dict(self.signals)
        new_signals[state.key] = state
        return replace(self, signals=new_signals)

    def _with_control_points(self, state: SignalState, points: list[DataPoint]) -> "Timeline":
        points.sort(key=lambda p: p.time_ms)
        data = regenerate_series(points, self.times, state.definition, self.sample_rate)
        return self.with_state(state.with_control_points(points, data))

    @staticmethod
    def _check_index(state: SignalState, index: int) -> None:
        if not 0 <= index < len(state.control_points):
            raise ControlPointIndexError(
                f"control point index {index} out of range for '{state.key}' "
                f"({len(state.control_points)} points)"
            )
