# vitaltimeline/core/state.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

from .exceptions import InvalidSeries
from .series import DataPoint, SignalSeries
from .signals import SIGNALS, SignalDefinition, SignalKey
from .zoom import ZoomState


@dataclass(frozen=True, slots=True, eq=False)
class SignalState:
    """
    Everything the timeline owns for one signal.

    - data: dense samples on the current grid
    - control_points: sparse user anchors, strictly increasing in time
    - visible/order: selection and stacking
    - zoom: per-signal view window (not data)
    """
    key: SignalKey
    data: SignalSeries = field(repr=False)
    control_points: tuple[DataPoint, ...] = ()
    visible: bool = True
    order: int = 0
    zoom: ZoomState | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", SignalKey.parse(self.key))
        if not isinstance(self.data, SignalSeries):
            raise InvalidSeries("SignalState.data must be a SignalSeries instance.")

        points = tuple(self.control_points)
        for p in points:
            if not isinstance(p, DataPoint):
                raise InvalidSeries("control_points must be DataPoint instances.")
        for p1, p2 in zip(points, points[1:]):
            if p2.time_ms <= p1.time_ms:
                raise InvalidSeries("control_points must be strictly increasing in time.")
        object.__setattr__(self, "control_points", points)

    @property
    def definition(self) -> SignalDefinition:
        return SIGNALS[self.key]

    # ---- transformations ----
    def with_data(self, data: SignalSeries) -> "SignalState":
        return replace(self, data=data)

    def with_control_points(self, points: Iterable[DataPoint], data: SignalSeries) -> "SignalState":
        return replace(self, control_points=tuple(points), data=data)

    def with_visible(self, visible: bool) -> "SignalState":
        return replace(self, visible=bool(visible))

    def with_zoom(self, zoom: ZoomState | None) -> "SignalState":
        return replace(self, zoom=zoom)

    def equals(self, other: "SignalState") -> bool:
        return (
            self.key is other.key
            and self.data.equals(other.data)
            and self.control_points == other.control_points
            and self.visible == other.visible
            and self.order == other.order
            and self.zoom == other.zoom
        )
