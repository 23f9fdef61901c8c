# vitaltimeline/core/history.py
from __future__ import annotations

from dataclasses import dataclass, replace

from .exceptions import InvalidTimeline
from .timeline import Timeline


@dataclass(frozen=True, slots=True, eq=False)
class TimelineHistory:
    """
    Bounded undo/redo stack of committed Timeline snapshots.

    `past` is oldest-first, `future` is nearest-first. At most `limit`
    snapshots are kept in `past`; a new commit clears `future`.
    """
    present: Timeline
    past: tuple[Timeline, ...] = ()
    future: tuple[Timeline, ...] = ()
    limit: int = 100

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise InvalidTimeline("history limit must be >= 0.")
        if len(self.past) > self.limit:
            object.__setattr__(self, "past", self.past[len(self.past) - self.limit:])

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def commit(self, timeline: Timeline) -> "TimelineHistory":
        if timeline is self.present:
            return self
        return replace(self, present=timeline, past=self.past + (self.present,), future=())

    def undo(self) -> "TimelineHistory":
        if not self.past:
            return self
        return replace(
            self,
            present=self.past[-1],
            past=self.past[:-1],
            future=(self.present,) + self.future,
        )

    def redo(self) -> "TimelineHistory":
        if not self.future:
            return self
        return replace(
            self,
            present=self.future[0],
            past=self.past + (self.present,),
            future=self.future[1:],
        )
