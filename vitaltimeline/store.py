# vitaltimeline/store.py
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Callable, Iterable, Mapping, Sequence

from vitaltimeline.config import TimelineSettings, get_settings
from vitaltimeline.core import (
    CsvImportError,
    PointLike,
    SignalKey,
    Timeline,
    TimelineHistory,
    ZoomScale,
    ZoomState,
)
from vitaltimeline.io.csv_export import Row, export_rows, to_csv
from vitaltimeline.io.csv_import import apply_import, load_csv, parse_csv

logger = logging.getLogger(__name__)

Listener = Callable[[Timeline], None]
Transition = Callable[[Timeline], Timeline]


class TimelineStore:
    """
    Single-writer holder of the current Timeline snapshot.

    Every action computes a new immutable Timeline from the current one and
    publishes it in one step under a lock, so readers never observe a
    half-applied change. Data-changing actions are recorded for undo/redo;
    view-only ones (zoom) replace the current snapshot without a history entry.
    """

    def __init__(
        self,
        timeline: Timeline | None = None,
        *,
        settings: TimelineSettings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        if timeline is None:
            timeline = Timeline(
                duration=self._settings.default_duration_sec,
                sample_rate=self._settings.default_sample_rate_ms,
                cascade_enabled=self._settings.cascade_enabled,
            )
        self._history = TimelineHistory(present=timeline, limit=self._settings.history_limit)
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    # ---- reading ----
    @property
    def state(self) -> Timeline:
        return self._history.present

    @property
    def settings(self) -> TimelineSettings:
        return self._settings

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(snapshot)` after every published change; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ---- committing ----
    def _commit(self, action: str, transition: Transition, *, record: bool = True) -> Timeline:
        with self._lock:
            current = self._history.present
            new = transition(current)
            if new is current or new.equals(current):
                return current
            if record:
                self._history = self._history.commit(new)
            else:
                self._history = replace(self._history, present=new)
            listeners = list(self._listeners)
        logger.debug("%s committed (duration=%ss rate=%sms)", action, new.duration, new.sample_rate)
        self._publish(new, listeners)
        return new

    def _publish(self, snapshot: Timeline, listeners: Iterable[Listener]) -> None:
        for listener in listeners:
            listener(snapshot)

    # ---- selection / grid ----
    def select_signals(self, keys: Iterable[SignalKey | str]) -> Timeline:
        keys = list(keys)
        return self._commit("select_signals", lambda tl: tl.select_signals(keys))

    def set_duration(self, seconds: float) -> Timeline:
        return self._commit("set_duration", lambda tl: tl.with_duration(seconds))

    def set_sample_rate(self, ms: int) -> Timeline:
        return self._commit("set_sample_rate", lambda tl: tl.with_sample_rate(ms))

    def set_cascade_enabled(self, enabled: bool) -> Timeline:
        return self._commit("set_cascade_enabled", lambda tl: tl.set_cascade_enabled(enabled))

    # ---- editing ----
    def add_control_point(self, signal_id: SignalKey | str, point: PointLike) -> Timeline:
        return self._commit("add_control_point", lambda tl: tl.add_control_point(signal_id, point))

    def move_control_point(self, signal_id: SignalKey | str, index: int, point: PointLike) -> Timeline:
        return self._commit(
            "move_control_point", lambda tl: tl.move_control_point(signal_id, index, point)
        )

    def delete_control_point(self, signal_id: SignalKey | str, index: int) -> Timeline:
        return self._commit("delete_control_point", lambda tl: tl.delete_control_point(signal_id, index))

    def edit_samples(self, signal_id: SignalKey | str, edits: Mapping[int, float]) -> Timeline:
        edits = dict(edits)
        return self._commit("edit_samples", lambda tl: tl.edit_samples(signal_id, edits))

    def reset_signal_to_default(self, signal_id: SignalKey | str) -> Timeline:
        return self._commit("reset_signal_to_default", lambda tl: tl.reset_signal(signal_id))

    def toggle_visibility(self, signal_id: SignalKey | str) -> Timeline:
        return self._commit("toggle_visibility", lambda tl: tl.toggle_visibility(signal_id))

    # ---- view state ----
    def set_zoom(self, signal_id: SignalKey | str, zoom: ZoomState | None) -> Timeline:
        return self._commit("set_zoom", lambda tl: tl.set_zoom(signal_id, zoom), record=False)

    def zoom_preset(self, signal_id: SignalKey | str, scale: ZoomScale | str) -> Timeline:
        return self._commit("zoom_preset", lambda tl: tl.zoom_preset(signal_id, scale), record=False)

    def set_zoom_sync(self, enabled: bool) -> Timeline:
        return self._commit("set_zoom_sync", lambda tl: tl.set_zoom_sync(enabled), record=False)

    # ---- history ----
    def undo(self) -> bool:
        """Step back one committed change; False if there is nothing to undo."""
        return self._step(TimelineHistory.undo, "undo")

    def redo(self) -> bool:
        return self._step(TimelineHistory.redo, "redo")

    def _step(self, move: Callable[[TimelineHistory], TimelineHistory], action: str) -> bool:
        with self._lock:
            moved = move(self._history)
            if moved is self._history:
                return False
            self._history = moved
            listeners = list(self._listeners)
        logger.debug("%s -> duration=%ss rate=%sms", action, moved.present.duration, moved.present.sample_rate)
        self._publish(moved.present, listeners)
        return True

    # ---- CSV ----
    def export_rows(self, columns: Sequence[str]) -> list[Row]:
        return export_rows(self.state, columns, clock_start=self._settings.clock_start)

    def export_csv(self, columns: Sequence[str]) -> str:
        return to_csv(columns, self.export_rows(columns))

    def import_text(self, text: str) -> Timeline:
        """Parse and commit CSV text; on CsvImportError nothing changes."""
        try:
            table = parse_csv(text, min_sample_rate_ms=self._settings.min_import_sample_rate_ms)
        except CsvImportError as e:
            logger.warning("import rejected: %s", e)
            raise
        new = self._commit("import_csv", lambda tl: apply_import(tl, table))
        logger.info(
            "imported %d signal(s): duration=%ss rate=%sms",
            len(table.columns), table.duration, table.sample_rate,
        )
        return new

    async def import_csv(self, path: str | Path) -> None:
        """
        Read and parse `path` off the event loop, then commit in one step.

        Parse failures raise CsvImportError and leave the timeline untouched.
        """
        try:
            table = await load_csv(path, min_sample_rate_ms=self._settings.min_import_sample_rate_ms)
        except Exception:
            logger.warning("import of %s rejected", path, exc_info=True)
            raise
        self._commit("import_csv", lambda tl: apply_import(tl, table))
        logger.info(
            "imported %s: %d signal(s), duration=%ss rate=%sms",
            path, len(table.columns), table.duration, table.sample_rate,
        )
