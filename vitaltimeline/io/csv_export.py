# vitaltimeline/io/csv_export.py
from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from vitaltimeline.config import get_settings
from vitaltimeline.core import SIGNALS, SignalKey, Timeline, UnknownSignal
from vitaltimeline.io.timefmt import format_clock, format_signal_value, format_time

logger = logging.getLogger(__name__)

Cell = str | int | None
Row = dict[str, Cell]


def _signal_cells(timeline: Timeline, column: str) -> Mapping[int, str]:
    """Formatted values by timestamp for one signal column (empty if not exported)."""
    try:
        key = SignalKey.parse(column)
    except UnknownSignal:
        return {}

    state = timeline.get(key)
    if state is None or not state.visible:
        return {}

    definition = SIGNALS[key]
    return {
        int(t): format_signal_value(definition.clamp(float(v)), column)
        for t, v in zip(state.data.time, state.data.values)
    }


def export_rows(
    timeline: Timeline,
    columns: Sequence[str],
    *,
    clock_start: str | None = None,
) -> list[Row]:
    """
    One row per grid timestamp with the requested columns, in order.

    Time -> HH:MM:SS_mmm, RelativeTimeMilliseconds -> int, Clock -> H:MM from
    `clock_start`. Signal columns hold the formatted sample at that exact
    timestamp, or None if the signal is hidden, unknown or has no sample there.
    """
    if clock_start is None:
        clock_start = get_settings().clock_start

    signal_cells = {
        col: _signal_cells(timeline, col)
        for col in columns
        if col not in ("Time", "RelativeTimeMilliseconds", "Clock")
    }

    rows: list[Row] = []
    for t in timeline.times:
        ms = int(t)
        row: Row = {}
        for col in columns:
            if col == "Time":
                row[col] = format_time(ms)
            elif col == "RelativeTimeMilliseconds":
                row[col] = ms
            elif col == "Clock":
                row[col] = format_clock(clock_start, ms)
            else:
                row[col] = signal_cells[col].get(ms)
        rows.append(row)

    logger.debug("exported %d rows x %d columns", len(rows), len(columns))
    return rows


def to_csv(headers: Sequence[str], rows: Iterable[Mapping[str, Cell]]) -> str:
    """
    RFC4180 text: fields with a comma, quote or newline are quoted and
    internal quotes doubled; None renders as an empty field.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if row.get(h) is None else row.get(h) for h in headers])
    text = buffer.getvalue()
    return text[:-1] if text.endswith("\n") else text


def write_csv(
    path: str | Path,
    timeline: Timeline,
    columns: Sequence[str],
    *,
    clock_start: str | None = None,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = to_csv(columns, export_rows(timeline, columns, clock_start=clock_start))
    path.write_text(text + "\n", encoding="utf-8", newline="")
    logger.info("wrote %s (%d columns)", path, len(columns))
    return path
