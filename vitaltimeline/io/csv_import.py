# vitaltimeline/io/csv_import.py
from __future__ import annotations

import asyncio
import csv
import io
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

import numpy as np

from vitaltimeline.config import get_settings
from vitaltimeline.core import (
    SIGNALS,
    CsvImportError,
    SignalKey,
    SignalSeries,
    Timeline,
    resample_rate,
    signal_key_for_name,
)
from vitaltimeline.io.timefmt import parse_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class ImportedTable:
    """
    Parsed CSV content, not yet applied to a timeline.

    `columns` maps each matched signal to its samples at times relative to
    the first row (ms, strictly increasing), already clamped to bounds.
    """
    duration: int
    sample_rate: int
    columns: dict[SignalKey, SignalSeries] = field(default_factory=dict, repr=False)
    ignored_columns: tuple[str, ...] = ()
    dropped_rows: int = 0

    @property
    def keys(self) -> list[SignalKey]:
        return list(self.columns)


def _find_time_column(header: Sequence[str]) -> int | None:
    """Prefer a column named exactly "time", then "...milliseconds...", then "...time"."""
    names = [h.strip().casefold() for h in header]
    for i, name in enumerate(names):
        if name == "time":
            return i
    for i, name in enumerate(names):
        if "milliseconds" in name:
            return i
    # suffix only, so columns like "NBP (Time Remaining)" are not taken for time
    for i, name in enumerate(names):
        if name.endswith("time"):
            return i
    return None


def _parse_value(cell: str) -> float | None:
    text = cell.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def infer_sample_rate(times_ms: np.ndarray, floor_ms: int) -> int:
    """Rounded mean spacing of sorted timestamps, never below `floor_ms`."""
    if times_ms.size < 2:
        return int(floor_ms)
    mean = float(np.mean(np.diff(times_ms)))
    return max(int(floor_ms), int(math.floor(mean + 0.5)))


def parse_csv(text: str, *, min_sample_rate_ms: int | None = None) -> ImportedTable:
    """
    Parse a delimited table with a header row.

    Raises CsvImportError when there are no data rows, no time column, no
    parseable time cell, or no column matching a known signal.
    """
    if min_sample_rate_ms is None:
        min_sample_rate_ms = get_settings().min_import_sample_rate_ms

    text = text.removeprefix("\ufeff")
    rows = [r for r in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in r)]
    if len(rows) < 2:
        raise CsvImportError("CSV has no data rows.")

    header, body = rows[0], rows[1:]
    time_col = _find_time_column(header)
    if time_col is None:
        raise CsvImportError(
            "No time column found (expected a 'Time' or '...Milliseconds' header)."
        )

    matched: dict[SignalKey, int] = {}
    ignored: list[str] = []
    for i, name in enumerate(header):
        if i == time_col:
            continue
        key = signal_key_for_name(name)
        if key is None or key in matched:
            ignored.append(name)
            continue
        matched[key] = i
    if not matched:
        raise CsvImportError(
            "No column matches a known signal "
            f"({', '.join(k.value for k in SignalKey)})."
        )
    if ignored:
        logger.debug("ignoring unmatched columns: %s", ignored)

    # time -> {key: value}; a later row with the same time wins.
    samples: dict[int, dict[SignalKey, float]] = {}
    dropped = 0
    for row in body:
        t = parse_time(row[time_col]) if time_col < len(row) else None
        if t is None:
            dropped += 1
            continue
        cells = samples.setdefault(t, {})
        for key, col in matched.items():
            value = _parse_value(row[col]) if col < len(row) else None
            if value is not None:
                cells[key] = SIGNALS[key].clamp(value)

    if not samples:
        raise CsvImportError("No row has a parseable time value.")
    if dropped:
        logger.warning("dropped %d row(s) with an unparseable time", dropped)

    times = np.array(sorted(samples), dtype=np.int64)
    t0, t1 = int(times[0]), int(times[-1])
    duration = max(1, math.ceil((t1 - t0) / 1000))
    sample_rate = infer_sample_rate(times, min_sample_rate_ms)

    columns: dict[SignalKey, SignalSeries] = {}
    for key in matched:
        present = [t for t in times if key in samples[int(t)]]
        columns[key] = SignalSeries(
            time=np.array(present, dtype=np.int64) - t0,
            values=np.array([samples[int(t)][key] for t in present], dtype=np.float64),
            modified=np.zeros(len(present), dtype=bool),
        )

    return ImportedTable(
        duration=duration,
        sample_rate=sample_rate,
        columns=columns,
        ignored_columns=tuple(ignored),
        dropped_rows=dropped,
    )


def apply_import(timeline: Timeline, table: ImportedTable) -> Timeline:
    """
    New timeline holding the imported grid and signals.

    Matched signals become selected and visible, lose their control points
    and take the imported samples as a fresh, non-modified baseline. Other
    signals are carried onto the new grid by the ordinary duration and
    sample-rate paths.
    """
    out = timeline
    if out.duration != table.duration:
        out = out.with_duration(table.duration)
    if out.sample_rate != table.sample_rate:
        out = out.with_sample_rate(table.sample_rate)

    out = out.select_signals([*out.selected, *table.keys])
    times = out.times
    for key, series in table.columns.items():
        state = out[key]
        data = resample_rate(series, times, SIGNALS[key])
        out = out.with_state(state.with_control_points((), data).with_visible(True))
    return out


def read_csv(path: str | Path, *, min_sample_rate_ms: int | None = None) -> ImportedTable:
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_csv(text, min_sample_rate_ms=min_sample_rate_ms)


async def load_csv(path: str | Path, *, min_sample_rate_ms: int | None = None) -> ImportedTable:
    """Read and parse off the event loop thread."""
    return await asyncio.to_thread(read_csv, path, min_sample_rate_ms=min_sample_rate_ms)
