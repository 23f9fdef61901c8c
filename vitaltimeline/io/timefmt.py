# vitaltimeline/io/timefmt.py
"""Text encodings of timestamps and signal values used by the CSV codec."""
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

# "HH:MM:SS_mmm", e.g. 00:01:05_250
_TIME_RE = re.compile(r"^(?P<h>\d+):(?P<m>\d{1,2}):(?P<s>\d{1,2})_(?P<ms>\d{1,3})$")
# legacy "MM:SS"
_LEGACY_RE = re.compile(r"^(?P<m>\d+):(?P<s>\d{1,2})$")
_MS_RE = re.compile(r"^\d+$")

# Column-name fragments rendered as integers; checked before MAC.
_INTEGER_FAMILIES = ("HR", "RR", "Pulse", "SpO2", "BIS", "SQI", "EMG")
_TWO_DECIMAL_FAMILIES = ("MAC",)


def format_time(milliseconds: int) -> str:
    """Render elapsed ms as HH:MM:SS_mmm."""
    milliseconds = int(milliseconds)
    total_seconds, ms = divmod(milliseconds, 1000)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}_{ms:03d}"


def parse_clock_start(start: str) -> tuple[int, int]:
    hours, _, minutes = start.partition(":")
    return int(hours), int(minutes)


def format_clock(start: str, milliseconds: int) -> str:
    """Wall-clock H:MM reached `milliseconds` after `start`, wrapping at 24h."""
    start_hour, start_minute = parse_clock_start(start)
    total_minutes = int(milliseconds) // 1000 // 60
    minute_of_day = start_minute + total_minutes
    clock_minutes = minute_of_day % 60
    clock_hours = (start_hour + minute_of_day // 60) % 24
    return f"{clock_hours}:{clock_minutes:02d}"


def parse_time(cell: str) -> int | None:
    """
    Parse a time cell into ms; None if it matches no accepted encoding.

    Accepted: HH:MM:SS_mmm, legacy MM:SS, bare integer milliseconds.
    """
    text = cell.strip()
    if not text:
        return None

    m = _TIME_RE.match(text)
    if m:
        return (
            (int(m["h"]) * 3600 + int(m["m"]) * 60 + int(m["s"])) * 1000
            + int(m["ms"])
        )

    m = _LEGACY_RE.match(text)
    if m:
        return (int(m["m"]) * 60 + int(m["s"])) * 1000

    if _MS_RE.match(text):
        return int(text)
    return None


def value_precision(column: str) -> int:
    """Decimal places used when exporting `column`."""
    if any(family in column for family in _INTEGER_FAMILIES):
        return 0
    if any(family in column for family in _TWO_DECIMAL_FAMILIES):
        return 2
    return 1


def format_signal_value(value: float, column: str) -> str:
    # Half-up on the exact binary value, so 0.25 -> "0.3" and 70.5 -> "71".
    places = value_precision(column)
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
