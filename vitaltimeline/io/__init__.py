# vitaltimeline/io/__init__.py
"""CSV import/export of timelines."""

from .timefmt import format_time, format_clock, parse_time, format_signal_value, value_precision
from .csv_export import export_rows, to_csv, write_csv
from .csv_import import ImportedTable, parse_csv, apply_import, read_csv, load_csv


__all__ = [
    "format_time",
    "format_clock",
    "parse_time",
    "format_signal_value",
    "value_precision",
    "export_rows",
    "to_csv",
    "write_csv",
    "ImportedTable",
    "parse_csv",
    "apply_import",
    "read_csv",
    "load_csv",
]
