"""Command line front end: baseline templates and CSV normalisation.

Example:
    $ vitaltimeline template --duration 600 --signals HR SpO2 -o scenario.csv
    $ vitaltimeline normalize monitor_dump.csv -o clean.csv
"""

import argparse
import logging
import sys
from pathlib import Path

from vitaltimeline.config import check_clock_start, get_settings
from vitaltimeline.core import (
    DEFAULT_ACTIVE,
    REQUIRED_COLUMNS,
    CsvImportError,
    Timeline,
    TimelineError,
    default_columns,
)
from vitaltimeline.io import apply_import, read_csv, to_csv, export_rows
from vitaltimeline.log import setup_logging

logger = logging.getLogger(__name__)


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8", newline="")
    logger.info("wrote %s", output)


def _cmd_template(args: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        timeline = Timeline(duration=args.duration, sample_rate=args.sample_rate)
        timeline = timeline.select_signals(args.signals)
    except TimelineError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    columns = default_columns(timeline.selected)
    rows = export_rows(timeline, columns, clock_start=args.clock_start or settings.clock_start)
    _emit(to_csv(columns, rows), args.output)
    return 0


def _cmd_normalize(args: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        table = read_csv(args.input, min_sample_rate_ms=settings.min_import_sample_rate_ms)
    except (CsvImportError, OSError, UnicodeDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    timeline = apply_import(Timeline(duration=table.duration, sample_rate=table.sample_rate), table)
    columns = args.columns or [*REQUIRED_COLUMNS, *(k.value for k in table.keys)]
    rows = export_rows(timeline, columns, clock_start=args.clock_start or settings.clock_start)
    _emit(to_csv(columns, rows), args.output)
    logger.info(
        "normalized %s: %d rows, %d dropped, ignored columns %s",
        args.input, len(rows), table.dropped_rows, list(table.ignored_columns),
    )
    return 0


def _clock_start(value: str) -> str:
    try:
        return check_clock_start(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="vitaltimeline", description=__doc__.splitlines()[0])
    parser.add_argument("--log-level", default=settings.log_level, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--clock-start", type=_clock_start, default=None, help="wall-clock start for the Clock column (H:MM)")
    sub = parser.add_subparsers(dest="command", required=True)

    template = sub.add_parser("template", help="write a baseline scenario CSV")
    template.add_argument("--duration", type=float, default=settings.default_duration_sec, help="seconds")
    template.add_argument("--sample-rate", type=int, default=settings.default_sample_rate_ms, help="milliseconds")
    template.add_argument("--signals", nargs="+", default=[k.value for k in DEFAULT_ACTIVE])
    template.add_argument("-o", "--output", type=Path, default=None)
    template.set_defaults(func=_cmd_template)

    normalize = sub.add_parser("normalize", help="re-export a CSV on its inferred grid")
    normalize.add_argument("input", type=Path)
    normalize.add_argument("--columns", nargs="+", default=None)
    normalize.add_argument("-o", "--output", type=Path, default=None)
    normalize.set_defaults(func=_cmd_normalize)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    return args.func(args)
