"""Structured logging setup for the command line front end.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here and nowhere else.

Example:
    >>> from vitaltimeline.log import setup_logging
    >>> setup_logging("DEBUG")
"""

import logging
import sys


class StructuredFormatter(logging.Formatter):
    """Formats records as ``timestamp=... level=... logger=... message="..."``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        message = record.getMessage().replace('"', '\\"')
        parts = [
            f"timestamp={timestamp}",
            f"level={record.levelname}",
            f"logger={record.name}",
            f'message="{message}"',
        ]
        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            exc_text = exc_text.replace("\n", " | ").replace('"', '\\"')
            parts.append(f'exception="{exc_text}"')
        return " ".join(parts)


def setup_logging(log_level: str = "INFO") -> None:
    """Route all logging to stderr with the structured format.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR).
    """
    formatter = StructuredFormatter(datefmt="%Y-%m-%dT%H:%M:%S%z")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level.upper())
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(log_level.upper())
    root_logger.addHandler(handler)
