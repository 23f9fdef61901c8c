# vitaltimeline/__init__.py
"""Timeline editing engine for vital-sign signal scenarios."""

from .store import TimelineStore

__version__ = "0.1.0"

__all__ = ["TimelineStore", "__version__"]
