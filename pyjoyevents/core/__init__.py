"""
Core infrastructure: logging and error handling
"""

from .exceptions import (
    PyJoyEventsError,
    ErrorSeverity,
    InputError,
    StateIndexError,
    SnapshotShapeError,
    SourceError,
)
from .logging import get_logger, configure_logging, shutdown_logging

__all__ = [
    "PyJoyEventsError",
    "ErrorSeverity",
    "InputError",
    "StateIndexError",
    "SnapshotShapeError",
    "SourceError",
    "get_logger",
    "configure_logging",
    "shutdown_logging",
]
