"""Tick history and CSV logging."""

from pid_academy.logging.csv_logger import TickLogger, TICK_LOG_COLUMNS
from pid_academy.logging.history import (
    HistoryBuffer,
    HistorySample,
    HISTORY_COLUMNS,
    DEFAULT_HISTORY_CAPACITY,
)

__all__ = [
    "TickLogger",
    "TICK_LOG_COLUMNS",
    "HistoryBuffer",
    "HistorySample",
    "HISTORY_COLUMNS",
    "DEFAULT_HISTORY_CAPACITY",
]
