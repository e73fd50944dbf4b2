"""
Bounded in-memory history of recent ticks for charting.
"""

from typing import List, Dict, Any
from dataclasses import dataclass, asdict, fields
from collections import deque
import csv
import threading

import numpy as np


DEFAULT_HISTORY_CAPACITY = 100


@dataclass(frozen=True)
class HistorySample:
    """One chart point."""
    time: float
    setpoint: float
    value: float
    output: float
    manual_input: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


HISTORY_COLUMNS = [f.name for f in fields(HistorySample)]


class HistoryBuffer:
    """
    Ring buffer of HistorySample rows.

    Once full, each append evicts the oldest sample. Reads and writes are
    serialized so a chart thread can sample the buffer while the loop runs.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY):
        """
        Initialize history buffer.

        Args:
            capacity: Maximum number of samples retained
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")

        self._capacity = capacity
        self._buffer: deque = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, sample: HistorySample) -> None:
        """Add a sample, evicting the oldest if full."""
        with self._lock:
            self._buffer.append(sample)

    def get_all(self) -> List[HistorySample]:
        """Get all samples, oldest first."""
        with self._lock:
            return list(self._buffer)

    def get_last(self, n: int) -> List[HistorySample]:
        """Get the last n samples."""
        if n <= 0:
            return []
        with self._lock:
            return list(self._buffer)[-n:]

    def column(self, name: str) -> np.ndarray:
        """
        Get one field across all samples as a numpy array.

        Args:
            name: One of time, setpoint, value, output, manual_input
        """
        if name not in HISTORY_COLUMNS:
            raise ValueError(f"Unknown history column: {name!r}")
        with self._lock:
            return np.array([getattr(s, name) for s in self._buffer], dtype=float)

    def clear(self) -> None:
        """Drop all samples."""
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    @property
    def is_full(self) -> bool:
        """Check if buffer is at capacity."""
        with self._lock:
            return len(self._buffer) >= self._capacity

    def to_csv(self, file_path: str) -> None:
        """
        Export the current window to a CSV file.

        Args:
            file_path: Output file path
        """
        samples = self.get_all()

        with open(file_path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=HISTORY_COLUMNS)
            writer.writeheader()
            writer.writerows(s.to_dict() for s in samples)
