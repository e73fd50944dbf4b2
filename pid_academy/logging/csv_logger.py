"""
Per-tick CSV log of a simulation session.

One row per tick: the controller terms, the plant value and drive, the
manual input and the running scores. Rows are held in memory and written
in blocks so the tick path rarely touches disk.
"""

from typing import TYPE_CHECKING, List, Optional
from pathlib import Path
import csv
import time
import threading

if TYPE_CHECKING:
    from pid_academy.simulation.simulation_loop import TickResult


TICK_LOG_COLUMNS = [
    'tick', 'time', 'plant', 'difficulty', 'setpoint', 'value', 'drive',
    'output', 'p_term', 'i_term', 'd_term', 'error', 'manual_input',
    'stability_score', 'speed_score', 'accuracy_score', 'overall_score',
    'grade', 'xp_earned',
]


def tick_row(result: 'TickResult', tick: int, plant: str, difficulty: str) -> list:
    """Flatten a TickResult into a row ordered like TICK_LOG_COLUMNS."""
    return [
        tick,
        result.time,
        plant,
        difficulty,
        result.setpoint,
        result.value,
        result.state.drive,
        result.output,
        result.p_term,
        result.i_term,
        result.d_term,
        result.error,
        result.manual_input,
        result.stability_score,
        result.speed_score,
        result.accuracy_score,
        result.overall_score,
        result.grade,
        result.xp_earned,
    ]


class TickLogger:
    """
    Buffered CSV writer for TickResult rows.

    The header is written on open. Buffered rows go to disk once
    ``buffer_size`` rows are pending or ``flush_interval`` seconds have
    passed since the last write, and always on ``flush`` or ``close``.

    Example:
        >>> with TickLogger("run.csv") as log:
        ...     log.log(result, tick=0, plant="car", difficulty="easy")
    """

    def __init__(
        self,
        file_path: str,
        buffer_size: int = 60,
        flush_interval: float = 1.0
    ):
        """
        Args:
            file_path: Output CSV path (parent directories are created)
            buffer_size: Pending rows that trigger a write (60 is about
                         one second of ticks)
            flush_interval: Maximum seconds a row may wait in memory
        """
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        if flush_interval <= 0:
            raise ValueError("flush_interval must be positive")

        self._file_path = Path(file_path)
        self._buffer_size = buffer_size
        self._flush_interval = flush_interval

        self._lock = threading.Lock()
        self._pending: List[list] = []
        self._rows_logged = 0
        self._rows_written = 0

        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self._file_path, 'w', newline='')
        self._writer = csv.writer(self._file)
        self._writer.writerow(TICK_LOG_COLUMNS)
        self._file.flush()
        self._last_write = time.monotonic()
        self._closed = False

    def log(self, result: 'TickResult', tick: int, plant: str, difficulty: str) -> None:
        """
        Queue one tick.

        Args:
            result: Output of SimulationLoop.tick
            tick: Tick counter of the loop
            plant: Active plant name
            difficulty: Active difficulty name

        Raises:
            RuntimeError: If the logger has been closed
        """
        if self._closed:
            raise RuntimeError("Logger is closed")

        row = tick_row(result, tick, plant, difficulty)
        with self._lock:
            self._pending.append(row)
            self._rows_logged += 1
            due = (
                len(self._pending) >= self._buffer_size or
                time.monotonic() - self._last_write >= self._flush_interval
            )

        if due:
            self.flush()

    def flush(self) -> None:
        """
        Write pending rows.

        Raises:
            RuntimeError: If the write fails; the rows stay pending
        """
        with self._lock:
            if self._closed or not self._pending:
                return
            rows, self._pending = self._pending, []
            self._last_write = time.monotonic()

        try:
            self._writer.writerows(rows)
            self._file.flush()
        except OSError as e:
            with self._lock:
                self._pending[:0] = rows
            raise RuntimeError(f"Failed to write tick log {self._file_path}: {e}") from e

        with self._lock:
            self._rows_written += len(rows)

    def close(self) -> None:
        """Write pending rows and close the file."""
        if self._closed:
            return
        self.flush()
        with self._lock:
            self._closed = True
            self._file.close()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def rows_logged(self) -> int:
        """Ticks accepted, written or pending."""
        return self._rows_logged

    @property
    def rows_written(self) -> int:
        """Ticks already on disk."""
        return self._rows_written

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
