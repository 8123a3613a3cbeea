"""
Append-only time-series log.

Stores (time, values) samples in insertion order. Callers append with
non-decreasing time; the log itself does not check it and never recomputes
anything it was given.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class LogSample:
    """One logged record: the time column plus the remaining columns."""
    time: float
    values: tuple[float, ...]

    def as_row(self) -> list:
        return [self.time, *self.values]


class TimeSeriesLog:
    """Ordered store of LogSample records."""

    def __init__(self):
        self._times: List[float] = []
        self._rows: List[tuple[float, ...]] = []

    def clear(self) -> None:
        """Drop every sample."""
        self._times.clear()
        self._rows.clear()

    def append(self, time: float, values: Sequence[float]) -> None:
        """Add a sample after the last one."""
        self._times.append(time)
        self._rows.append(tuple(values))

    def count(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[LogSample]:
        for t, row in zip(self._times, self._rows):
            yield LogSample(t, row)

    def __getitem__(self, index: int) -> LogSample:
        return LogSample(self._times[index], self._rows[index])

    @property
    def times(self) -> List[float]:
        """Copy of the time column."""
        return list(self._times)

    def last(self) -> Optional[LogSample]:
        """Most recent sample, or None when empty."""
        if not self._rows:
            return None
        return self[-1]

    def export_rows(self, header: Optional[Sequence[str]] = None) -> List[list]:
        """
        Rows for a tabular writer.

        Args:
            header: Column names. When given (and non-empty) it is the first
                row returned.

        Returns:
            [header?] + [[time, *values], ...] in log order.
        """
        rows: List[list] = []
        if header:
            rows.append(list(header))
        rows.extend([t, *row] for t, row in zip(self._times, self._rows))
        return rows

    def to_array(self) -> np.ndarray:
        """
        Samples as a float array of shape (n, 1 + n_values).

        Empty logs give shape (0, 0).
        """
        return rows_to_array(self.export_rows())


def rows_to_array(rows: List[list]) -> np.ndarray:
    """Convert export_rows() output (without header) to a float array."""
    if not rows:
        return np.empty((0, 0), dtype=np.float64)
    return np.array(rows, dtype=np.float64)
