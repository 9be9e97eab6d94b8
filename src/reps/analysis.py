"""Statistical analysis of energy output data."""

from typing import Iterable, Optional

import numpy as np

from .models import StatisticsResult

class DataAnalysis:
    """Descriptive statistics over a sequence of energy outputs.

    Every statistic is ``None`` when the sequence is empty.
    """

    def __init__(self, data: Iterable[float]):
        """Initialize analysis with the outputs to summarize."""
        self._data = np.asarray(list(data), dtype=float)

    def __len__(self) -> int:
        return int(self._data.size)

    @property
    def is_empty(self) -> bool:
        """Check whether there is nothing to analyze."""
        return self._data.size == 0

    def mean(self) -> Optional[float]:
        """Arithmetic mean."""
        if self.is_empty:
            return None
        return float(np.mean(self._data))

    def median(self) -> Optional[float]:
        """Middle value, or the average of the two central values."""
        if self.is_empty:
            return None
        return float(np.median(self._data))

    def mode(self) -> Optional[float]:
        """Most frequent value.

        Ties are broken by the smallest value: ``np.unique`` returns the
        values sorted and ``argmax`` picks the first maximum.
        """
        if self.is_empty:
            return None
        values, counts = np.unique(self._data, return_counts=True)
        return float(values[np.argmax(counts)])

    def range(self) -> Optional[float]:
        """Spread between the largest and smallest value."""
        if self.is_empty:
            return None
        return float(np.max(self._data) - np.min(self._data))

    def mid_range(self) -> Optional[float]:
        """Average of the largest and smallest value."""
        if self.is_empty:
            return None
        return float((np.max(self._data) + np.min(self._data)) / 2)

    def all_stats(self) -> StatisticsResult:
        """Get all statistics as one result."""
        if self.is_empty:
            return StatisticsResult()
        return StatisticsResult(
            mean=self.mean(),
            median=self.median(),
            mode=self.mode(),
            range=self.range(),
            midrange=self.mid_range()
        )
