"""Data models for the Renewable Energy Plant System."""

from dataclasses import dataclass, astuple
from datetime import datetime, timezone
from typing import Optional, Tuple

from .validation import ReadingValidator

@dataclass(frozen=True)
class Reading:
    """A single timestamped energy output."""
    timestamp: datetime  # always UTC
    output: float

    def __post_init__(self):
        ReadingValidator.validate_timestamp(self.timestamp)
        ReadingValidator.validate_output(self.output)

        # Naive timestamps are taken to be UTC
        if self.timestamp.tzinfo is None:
            timestamp = self.timestamp.replace(tzinfo=timezone.utc)
        else:
            timestamp = self.timestamp.astimezone(timezone.utc)
        object.__setattr__(self, "timestamp", timestamp)
        object.__setattr__(self, "output", float(self.output))

    def with_output(self, output: float) -> "Reading":
        """Return a copy with a different output, same timestamp."""
        return Reading(self.timestamp, output)

@dataclass(frozen=True)
class StatisticsResult:
    """Summary statistics of one source's outputs.

    Either all five values are set or none of them are.
    """
    mean: Optional[float] = None
    median: Optional[float] = None
    mode: Optional[float] = None
    range: Optional[float] = None
    midrange: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        """True when computed from an empty sequence."""
        return self.mean is None

    def as_tuple(self) -> Tuple[Optional[float], ...]:
        """(mean, median, mode, range, midrange)."""
        return astuple(self)
