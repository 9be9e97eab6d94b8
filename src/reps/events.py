"""Issue alert definitions for the Renewable Energy Plant System."""

from enum import Enum
from dataclasses import dataclass
from typing import Optional

class IssueType(str, Enum):
    """Types of source issues."""
    LOW_OUTPUT = "low_output"
    MALFUNCTION = "malfunction"

@dataclass(frozen=True)
class IssueAlert:
    """An issue raised against one energy source."""
    type: IssueType
    source_type: str
    source_id: str
    total_output: float
    threshold: Optional[float] = None

    @property
    def message(self) -> str:
        """Human readable alert line."""
        if self.type == IssueType.LOW_OUTPUT:
            return (
                f"Alert: {self.source_type} ({self.source_id}) has low energy "
                f"output: {self.total_output} units."
            )
        return f"Alert: {self.source_type} ({self.source_id}) is malfunctioning."
