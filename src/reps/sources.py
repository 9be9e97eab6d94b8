"""Renewable energy source implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterable, Optional, Tuple, Type

from .exceptions import SourceMismatchError, ValidationTypeError
from .models import Reading
from .validation import SourceValidator, Validator, validate_source_type

@dataclass(frozen=True)
class EnergySource(ABC):
    """Abstract base class for all renewable energy sources.

    Sources are immutable values: every transformation builds a new
    source of the same concrete type through :meth:`_rebuild`.
    """
    id: str
    readings: Tuple[Reading, ...] = field(default_factory=tuple)
    malfunctioning: bool = False

    source_type: ClassVar[str] = ""

    def __post_init__(self):
        SourceValidator.validate_id(self.id)
        Validator.validate_type(self.malfunctioning, bool)

        readings = tuple(self.readings)
        for reading in readings:
            if not isinstance(reading, Reading):
                raise ValidationTypeError(
                    f"Expected type Reading, got {type(reading).__name__}"
                )
        object.__setattr__(self, "readings", readings)

    @abstractmethod
    def _rebuild(self, readings: Tuple[Reading, ...], malfunctioning: bool) -> "EnergySource":
        """Build a source of this concrete type with new state."""
        pass

    @property
    def total_output(self) -> float:
        """Sum of all reading outputs."""
        return sum((r.output for r in self.readings), 0.0)

    @property
    def outputs(self) -> Tuple[float, ...]:
        """Reading outputs in stored order."""
        return tuple(r.output for r in self.readings)

    def with_readings(self, readings: Iterable[Reading]) -> "EnergySource":
        """Copy of this source holding ``readings`` instead."""
        return self._rebuild(tuple(readings), self.malfunctioning)

    def with_malfunction(self, malfunctioning: bool = True) -> "EnergySource":
        """Copy of this source with the malfunction flag set to ``malfunctioning``."""
        return self._rebuild(self.readings, malfunctioning)

    def is_same_unit(self, other: "EnergySource") -> bool:
        """Check whether ``other`` has the same id and source type."""
        return other.id == self.id and other.source_type == self.source_type

    def merge(self, other: "EnergySource") -> "MergeResult":
        """Merge readings from another source of the same unit.

        The merged readings keep first-occurrence order with duplicates
        removed. The merged source is malfunctioning if either side is.
        """
        if not self.is_same_unit(other):
            return MergeResult(
                success=False,
                error=SourceMismatchError(
                    f"Cannot merge {other.source_type} ({other.id}) "
                    f"into {self.source_type} ({self.id})"
                )
            )

        readings = tuple(dict.fromkeys(self.readings + other.readings))
        merged = self._rebuild(readings, self.malfunctioning or other.malfunctioning)
        return MergeResult(success=True, source=merged)

@dataclass(frozen=True)
class MergeResult:
    """Outcome of merging two energy sources."""
    success: bool
    source: Optional[EnergySource] = None
    error: Optional[SourceMismatchError] = None

    def unwrap(self) -> EnergySource:
        """Return the merged source or raise the mismatch error."""
        if not self.success:
            raise self.error
        return self.source

class SolarPanel(EnergySource):
    """Solar panel generation unit."""

    source_type = "Solar"

    def _rebuild(self, readings: Tuple[Reading, ...], malfunctioning: bool) -> "SolarPanel":
        return SolarPanel(self.id, readings, malfunctioning)

class WindTurbine(EnergySource):
    """Wind turbine generation unit."""

    source_type = "Wind"

    def _rebuild(self, readings: Tuple[Reading, ...], malfunctioning: bool) -> "WindTurbine":
        return WindTurbine(self.id, readings, malfunctioning)

class HydropowerPlant(EnergySource):
    """Hydropower generation unit."""

    source_type = "Hydropower"

    def _rebuild(self, readings: Tuple[Reading, ...], malfunctioning: bool) -> "HydropowerPlant":
        return HydropowerPlant(self.id, readings, malfunctioning)

SOURCE_TYPES: Dict[str, Type[EnergySource]] = {
    cls.source_type: cls for cls in (SolarPanel, WindTurbine, HydropowerPlant)
}

def create_source(
    source_type: str,
    source_id: str,
    readings: Iterable[Reading] = (),
    malfunctioning: bool = False
) -> EnergySource:
    """Factory function to create an energy source from its type tag."""
    validate_source_type(source_type)
    return SOURCE_TYPES[source_type](source_id, tuple(readings), malfunctioning)
