"""Core renewable energy plant implementation."""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, TextIO, Union

from .analysis import DataAnalysis
from .events import IssueAlert, IssueType
from .exceptions import SourceMismatchError, StorageError
from .models import Reading, StatisticsResult
from .sources import EnergySource
from .storage import StorageResult, load_sources, save_sources

logger = logging.getLogger("reps.plant")


class RenewableEnergyPlant:
    """Immutable aggregate of renewable energy sources.

    Every operation that changes the plant returns a new plant and leaves
    this one untouched.
    """

    def __init__(self, sources: Iterable[EnergySource] = ()):
        """Initialize plant with its energy sources, in order."""
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple:
        """Energy sources in plant order."""
        return self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[EnergySource]:
        return iter(self._sources)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RenewableEnergyPlant):
            return NotImplemented
        return self._sources == other._sources

    def __hash__(self) -> int:
        return hash(self._sources)

    def __repr__(self) -> str:
        return f"RenewableEnergyPlant({list(self._sources)!r})"

    def _map_sources(
        self,
        transform: Callable[[EnergySource], EnergySource]
    ) -> "RenewableEnergyPlant":
        return RenewableEnergyPlant(transform(s) for s in self._sources)

    def _filter_readings(
        self,
        predicate: Callable[[Reading], bool]
    ) -> "RenewableEnergyPlant":
        return self._map_sources(
            lambda s: s.with_readings(r for r in s.readings if predicate(r))
        )

    # Composition

    def add_energy_source(self, source: EnergySource) -> "RenewableEnergyPlant":
        """Add a source in front of the existing ones."""
        logger.debug(f"Adding {source.source_type} ({source.id})")
        return RenewableEnergyPlant((source,) + self._sources)

    def remove_energy_source(self, source_id: str) -> "RenewableEnergyPlant":
        """Remove every source with the given id."""
        return RenewableEnergyPlant(s for s in self._sources if s.id != source_id)

    def merge_energy_source(self, source: EnergySource) -> "RenewableEnergyPlant":
        """Merge a source into every source of the same unit.

        The source is added in front when no source shares its id.

        Raises:
            SourceMismatchError: if its id only belongs to other source types.
        """
        merged = False
        sources = []
        for existing in self._sources:
            if existing.is_same_unit(source):
                existing = existing.merge(source).unwrap()
                merged = True
            sources.append(existing)

        if merged:
            return RenewableEnergyPlant(sources)
        if self.search_by_id(source.id) is not None:
            raise SourceMismatchError(
                f"Id {source.id} is held by another source type than {source.source_type}"
            )
        return self.add_energy_source(source)

    # Queries

    def search_by_id(self, source_id: str) -> Optional[EnergySource]:
        """Find the first source with the given id."""
        return next((s for s in self._sources if s.id == source_id), None)

    def search_data(self, timestamp: datetime) -> List[Reading]:
        """Find readings of all sources taken at ``timestamp``."""
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return [
            r for s in self._sources for r in s.readings
            if r.timestamp == timestamp
        ]

    def total_energy_output(self) -> float:
        """Get total output of all sources."""
        return sum((s.total_output for s in self._sources), 0.0)

    # Transformations

    def adjust_energy_output(self, source_id: str, adjustment: float) -> "RenewableEnergyPlant":
        """Shift every reading of the matching sources by ``adjustment``."""
        def adjust(source: EnergySource) -> EnergySource:
            if source.id != source_id:
                return source
            return source.with_readings(
                r.with_output(r.output + adjustment) for r in source.readings
            )
        return self._map_sources(adjust)

    def set_malfunctioning(self, source_id: str, malfunctioning: bool = True) -> "RenewableEnergyPlant":
        """Set the malfunction flag of the matching sources."""
        return self._map_sources(
            lambda s: s.with_malfunction(malfunctioning) if s.id == source_id else s
        )

    def filter_by_hour(self, hour: int) -> "RenewableEnergyPlant":
        """Keep readings taken at the given UTC hour of day."""
        return self._filter_readings(lambda r: r.timestamp.hour == hour)

    def filter_by_day(self, day: int) -> "RenewableEnergyPlant":
        """Keep readings taken on the given UTC day of month."""
        return self._filter_readings(lambda r: r.timestamp.day == day)

    def filter_by_week(self, week: int) -> "RenewableEnergyPlant":
        """Keep readings taken in the given ISO week of the year."""
        return self._filter_readings(lambda r: r.timestamp.isocalendar()[1] == week)

    def filter_by_month(self, month: int) -> "RenewableEnergyPlant":
        """Keep readings taken in the given UTC month."""
        return self._filter_readings(lambda r: r.timestamp.month == month)

    def sort_data_by_timestamp(self) -> "RenewableEnergyPlant":
        """Sort each source's readings by timestamp (stable)."""
        return self._map_sources(
            lambda s: s.with_readings(sorted(s.readings, key=lambda r: r.timestamp))
        )

    # Analysis

    def analyze_data(self) -> List[StatisticsResult]:
        """Get output statistics for each source, in plant order."""
        return [DataAnalysis(s.outputs).all_stats() for s in self._sources]

    def detect_issues(self, threshold: float) -> List[EnergySource]:
        """Find sources with output below ``threshold`` or malfunctioning."""
        return [
            s for s in self._sources
            if s.total_output < threshold or s.malfunctioning
        ]

    # Reporting

    def alert_issues(self, threshold: float, stream: Optional[TextIO] = None) -> List[IssueAlert]:
        """Print an alert for every detected issue."""
        stream = sys.stdout if stream is None else stream
        alerts = []
        for source in self.detect_issues(threshold):
            if source.total_output < threshold:
                alerts.append(IssueAlert(
                    type=IssueType.LOW_OUTPUT,
                    source_type=source.source_type,
                    source_id=source.id,
                    total_output=source.total_output,
                    threshold=threshold
                ))
            if source.malfunctioning:
                alerts.append(IssueAlert(
                    type=IssueType.MALFUNCTION,
                    source_type=source.source_type,
                    source_id=source.id,
                    total_output=source.total_output
                ))

        if not alerts:
            print("No issues detected.", file=stream)
        for alert in alerts:
            logger.warning(alert.message)
            print(alert.message, file=stream)
        return alerts

    def display_status(self, stream: Optional[TextIO] = None) -> List[str]:
        """Print the total output of each source."""
        stream = sys.stdout if stream is None else stream
        lines = [
            f"{s.source_type} ({s.id}) has generated {s.total_output} units of energy."
            for s in self._sources
        ]
        for line in lines:
            print(line, file=stream)
        return lines

    def display_storage(self, stream: Optional[TextIO] = None) -> List[str]:
        """Print how many readings are stored overall and per source."""
        stream = sys.stdout if stream is None else stream
        total = sum(len(s.readings) for s in self._sources)
        lines = [f"Total storage: {total} entries."]
        lines.extend(
            f"{s.source_type} ({s.id}) has stored {len(s.readings)} entries of data."
            for s in self._sources
        )
        for line in lines:
            print(line, file=stream)
        return lines

    # Persistence

    def save_data_to_file(self, file_path: Union[str, Path], encoding: str = "utf-8") -> StorageResult:
        """Save all sources to a plant data file."""
        try:
            save_sources(self._sources, file_path, encoding=encoding)
        except StorageError as e:
            logger.error(f"Saving plant failed: {e}")
            return StorageResult(success=False, plant=self, message=str(e))

        logger.info(f"Saved {len(self._sources)} sources to {file_path}")
        return StorageResult(
            success=True,
            plant=self,
            message=f"Saved {len(self._sources)} sources to {file_path}"
        )

    def read_data_from_file(self, file_path: Union[str, Path], encoding: str = "utf-8") -> StorageResult:
        """Read sources from a file and add them in front of this plant's sources."""
        try:
            loaded = load_sources(file_path, encoding=encoding)
        except StorageError as e:
            logger.error(f"Reading plant data failed: {e}")
            return StorageResult(success=False, message=str(e))

        logger.info(f"Read {len(loaded)} sources from {file_path}")
        return StorageResult(
            success=True,
            plant=RenewableEnergyPlant(tuple(loaded) + self._sources),
            message=f"Read {len(loaded)} sources from {file_path}"
        )
