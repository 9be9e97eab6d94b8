"""
Plain text persistence for renewable energy plants.

Each data line holds one energy source::

    sourceType, id, timestamp, output
    Solar, SP1, 2024-05-01T10:00:00Z,10.0|2024-05-01T11:00:00Z,20.0

The third field is a ``|`` separated list of ``timestamp,output`` pairs and
is empty for a source without readings. Timestamps are ISO-8601 UTC instants.
"""

import codecs
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Union, TYPE_CHECKING

from .exceptions import IOFailureError, ParseError, ValidationError
from .models import Reading
from .sources import EnergySource, SOURCE_TYPES, create_source

if TYPE_CHECKING:
    from .core import RenewableEnergyPlant

logger = logging.getLogger("reps.storage")

HEADER_COLUMNS = ("sourceType", "id", "timestamp", "output")
HEADER = ", ".join(HEADER_COLUMNS)
FIELD_SEPARATOR = ", "
READING_SEPARATOR = "|"


@dataclass
class StorageResult:
    """Result of a save or load operation."""
    success: bool
    plant: Optional["RenewableEnergyPlant"] = None
    message: str = ""


def format_timestamp(timestamp: datetime) -> str:
    """Render a timestamp as a UTC instant such as ``2024-05-01T10:00:00Z``."""
    return timestamp.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(text: str) -> datetime:
    """Parse a UTC instant written by :func:`format_timestamp`."""
    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    timestamp = datetime.fromisoformat(text)
    if timestamp.tzinfo is None:
        raise ValueError(f"timestamp has no UTC offset: {text}")
    return timestamp.astimezone(timezone.utc)


class PlantCodec:
    """Encodes energy sources to the plant text format and back."""

    def encode(self, sources: Iterable[EnergySource]) -> str:
        """Encode sources, header first, one line per source."""
        lines = [HEADER]
        lines.extend(self.encode_source(source) for source in sources)
        return "\n".join(lines) + "\n"

    def encode_source(self, source: EnergySource) -> str:
        """Encode a single source as one data line."""
        readings = READING_SEPARATOR.join(
            f"{format_timestamp(r.timestamp)},{r.output!r}" for r in source.readings
        )
        return FIELD_SEPARATOR.join((source.source_type, source.id, readings))

    def decode(self, text: str) -> List[EnergySource]:
        """Decode a whole file.

        Raises:
            ParseError: if the header or any data line is malformed.
        """
        lines = [
            (number, line) for number, line in enumerate(text.splitlines(), start=1)
            if line.strip()
        ]
        if not lines:
            raise ParseError("File is empty: missing header")

        header_number, header = lines[0]
        columns = tuple(c.strip() for c in header.split(","))
        if columns != HEADER_COLUMNS:
            raise ParseError(f"Line {header_number}: unexpected header: {header!r}")

        return [self.decode_line(line, number) for number, line in lines[1:]]

    def decode_line(self, line: str, line_number: int = 0) -> EnergySource:
        """Decode one data line into an energy source."""
        columns = [c.strip() for c in line.split(",", 2)]
        if len(columns) != 3:
            raise ParseError(
                f"Line {line_number}: expected 3 columns, got {len(columns)}"
            )

        source_type, source_id, readings_field = columns
        if source_type not in SOURCE_TYPES:
            raise ParseError(f"Line {line_number}: unknown source type {source_type!r}")

        readings = []
        if readings_field:
            for segment in readings_field.split(READING_SEPARATOR):
                readings.append(self._decode_reading(segment, line_number))

        try:
            return create_source(source_type, source_id, readings)
        except ValidationError as e:
            raise ParseError(f"Line {line_number}: {e}") from e

    @staticmethod
    def _decode_reading(segment: str, line_number: int) -> Reading:
        parts = segment.split(",")
        if len(parts) != 2:
            raise ParseError(
                f"Line {line_number}: malformed reading {segment.strip()!r}"
            )
        try:
            return Reading(parse_timestamp(parts[0]), float(parts[1].strip()))
        except (ValueError, ValidationError) as e:
            raise ParseError(
                f"Line {line_number}: invalid reading {segment.strip()!r}: {e}"
            ) from e


def save_sources(
    sources: Iterable[EnergySource],
    file_path: Union[str, Path],
    encoding: str = "utf-8"
) -> None:
    """Write sources to ``file_path``.

    Raises:
        IOFailureError: if the file cannot be written.
    """
    file_path = Path(file_path)
    content = PlantCodec().encode(sources)
    # checked before open() truncates an existing file
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise IOFailureError(f"Cannot write {file_path}: unknown encoding {encoding!r}") from e

    try:
        with open(file_path, "w", encoding=encoding, newline="\n") as f:
            f.write(content)
    except (OSError, UnicodeEncodeError) as e:
        raise IOFailureError(f"Cannot write {file_path}: {e}") from e
    logger.debug(f"Wrote {len(content)} characters to {file_path}")


def load_sources(
    file_path: Union[str, Path],
    encoding: str = "utf-8"
) -> List[EnergySource]:
    """Read sources from ``file_path`` in file order.

    Raises:
        IOFailureError: if the file cannot be read.
        ParseError: if the content is malformed.
    """
    file_path = Path(file_path)
    try:
        with open(file_path, "r", encoding=encoding) as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"Cannot decode {file_path} as {encoding}: {e}") from e
    except LookupError as e:
        raise IOFailureError(f"Cannot read {file_path}: unknown encoding {encoding!r}") from e
    except OSError as e:
        raise IOFailureError(f"Cannot read {file_path}: {e}") from e
    return PlantCodec().decode(text)
