"""Renewable Energy Plant System (REPS) library initialization."""

from .core import RenewableEnergyPlant
from .models import Reading, StatisticsResult
from .sources import (
    EnergySource,
    SolarPanel,
    WindTurbine,
    HydropowerPlant,
    MergeResult,
    create_source
)
from .analysis import DataAnalysis
from .storage import PlantCodec, StorageResult
from .exceptions import REPSError, SourceMismatchError, ParseError, IOFailureError

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    "RenewableEnergyPlant",
    "Reading",
    "StatisticsResult",
    "EnergySource",
    "SolarPanel",
    "WindTurbine",
    "HydropowerPlant",
    "MergeResult",
    "create_source",
    "DataAnalysis",
    "PlantCodec",
    "StorageResult",
    "REPSError",
    "SourceMismatchError",
    "ParseError",
    "IOFailureError"
]
