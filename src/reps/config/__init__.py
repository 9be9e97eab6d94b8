"""
Configuration package for the Renewable Energy Plant System.
Provides validatable, file-backed configuration management.
"""

from .base import (
    BaseConfig,
    ConfigFormat,
    ValidationLevel,
    ConfigValidationResult
)

from .plant_config import (
    MonitoringConfig,
    AnalysisConfig,
    StorageConfig,
    PlantConfig
)

__all__ = [
    # Base configuration classes
    "BaseConfig",
    "ConfigFormat",
    "ValidationLevel",
    "ConfigValidationResult",

    # Plant configuration components
    "MonitoringConfig",
    "AnalysisConfig",
    "StorageConfig",

    # Main configuration class
    "PlantConfig"
]
