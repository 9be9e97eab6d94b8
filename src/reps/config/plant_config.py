"""
Main plant configuration class that integrates all configuration components.

The plant itself takes no configuration: its operations receive thresholds,
paths and encodings as arguments. The analysis and storage sections hold the
values a driver passes to those calls, as in ``examples/basic_usage.py``.
Only the monitoring section acts on the library, by configuring the ``reps``
logger.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import codecs
import logging
import os

from ..exceptions import ConfigurationError
from .base import BaseConfig, ConfigValidationResult, ValidationLevel


@dataclass
class MonitoringConfig:
    """Configuration for logging and diagnostics."""
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> ConfigValidationResult:
        """Validate monitoring configuration."""
        result = ConfigValidationResult(is_valid=True)

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level not in valid_log_levels:
            result.add_error(f"Invalid log level: {self.log_level}")

        return result


@dataclass
class AnalysisConfig:
    """Configuration for issue detection."""
    issue_threshold: float = 50.0
    filter_hour: Optional[int] = None

    def validate(self) -> ConfigValidationResult:
        """Validate analysis configuration."""
        result = ConfigValidationResult(is_valid=True)

        if self.issue_threshold < 0:
            result.add_warning(
                f"Negative issue threshold flags only malfunctions: {self.issue_threshold}"
            )

        if self.filter_hour is not None and not 0 <= self.filter_hour <= 23:
            result.add_error(f"Filter hour must be between 0 and 23, got {self.filter_hour}")

        return result


@dataclass
class StorageConfig:
    """Configuration for the plant data file."""
    data_file: str = "data.csv"
    encoding: str = "utf-8"

    def validate(self) -> ConfigValidationResult:
        """Validate storage configuration."""
        result = ConfigValidationResult(is_valid=True)

        if not self.data_file:
            result.add_error("Data file cannot be empty")

        if not self.encoding:
            result.add_error("Encoding cannot be empty")
        else:
            try:
                codecs.lookup(self.encoding)
            except LookupError:
                result.add_error(f"Unknown encoding: {self.encoding}")

        return result


@dataclass
class PlantConfig(BaseConfig):
    """Main plant configuration class."""

    name: str = "Renewable Energy Plant"
    description: str = ""

    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    validation_level: ValidationLevel = ValidationLevel.STRICT
    config_version: str = "1.0"

    def __post_init__(self):
        """Initialize after dataclass creation."""
        super().__init__(self.validation_level)
        self._setup_logging()

    def _setup_logging(self):
        """Setup logging based on monitoring configuration."""
        logger = logging.getLogger("reps")
        level = getattr(logging, self.monitoring.log_level, None)
        if isinstance(level, int):
            logger.setLevel(level)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # Console handler
        if not logger.handlers:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        # File handler if specified, once per file
        if self.monitoring.log_file and not self._has_file_handler(logger):
            file_handler = logging.FileHandler(self.monitoring.log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    def _has_file_handler(self, logger: logging.Logger) -> bool:
        """Check whether the configured log file is already attached."""
        log_path = os.path.abspath(self.monitoring.log_file)
        return any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path
            for h in logger.handlers
        )

    def validate(self) -> ConfigValidationResult:
        """Validate the entire plant configuration."""
        result = ConfigValidationResult(is_valid=True)

        if not self.name:
            result.add_error("Plant name cannot be empty")

        components = [
            ("monitoring", self.monitoring),
            ("analysis", self.analysis),
            ("storage", self.storage)
        ]

        for component_name, component in components:
            result.extend(component.validate(), prefix=f"{component_name}: ")

        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "monitoring": {
                "log_level": self.monitoring.log_level,
                "log_file": self.monitoring.log_file
            },
            "analysis": {
                "issue_threshold": self.analysis.issue_threshold,
                "filter_hour": self.analysis.filter_hour
            },
            "storage": {
                "data_file": self.storage.data_file,
                "encoding": self.storage.encoding
            },
            "validation_level": self.validation_level.value,
            "config_version": self.config_version
        }

    @staticmethod
    def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
        """Get a nested section, which must be a mapping when present."""
        section = data.get(key) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"Section '{key}' must be a mapping, got {type(section).__name__}"
            )
        return section

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlantConfig':
        """Create configuration from dictionary.

        Raises:
            ConfigurationError: if a section or value has the wrong shape.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )

        monitoring_data = cls._section(data, "monitoring")
        monitoring = MonitoringConfig(
            log_level=monitoring_data.get("log_level", "INFO"),
            log_file=monitoring_data.get("log_file")
        )

        analysis_data = cls._section(data, "analysis")
        try:
            issue_threshold = float(analysis_data.get("issue_threshold", 50.0))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid issue threshold: {e}") from e
        filter_hour = analysis_data.get("filter_hour")
        if filter_hour is not None and (isinstance(filter_hour, bool) or not isinstance(filter_hour, int)):
            raise ConfigurationError(f"Filter hour must be an integer, got {filter_hour!r}")
        analysis = AnalysisConfig(issue_threshold=issue_threshold, filter_hour=filter_hour)

        storage_data = cls._section(data, "storage")
        storage = StorageConfig(
            data_file=storage_data.get("data_file", "data.csv"),
            encoding=storage_data.get("encoding", "utf-8")
        )

        try:
            validation_level = ValidationLevel(data.get("validation_level", "strict"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid validation level: {e}") from e

        return cls(
            name=data.get("name", "Renewable Energy Plant"),
            description=data.get("description", ""),
            monitoring=monitoring,
            analysis=analysis,
            storage=storage,
            validation_level=validation_level,
            config_version=data.get("config_version", "1.0")
        )

    def validate_and_log(self) -> bool:
        """Validate configuration and log results.

        Raises:
            ConfigurationError: if validation fails at the strict level.
        """
        result = self.validate()

        logger = logging.getLogger("reps.config")

        if result.is_valid:
            logger.info("Configuration validation passed")
        elif self.validation_level != ValidationLevel.PERMISSIVE:
            logger.error("Configuration validation failed")
            for error in result.errors:
                logger.error(f"Validation error: {error}")

        for warning in result.warnings:
            logger.warning(f"Validation warning: {warning}")

        if not result.is_valid and self.validation_level == ValidationLevel.STRICT:
            raise ConfigurationError("; ".join(result.errors))

        return result.is_valid or self.validation_level == ValidationLevel.PERMISSIVE
