"""Tests for plant configuration and validation helpers."""

import logging
import sys
import tempfile
from pathlib import Path
import unittest

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from reps.config import (
    AnalysisConfig, ConfigFormat, ConfigValidationResult, MonitoringConfig,
    PlantConfig, StorageConfig, ValidationLevel
)
from reps.exceptions import ConfigurationError, ValidationError
from reps.validation import validate_source_type


class TestPlantConfig(unittest.TestCase):
    """Test suite for plant configuration."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def test_defaults_are_valid(self):
        config = PlantConfig()
        result = config.validate()
        self.assertTrue(result.is_valid)
        self.assertEqual(config.analysis.issue_threshold, 50.0)
        self.assertEqual(config.storage.data_file, "data.csv")
        self.assertTrue(config.validate_and_log())

    def test_sets_package_log_level(self):
        PlantConfig(monitoring=MonitoringConfig(log_level="DEBUG"))
        self.assertEqual(logging.getLogger("reps").level, logging.DEBUG)
        PlantConfig()
        self.assertEqual(logging.getLogger("reps").level, logging.INFO)

    def test_invalid_sections_are_prefixed(self):
        config = PlantConfig(
            name="",
            monitoring=MonitoringConfig(log_level="LOUD"),
            analysis=AnalysisConfig(filter_hour=24),
            storage=StorageConfig(data_file="")
        )
        result = config.validate()
        self.assertFalse(result.is_valid)
        self.assertIn("Plant name cannot be empty", result.errors)
        self.assertIn("monitoring: Invalid log level: LOUD", result.errors)
        self.assertIn("analysis: Filter hour must be between 0 and 23, got 24", result.errors)
        self.assertIn("storage: Data file cannot be empty", result.errors)

    def test_negative_threshold_warns(self):
        result = PlantConfig(analysis=AnalysisConfig(issue_threshold=-1.0)).validate()
        self.assertTrue(result.is_valid)
        self.assertEqual(len(result.warnings), 1)

    def test_validation_levels(self):
        strict = PlantConfig(name="")
        with self.assertRaises(ConfigurationError):
            strict.validate_and_log()

        warn = PlantConfig(name="", validation_level=ValidationLevel.WARN)
        self.assertFalse(warn.validate_and_log())

        permissive = PlantConfig(name="", validation_level=ValidationLevel.PERMISSIVE)
        self.assertTrue(permissive.validate_and_log())

    def test_dict_round_trip(self):
        config = PlantConfig(
            name="Test Plant",
            analysis=AnalysisConfig(issue_threshold=12.5, filter_hour=22),
            storage=StorageConfig(data_file="plant.csv"),
            validation_level=ValidationLevel.WARN
        )
        restored = PlantConfig.from_dict(config.to_dict())
        self.assertEqual(restored.to_dict(), config.to_dict())
        self.assertEqual(restored.validation_level, ValidationLevel.WARN)

    def test_from_dict_invalid_level(self):
        with self.assertRaises(ConfigurationError):
            PlantConfig.from_dict({"validation_level": "sloppy"})

    def test_file_round_trip(self):
        config = PlantConfig(name="File Plant", analysis=AnalysisConfig(issue_threshold=7.0))
        for fmt, suffix in ((ConfigFormat.YAML, ".yaml"), (ConfigFormat.JSON, ".json")):
            with self.subTest(fmt=fmt):
                path = Path(self.tmp.name) / f"config{suffix}"
                config.save_to_file(path, format=fmt)
                loaded = PlantConfig.load_from_file(path)
                self.assertEqual(loaded.name, "File Plant")
                self.assertEqual(loaded.analysis.issue_threshold, 7.0)

    def test_load_missing_or_unsupported(self):
        with self.assertRaises(FileNotFoundError):
            PlantConfig.load_from_file(Path(self.tmp.name) / "missing.yaml")
        path = Path(self.tmp.name) / "config.txt"
        path.write_text("name: x")
        with self.assertRaises(ValueError):
            PlantConfig.load_from_file(path)

    def test_load_malformed_files(self):
        bad_files = {
            "list.yaml": "- a\n- b\n",
            "threshold.yaml": "analysis:\n  issue_threshold: abc\n",
            "unclosed.yaml": "name: [unclosed\n",
            "section.yaml": "storage:\n  - data.csv\n",
            "hour.yaml": "analysis:\n  filter_hour: noon\n",
            "broken.json": '{"name": ',
        }
        for name, text in bad_files.items():
            with self.subTest(name):
                path = Path(self.tmp.name) / name
                path.write_text(text, encoding="utf-8")
                with self.assertRaises(ConfigurationError):
                    PlantConfig.load_from_file(path)

    def test_empty_file_gives_defaults(self):
        path = Path(self.tmp.name) / "empty.yaml"
        path.write_text("", encoding="utf-8")
        self.assertEqual(PlantConfig.load_from_file(path).to_dict(), PlantConfig().to_dict())

    def test_unknown_encoding_is_invalid(self):
        result = StorageConfig(encoding="utf-9").validate()
        self.assertFalse(result.is_valid)
        self.assertIn("Unknown encoding: utf-9", result.errors)
        self.assertTrue(StorageConfig(encoding="latin-1").validate().is_valid)

    def test_log_file_handler_added_once(self):
        log_path = Path(self.tmp.name) / "reps.log"
        logger = logging.getLogger("reps")

        def file_handlers():
            return [
                h for h in logger.handlers
                if isinstance(h, logging.FileHandler) and h.baseFilename == str(log_path)
            ]

        def detach():
            for handler in file_handlers():
                logger.removeHandler(handler)
                handler.close()

        self.addCleanup(detach)
        config = PlantConfig(monitoring=MonitoringConfig(log_file=str(log_path)))
        config.merge(PlantConfig(name="Other", monitoring=MonitoringConfig(log_file=str(log_path))))
        PlantConfig.from_dict(config.to_dict())
        self.assertEqual(len(file_handlers()), 1)

    def test_merge(self):
        base = PlantConfig(name="Base", storage=StorageConfig(data_file="a.csv"))
        override = PlantConfig(name="Override")
        merged = base.merge(override)
        self.assertEqual(merged.name, "Override")
        self.assertEqual(merged.storage.data_file, "data.csv")


class TestValidation(unittest.TestCase):

    def test_validation_result_extend(self):
        result = ConfigValidationResult(is_valid=True)
        other = ConfigValidationResult(is_valid=True)
        other.add_error("bad")
        other.add_warning("odd")
        result.extend(other, prefix="x: ")
        self.assertFalse(result.is_valid)
        self.assertEqual(result.errors, ["x: bad"])
        self.assertEqual(result.warnings, ["x: odd"])

    def test_validate_source_type(self):
        for tag in ("Solar", "Wind", "Hydropower"):
            validate_source_type(tag)
        with self.assertRaises(ValidationError):
            validate_source_type("solar")


if __name__ == "__main__":
    unittest.main()
