"""
Tests for readings and energy sources.

Covers value semantics of readings, variant-preserving rebuilds and
the merge laws between sources of the same unit.
"""

import sys
from pathlib import Path
import unittest
from datetime import datetime, timedelta, timezone

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from reps.exceptions import SourceMismatchError, ValidationError, ValidationTypeError, ValidationRangeError
from reps.models import Reading
from reps.sources import (
    EnergySource, SolarPanel, WindTurbine, HydropowerPlant, create_source
)


T0 = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


def reading(minutes: int, output: float) -> Reading:
    return Reading(T0 + timedelta(minutes=minutes), output)


class TestReading(unittest.TestCase):
    """Tests for the reading value type."""

    def test_equality_uses_both_fields(self):
        self.assertEqual(reading(0, 1.0), reading(0, 1.0))
        self.assertNotEqual(reading(0, 1.0), reading(0, 2.0))
        self.assertNotEqual(reading(0, 1.0), reading(1, 1.0))

    def test_naive_timestamp_is_utc(self):
        r = Reading(datetime(2024, 5, 1, 10, 0), 1)
        self.assertEqual(r.timestamp, T0)
        self.assertEqual(r.timestamp.tzinfo, timezone.utc)
        self.assertIsInstance(r.output, float)

    def test_other_zone_normalized_to_utc(self):
        cet = timezone(timedelta(hours=2))
        r = Reading(datetime(2024, 5, 1, 12, 0, tzinfo=cet), 1.0)
        self.assertEqual(r.timestamp.hour, 10)
        self.assertEqual(r.timestamp.tzinfo, timezone.utc)

    def test_is_immutable(self):
        r = reading(0, 1.0)
        with self.assertRaises(AttributeError):
            r.output = 2.0

    def test_rejects_invalid_values(self):
        with self.assertRaises(ValidationTypeError):
            Reading("2024-05-01", 1.0)
        with self.assertRaises(ValidationTypeError):
            Reading(T0, "1.0")
        with self.assertRaises(ValidationTypeError):
            Reading(T0, True)
        with self.assertRaises(ValidationRangeError):
            Reading(T0, float("nan"))

    def test_rejects_non_finite_outputs(self):
        for value in (float("inf"), float("-inf"), 10 ** 400):
            with self.subTest(value=value):
                with self.assertRaises(ValidationRangeError):
                    Reading(T0, value)
        self.assertEqual(Reading(T0, 10 ** 20).output, 1e20)


class TestEnergySource(unittest.TestCase):
    """Tests for energy source construction and rebuilds."""

    def test_total_output(self):
        panel = SolarPanel("SP1", [reading(0, 10.0), reading(60, 20.0)])
        self.assertEqual(panel.total_output, 30.0)
        self.assertEqual(SolarPanel("SP2").total_output, 0)

    def test_readings_are_stored_as_tuple(self):
        readings = [reading(0, 1.0)]
        panel = SolarPanel("SP1", readings)
        readings.append(reading(1, 2.0))
        self.assertIsInstance(panel.readings, tuple)
        self.assertEqual(len(panel.readings), 1)

    def test_source_types(self):
        self.assertEqual(SolarPanel("a").source_type, "Solar")
        self.assertEqual(WindTurbine("a").source_type, "Wind")
        self.assertEqual(HydropowerPlant("a").source_type, "Hydropower")

    def test_base_class_is_abstract(self):
        with self.assertRaises(TypeError):
            EnergySource("X1")

    def test_variants_with_same_data_differ(self):
        self.assertNotEqual(SolarPanel("X1"), WindTurbine("X1"))

    def test_with_readings_preserves_variant_and_flag(self):
        for cls in (SolarPanel, WindTurbine, HydropowerPlant):
            source = cls("X1", [reading(0, 1.0)], malfunctioning=True)
            rebuilt = source.with_readings([reading(5, 3.0)])
            self.assertIs(type(rebuilt), cls)
            self.assertEqual(rebuilt.id, "X1")
            self.assertTrue(rebuilt.malfunctioning)
            self.assertEqual(rebuilt.readings, (reading(5, 3.0),))
            # original untouched
            self.assertEqual(source.readings, (reading(0, 1.0),))

    def test_with_malfunction_preserves_variant(self):
        turbine = WindTurbine("WT1", [reading(0, 1.0)])
        broken = turbine.with_malfunction()
        self.assertIsInstance(broken, WindTurbine)
        self.assertTrue(broken.malfunctioning)
        self.assertEqual(broken.readings, turbine.readings)
        self.assertFalse(turbine.malfunctioning)

    def test_invalid_construction(self):
        with self.assertRaises(ValidationError):
            SolarPanel("")
        with self.assertRaises(ValidationError):
            SolarPanel("SP,1")
        with self.assertRaises(ValidationError):
            SolarPanel(" SP1")
        with self.assertRaises(ValidationTypeError):
            SolarPanel("SP1", [(T0, 1.0)])
        with self.assertRaises(ValidationTypeError):
            SolarPanel("SP1", [], malfunctioning="yes")

    def test_create_source(self):
        source = create_source("Hydropower", "HP1", [reading(0, 2.0)])
        self.assertIsInstance(source, HydropowerPlant)
        self.assertEqual(source.total_output, 2.0)
        with self.assertRaises(ValidationError):
            create_source("Nuclear", "N1")


class TestMerge(unittest.TestCase):
    """Tests for merging sources of the same unit."""

    def setUp(self):
        self.a = SolarPanel("SP1", [reading(0, 1.0), reading(1, 2.0)])
        self.b = SolarPanel("SP1", [reading(1, 2.0), reading(2, 3.0)])

    def test_merge_union_in_first_occurrence_order(self):
        result = self.a.merge(self.b)
        self.assertTrue(result.success)
        self.assertIsNone(result.error)
        self.assertIsInstance(result.source, SolarPanel)
        self.assertEqual(
            result.source.readings,
            (reading(0, 1.0), reading(1, 2.0), reading(2, 3.0))
        )

    def test_merge_is_commutative_on_reading_set(self):
        ab = self.a.merge(self.b).unwrap()
        ba = self.b.merge(self.a).unwrap()
        self.assertEqual(set(ab.readings), set(ba.readings))

    def test_merge_is_idempotent(self):
        self.assertEqual(self.a.merge(self.a).unwrap().readings, self.a.readings)

    def test_merge_keeps_malfunction(self):
        merged = self.a.merge(self.b.with_malfunction()).unwrap()
        self.assertTrue(merged.malfunctioning)

    def test_merge_different_id_fails(self):
        result = self.a.merge(SolarPanel("SP2", [reading(0, 1.0)]))
        self.assertFalse(result.success)
        self.assertIsNone(result.source)
        self.assertIsInstance(result.error, SourceMismatchError)
        with self.assertRaises(SourceMismatchError):
            result.unwrap()

    def test_merge_different_type_fails(self):
        result = self.a.merge(WindTurbine("SP1", [reading(0, 1.0)]))
        self.assertFalse(result.success)
        with self.assertRaises(SourceMismatchError):
            result.unwrap()


if __name__ == "__main__":
    unittest.main()
