"""
Basic usage example of the Renewable Energy Plant System library.
This example demonstrates core functionality including:
- Building sources from synthetic readings
- Composing a plant and reporting its status
- Saving and reading plant data files
- Filtering, sorting and analyzing readings
- Issue detection
"""

import random
from datetime import datetime, timedelta, timezone

from reps import RenewableEnergyPlant, Reading, SolarPanel, WindTurbine, HydropowerPlant
from reps.config import PlantConfig


def random_readings(start: datetime, count: int = 100):
    """Synthesize readings spread over the next few hours."""
    return [
        Reading(start + timedelta(seconds=random.randint(0, 10000)), random.random())
        for _ in range(count)
    ]


def print_readings(plant: RenewableEnergyPlant) -> None:
    for source in plant:
        print(f"Energy outputs for {source.source_type} ({source.id}):")
        for reading in source.readings:
            print(f"{reading.timestamp.isoformat()} -> {reading.output}")


def main():
    config = PlantConfig(name="Basic REPS Example")
    config.validate_and_log()

    now = datetime.now(timezone.utc)

    # Create and add sources
    plant = (
        RenewableEnergyPlant()
        .add_energy_source(SolarPanel("SP1", random_readings(now)))
        .add_energy_source(WindTurbine("WT1", random_readings(now)))
        .add_energy_source(HydropowerPlant("HP1", random_readings(now)))
    )

    plant.display_status()
    plant.display_storage()

    # Save and read back
    saved = plant.save_data_to_file(config.storage.data_file, encoding=config.storage.encoding)
    print(saved.message)

    loaded = RenewableEnergyPlant().read_data_from_file(
        config.storage.data_file, encoding=config.storage.encoding
    )
    if loaded.success:
        print(f"Read back {len(loaded.plant)} sources")
    else:
        print(f"Error reading plant data: {loaded.message}")

    # Search and sort
    print(plant.search_by_id("HP1"))
    print_readings(plant.sort_data_by_timestamp())

    # Filter by hour
    hour = config.analysis.filter_hour if config.analysis.filter_hour is not None else now.hour
    print_readings(plant.filter_by_hour(hour))

    # Analyze the data
    for stats in plant.analyze_data():
        print(
            f"Mean: {stats.mean}, Median: {stats.median}, Mode: {stats.mode}, "
            f"Range: {stats.range}, Midrange: {stats.midrange}"
        )

    # Check for issues
    plant.alert_issues(config.analysis.issue_threshold)


if __name__ == "__main__":
    main()
