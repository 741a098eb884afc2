"""Enums for measurement kinds and aggregation modes."""

from enum import Enum


class MeasurementKind(str, Enum):
    """Measurement kind, valued by the Signal K path that carries it."""

    POSITION = "navigation.position"
    WIND_SPEED = "environment.wind.speedOverGround"
    WIND_DIRECTION = "environment.wind.directionGround"
    WATER_TEMPERATURE = "environment.water.temperature"
    AIR_TEMPERATURE = "environment.outside.temperature"
    PRESSURE = "environment.outside.pressure"
    HUMIDITY = "environment.outside.humidity"

    @classmethod
    def from_path(cls, path: str) -> "MeasurementKind | None":
        """Look up a kind by its path, None if the path is not tracked."""
        try:
            return cls(path)
        except ValueError:
            return None


class HumidityMode(str, Enum):
    """How raw humidity readings are converted before submission."""

    FRACTION = "fraction"  # 0..1 ratio, scaled to an integer percentage
    RAW = "raw"  # submitted as received


class WindAggregation(str, Enum):
    """How wind speed samples collapse to one value per flush."""

    MEDIAN = "median"  # keep every sample, submit the median
    LATEST = "latest"  # keep only the last sample
