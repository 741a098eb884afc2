"""Weather report schemas.

Pydantic models for measurement parsing and the Windy.com request body.
"""

from .enums import HumidityMode, MeasurementKind, WindAggregation
from .report import ObservationEntry, Position, StationEntry, WeatherReport

__all__ = [
    "HumidityMode",
    "MeasurementKind",
    "ObservationEntry",
    "Position",
    "StationEntry",
    "WeatherReport",
    "WindAggregation",
]
