"""Windy Reporter - Signal K weather submission to Windy.com.

Aggregates position, wind, temperature, pressure and humidity updates and
periodically submits one observation to the Windy.com station API:

- aggregation: folds updates into a shared accumulation buffer
- reporting: flushes the buffer on a timer and reports submission status
- sources: delivers updates from Signal K delta streams

Usage:
    from windy_reporter import WindyPlugin, WindyConfig
    from windy_reporter.sources import DeltaStreamSource
"""

__version__ = "0.1.0"

from .config import Settings, WindyConfig, get_settings
from .exceptions import ConfigurationError, SubmissionError, WindyReporterError
from .plugin import WindyPlugin
from .schemas import MeasurementKind, WeatherReport

__all__ = [
    "ConfigurationError",
    "MeasurementKind",
    "Settings",
    "SubmissionError",
    "WeatherReport",
    "WindyConfig",
    "WindyPlugin",
    "WindyReporterError",
    "get_settings",
]
