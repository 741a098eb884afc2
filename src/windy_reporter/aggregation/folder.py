"""Fold incoming measurement updates into the accumulation buffer."""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from ..schemas import HumidityMode, MeasurementKind, Position, WindAggregation
from ..schemas.delta import iter_delta_values
from .buffer import AccumulationBuffer
from .conversions import (
    kelvin_to_celsius,
    parse_number,
    radians_to_degrees,
    round_half_up,
    round_to_int,
)

logger = logging.getLogger(__name__)


class IngestFolder:
    """Applies per-kind conversion rules and writes results to a buffer.

    Folding never raises and never performs I/O: unknown kinds and values
    that cannot be interpreted are logged and ignored.
    """

    def __init__(
        self,
        buffer: AccumulationBuffer,
        humidity_mode: HumidityMode = HumidityMode.FRACTION,
        wind_aggregation: WindAggregation = WindAggregation.MEDIAN,
    ) -> None:
        """Initialize the folder.

        Args:
            buffer: Buffer shared with the flush scheduler.
            humidity_mode: Conversion applied to humidity readings.
            wind_aggregation: Whether wind speed samples accumulate or overwrite.
        """
        self.buffer = buffer
        self.humidity_mode = humidity_mode
        self.wind_aggregation = wind_aggregation

    def fold(
        self,
        kind: MeasurementKind | str,
        value: Any,
        timestamp: datetime | None = None,
    ) -> bool:
        """Fold one measurement into the buffer.

        Args:
            kind: Measurement kind or its Signal K path.
            value: Raw value as delivered by the source.
            timestamp: Optional time the measurement was taken.

        Returns:
            True if the buffer was updated.
        """
        if not isinstance(kind, MeasurementKind):
            resolved = MeasurementKind.from_path(str(kind))
            if resolved is None:
                logger.debug("Unknown path: %s", kind)
                return False
            kind = resolved

        try:
            self._apply(kind, value, timestamp)
        except (ValueError, ValidationError) as e:
            logger.warning("Ignoring %s update with value %r: %s", kind.name, value, e)
            return False
        return True

    def _apply(self, kind: MeasurementKind, value: Any, timestamp: datetime | None) -> None:
        buffer = self.buffer

        if kind == MeasurementKind.POSITION:
            if not isinstance(value, Mapping):
                raise ValueError("position must be an object with latitude and longitude")
            buffer.set_value("position", Position.model_validate(dict(value)), timestamp)

        elif kind == MeasurementKind.WIND_SPEED:
            speed = round_half_up(parse_number(value), 2)
            buffer.add_wind_speed(speed, self.wind_aggregation, timestamp)

        elif kind == MeasurementKind.WIND_DIRECTION:
            degrees = round_to_int(radians_to_degrees(parse_number(value)))
            buffer.set_value("wind_direction", degrees, timestamp)

        elif kind == MeasurementKind.WATER_TEMPERATURE:
            celsius = round_half_up(kelvin_to_celsius(parse_number(value)), 1)
            buffer.set_value("water_temperature", celsius, timestamp)

        elif kind == MeasurementKind.AIR_TEMPERATURE:
            celsius = round_half_up(kelvin_to_celsius(parse_number(value)), 1)
            buffer.set_value("air_temperature", celsius, timestamp)

        elif kind == MeasurementKind.PRESSURE:
            buffer.set_value("pressure", parse_number(value), timestamp)

        elif kind == MeasurementKind.HUMIDITY:
            humidity = parse_number(value)
            if self.humidity_mode == HumidityMode.FRACTION:
                humidity = round_to_int(100 * humidity)
            buffer.set_value("humidity", humidity, timestamp)

    def process_delta(self, delta: Any) -> int:
        """Fold every value of a Signal K delta message.

        Args:
            delta: Decoded delta, `{"updates": [{"timestamp", "values": [...]}]}`.

        Returns:
            Number of values folded into the buffer.
        """
        folded = 0
        for path, value, timestamp in iter_delta_values(delta):
            if self.fold(path, value, timestamp):
                folded += 1
        return folded
