"""Accumulation buffer holding measurements between flushes."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from ..schemas import Position, WindAggregation
from .conversions import median

logger = logging.getLogger(__name__)

# Fields overwritten on every update of their kind
SCALAR_FIELDS = (
    "position",
    "wind_direction",
    "water_temperature",
    "air_temperature",
    "pressure",
    "humidity",
)

# Fields the flush gate requires, in reporting order
REQUIRED_FIELDS = ("position", "wind_speed", "wind_direction", "air_temperature")


@dataclass(frozen=True)
class BufferSnapshot:
    """Immutable copy of the buffer taken by one flush attempt."""

    revision: int
    sample_count: int = 0
    position: Position | None = None
    wind_speed_samples: tuple[float, ...] = ()
    wind_gust: float | None = None
    wind_direction: int | None = None
    water_temperature: float | None = None
    air_temperature: float | None = None
    pressure: float | None = None
    humidity: float | None = None
    last_update_at: datetime | None = None

    def wind_speed(self, aggregation: WindAggregation = WindAggregation.MEDIAN) -> float | None:
        """Representative wind speed for the snapshot."""
        if not self.wind_speed_samples:
            return None
        if aggregation == WindAggregation.LATEST:
            return self.wind_speed_samples[-1]
        return median(self.wind_speed_samples)


@dataclass
class AccumulationBuffer:
    """Latest value per measurement kind since the last successful flush.

    Every write bumps `revision` and stamps the written field with it, so a
    flush attempt can later drop exactly the data its snapshot carried via
    `release()`, leaving anything folded in the meantime.
    """

    position: Position | None = None
    wind_speed_samples: list[float] = field(default_factory=list)
    wind_gust: float | None = None
    wind_direction: int | None = None
    water_temperature: float | None = None
    air_temperature: float | None = None
    pressure: float | None = None
    humidity: float | None = None
    last_update_at: datetime | None = None
    revision: int = 0
    sample_count: int = 0  # Wind samples recorded since startup
    _written_at: dict[str, int] = field(default_factory=dict, repr=False)

    def set_value(self, name: str, value: object, timestamp: datetime | None = None) -> None:
        """Overwrite a scalar field."""
        if name not in SCALAR_FIELDS:
            raise KeyError(name)
        setattr(self, name, value)
        self._touch(name, timestamp)

    def add_wind_speed(
        self,
        speed: float,
        aggregation: WindAggregation = WindAggregation.MEDIAN,
        timestamp: datetime | None = None,
    ) -> None:
        """Record a wind speed sample and raise the gust if exceeded."""
        if aggregation == WindAggregation.LATEST:
            self.wind_speed_samples = [speed]
        else:
            self.wind_speed_samples.append(speed)
        self.sample_count += 1
        if self.wind_gust is None or speed > self.wind_gust:
            self.wind_gust = speed
        self._touch("wind_speed", timestamp)

    def _touch(self, name: str, timestamp: datetime | None) -> None:
        self.revision += 1
        self._written_at[name] = self.revision
        if timestamp is not None:
            self.last_update_at = timestamp

    def missing_fields(self) -> list[str]:
        """Required fields that have not been received yet."""
        present = {
            "position": self.position is not None,
            "wind_speed": bool(self.wind_speed_samples),
            "wind_direction": self.wind_direction is not None,
            "air_temperature": self.air_temperature is not None,
        }
        return [name for name in REQUIRED_FIELDS if not present[name]]

    @property
    def is_complete(self) -> bool:
        """True when the buffer holds enough data to submit."""
        return not self.missing_fields()

    @property
    def is_empty(self) -> bool:
        """True when nothing has been folded since the last reset."""
        return not self.wind_speed_samples and all(
            getattr(self, name) is None for name in SCALAR_FIELDS
        )

    def snapshot(self) -> BufferSnapshot:
        """Take an immutable copy of the current contents."""
        return BufferSnapshot(
            revision=self.revision,
            sample_count=self.sample_count,
            position=self.position,
            wind_speed_samples=tuple(self.wind_speed_samples),
            wind_gust=self.wind_gust,
            wind_direction=self.wind_direction,
            water_temperature=self.water_temperature,
            air_temperature=self.air_temperature,
            pressure=self.pressure,
            humidity=self.humidity,
            last_update_at=self.last_update_at,
        )

    def clear(self) -> None:
        """Reset every measurement to empty."""
        for name in SCALAR_FIELDS:
            setattr(self, name, None)
        self.wind_speed_samples = []
        self.wind_gust = None
        self.last_update_at = None
        self._written_at.clear()

    def release(self, snapshot: BufferSnapshot) -> None:
        """Drop the data carried by a successfully submitted snapshot.

        Data written after the snapshot was taken is kept for the next flush.
        """
        if snapshot.revision == self.revision:
            self.clear()
            return

        for name in SCALAR_FIELDS:
            if self._written_at.get(name, 0) <= snapshot.revision:
                setattr(self, name, None)
                self._written_at.pop(name, None)

        newer = self.sample_count - snapshot.sample_count
        if newer <= 0:
            self.wind_speed_samples = []
        else:
            self.wind_speed_samples = self.wind_speed_samples[-newer:]
        self.wind_gust = max(self.wind_speed_samples) if self.wind_speed_samples else None
        if not self.wind_speed_samples:
            self._written_at.pop("wind_speed", None)

        logger.debug(
            "Released snapshot at revision %d, kept %d newer updates",
            snapshot.revision,
            self.revision - snapshot.revision,
        )
