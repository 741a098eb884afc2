"""Periodic flush of the accumulation buffer to Windy.com."""

import asyncio
import logging
from enum import Enum

from ..aggregation import AccumulationBuffer, BufferSnapshot
from ..clients import WindyClient
from ..config import WindyConfig
from ..schemas import ObservationEntry, StationEntry, WeatherReport
from .status import StatusReporter

logger = logging.getLogger(__name__)


class FlushOutcome(str, Enum):
    """Result of one flush attempt."""

    SKIPPED = "skipped"  # Buffer incomplete, nothing sent
    SUBMITTED = "submitted"
    FAILED = "failed"


def build_report(snapshot: BufferSnapshot, config: WindyConfig) -> WeatherReport:
    """Build the request body from a buffer snapshot and station settings.

    Raises:
        ValueError: If the snapshot lacks a required measurement.
    """
    wind = snapshot.wind_speed(config.wind_aggregation)
    if (
        snapshot.position is None
        or wind is None
        or snapshot.wind_direction is None
        or snapshot.air_temperature is None
    ):
        raise ValueError("snapshot is missing required measurements")

    station = StationEntry(
        station=config.station_id,
        name=config.station_name,
        type=config.station_type,
        provider=config.provider,
        url=config.url,
        lat=snapshot.position.latitude,
        lon=snapshot.position.longitude,
    )
    observation = ObservationEntry(
        station=config.station_id,
        temp=snapshot.air_temperature,
        wind=wind,
        gust=snapshot.wind_gust,
        winddir=snapshot.wind_direction,
        pressure=snapshot.pressure,
        rh=snapshot.humidity,
    )
    return WeatherReport(stations=[station], observations=[observation])


class FlushScheduler:
    """Submits the buffered measurements on a fixed interval.

    The buffer is only released after a successful submission, so failed
    attempts are retried on the next tick with whatever has accumulated since.
    """

    def __init__(
        self,
        buffer: AccumulationBuffer,
        client: WindyClient,
        config: WindyConfig,
        status: StatusReporter | None = None,
    ) -> None:
        """Initialize flush scheduler.

        Args:
            buffer: Buffer shared with the ingest folder.
            client: Windy API client.
            config: Windy configuration settings.
            status: Reporter notified of successful submissions.
        """
        self.buffer = buffer
        self.client = client
        self.config = config
        self.status = status or StatusReporter()
        self._in_flight: set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        """Number of submissions still awaiting a response."""
        return len(self._in_flight)

    async def flush_once(self) -> FlushOutcome:
        """Gate, snapshot and submit the buffer once."""
        missing = self.buffer.missing_fields()
        if missing:
            logger.debug(
                "Not submitting due to lack of %s",
                ", ".join(name.replace("_", " ") for name in missing),
            )
            return FlushOutcome.SKIPPED

        snapshot = self.buffer.snapshot()
        try:
            report = build_report(snapshot, self.config)
            logger.debug("Submitting data: %s", report.model_dump_json(by_alias=True))
            result = await self.client.submit(report)
        except Exception as e:
            logger.error("Error in flush cycle: %s", e, exc_info=True)
            return FlushOutcome.FAILED

        if not result.success:
            return FlushOutcome.FAILED

        logger.info("Weather report successfully submitted")
        self.status.record_success()
        self.buffer.release(snapshot)
        return FlushOutcome.SUBMITTED

    def tick(self) -> asyncio.Task:
        """Start a flush attempt without waiting for it."""
        task = asyncio.create_task(self.flush_once(), name="windy-flush")
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def run_forever(self) -> None:
        """Start a flush attempt every interval until cancelled."""
        logger.info(
            "Starting submission process every %s minutes",
            self.config.submit_interval_minutes,
        )
        try:
            while True:
                await asyncio.sleep(self.config.submit_interval_seconds)
                self.tick()
        finally:
            await self.cancel_pending()

    async def cancel_pending(self) -> None:
        """Cancel submissions still in flight."""
        tasks = list(self._in_flight)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Cancelled %d in-flight submissions", len(tasks))
