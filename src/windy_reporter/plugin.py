"""Reporter lifecycle: subscription, flush timer and status timer."""

import asyncio
import logging
from datetime import datetime
from typing import Any

from .aggregation import AccumulationBuffer, IngestFolder
from .clients import WindyClient
from .config import WindyConfig
from .exceptions import ConfigurationError
from .reporting import FlushScheduler, StatusReporter
from .reporting.status import StatusSink, log_status
from .schemas import MeasurementKind
from .sources import Subscription, UpdateSource
from .sources.protocols import Unsubscribe

logger = logging.getLogger(__name__)


class WindyPlugin:
    """Aggregates measurement updates and submits them to Windy.com.

    The plugin owns the accumulation buffer and hands it to both the ingest
    folder and the flush scheduler. Stopping drops unsubmitted data.
    """

    def __init__(
        self,
        config: WindyConfig,
        source: UpdateSource,
        client: WindyClient | None = None,
        status_sink: StatusSink | None = None,
    ) -> None:
        """Initialize plugin.

        Args:
            config: Windy configuration settings.
            source: Source delivering measurement updates.
            client: Optional Windy client, created from config if omitted.
            status_sink: Optional receiver of status messages.
        """
        self.config = config
        self.source = source
        self.client = client or WindyClient(config)
        self._status_sink = status_sink or log_status
        self.status: str = ""

        self.buffer = AccumulationBuffer()
        self.folder = IngestFolder(
            self.buffer,
            humidity_mode=config.humidity_mode,
            wind_aggregation=config.wind_aggregation,
        )
        self.status_reporter = StatusReporter(
            sink=self.set_status,
            interval_seconds=config.status_interval_seconds,
        )
        self.scheduler = FlushScheduler(
            self.buffer,
            self.client,
            config,
            status=self.status_reporter,
        )

        self._unsubscribe: Unsubscribe | None = None
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        """True between a successful start and stop."""
        return bool(self._tasks)

    def set_status(self, message: str) -> None:
        """Publish a status message."""
        self.status = message
        self._status_sink(message)

    def on_update(self, kind: MeasurementKind, value: Any, timestamp: datetime | None = None) -> None:
        """Callback for the update source."""
        self.folder.fold(kind, value, timestamp)

    def validate(self) -> None:
        """Check configuration required to start.

        Raises:
            ConfigurationError: If the API key is missing.
        """
        if not self.config.api_key.strip():
            raise ConfigurationError("API Key is required")

    def start(self) -> None:
        """Subscribe to updates and start both timers.

        Must be called from a running event loop.

        Raises:
            ConfigurationError: If configuration is invalid, nothing is started.
        """
        if self.running:
            raise RuntimeError("plugin already started")
        self.validate()

        self.set_status(
            f"Submitting weather report every {self.config.submit_interval_minutes:g} minutes"
        )

        subscription = Subscription.for_all_kinds(self.config.poll_interval_seconds)
        self._unsubscribe = self.source.subscribe(subscription, self.on_update)

        self._tasks = [
            asyncio.create_task(self.scheduler.run_forever(), name="windy-submit"),
            asyncio.create_task(self.status_reporter.run_forever(), name="windy-status"),
        ]
        logger.info("Windy reporter started for station %d", self.config.station_id)

    async def stop(self) -> None:
        """Cancel timers and in-flight submissions, then release resources."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        await self.scheduler.cancel_pending()
        await self.client.close()

        if not self.buffer.is_empty:
            logger.info("Dropping unsubmitted measurements")
        self.buffer.clear()
        self.set_status("Plugin stopped")
