"""Status reporting on the time since the last successful submission."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable

logger = logging.getLogger(__name__)

StatusSink = Callable[[str], None]

SECONDS_PER_YEAR = 31536000
SECONDS_PER_MONTH = 2592000
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


def log_status(message: str) -> None:
    """Default status sink."""
    logger.info("Status: %s", message)


def time_since(moment: datetime, now: datetime | None = None) -> str:
    """Describe elapsed time using the largest applicable unit.

    A unit applies when strictly more than one of it has elapsed, so exactly
    one hour reads as "60 minutes".

    Args:
        moment: Past point in time.
        now: Reference time, defaults to the current UTC time.

    Returns:
        Text such as "3 days", "1 hour" or "42 seconds".
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = max(0, int((now - moment).total_seconds()))

    for unit_seconds, unit in (
        (SECONDS_PER_YEAR, "years"),
        (SECONDS_PER_MONTH, "months"),
        (SECONDS_PER_DAY, "days"),
    ):
        if seconds / unit_seconds > 1:
            return f"{seconds // unit_seconds} {unit}"

    for unit_seconds, singular, plural in (
        (SECONDS_PER_HOUR, "hour", "hours"),
        (SECONDS_PER_MINUTE, "minute", "minutes"),
    ):
        if seconds / unit_seconds > 1:
            count = seconds // unit_seconds
            return f"{count} {singular if count == 1 else plural}"

    return f"{seconds} seconds"


class StatusReporter:
    """Tracks the last successful submission and publishes its age."""

    def __init__(self, sink: StatusSink | None = None, interval_seconds: float = 60.0) -> None:
        """Initialize status reporter.

        Args:
            sink: Callable receiving status messages.
            interval_seconds: Period between status reports.
        """
        self.sink = sink or log_status
        self.interval_seconds = interval_seconds
        self._last_success: datetime | None = None

    @property
    def last_success(self) -> datetime | None:
        """Time of the last successful submission, if any."""
        return self._last_success

    def record_success(self, timestamp: datetime | None = None) -> None:
        """Record a successful submission."""
        self._last_success = timestamp or datetime.now(timezone.utc)
        logger.debug("Recorded successful submission at %s", self._last_success)

    def report_once(self, now: datetime | None = None) -> str | None:
        """Publish the time since the last success.

        Returns:
            The published message, or None if nothing was submitted yet.
        """
        if self._last_success is None:
            return None
        message = f"Last successful submission was {time_since(self._last_success, now)} ago"
        self.sink(message)
        return message

    async def run_forever(self) -> None:
        """Report status periodically until cancelled."""
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.report_once()
            except Exception as e:
                logger.error("Error in status report: %s", e, exc_info=True)
