"""Update source reading newline-delimited Signal K deltas from a stream."""

import asyncio
import json
import logging

from ..schemas import MeasurementKind
from ..schemas.delta import iter_delta_values
from .protocols import Subscription, Unsubscribe, UpdateCallback

logger = logging.getLogger(__name__)


class DeltaStreamSource:
    """Delivers updates decoded from one JSON delta per line.

    Blank lines and lines that are not valid JSON are skipped. Only paths
    covered by the subscription are passed to the callback.
    """

    def __init__(self, reader: asyncio.StreamReader) -> None:
        """Initialize delta stream source.

        Args:
            reader: Stream producing newline-delimited JSON deltas.
        """
        self.reader = reader
        self._task: asyncio.Task | None = None
        self._finished = asyncio.Event()

    def subscribe(self, subscription: Subscription, on_update: UpdateCallback) -> Unsubscribe:
        """Start reading the stream in the background."""
        if self._task is not None:
            raise RuntimeError("DeltaStreamSource supports a single subscription")
        logger.info(
            "Subscribing to %d paths in %s",
            len(subscription.paths),
            subscription.context,
        )
        self._task = asyncio.create_task(
            self._read_loop(subscription, on_update), name="delta-stream"
        )
        return self._unsubscribe

    def _unsubscribe(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait_finished(self) -> None:
        """Wait until the stream is exhausted or reading stops."""
        await self._finished.wait()

    def dispatch_line(
        self,
        line: bytes | str,
        subscription: Subscription,
        on_update: UpdateCallback,
    ) -> int:
        """Decode one line and deliver its subscribed values.

        Returns:
            Number of values delivered.
        """
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        line = line.strip()
        if not line:
            return 0

        try:
            delta = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("Skipping undecodable delta: %s", e)
            return 0

        delivered = 0
        for path, value, timestamp in iter_delta_values(delta):
            if not subscription.covers(path):
                logger.debug("Unknown path: %s", path)
                continue
            kind = MeasurementKind.from_path(path)
            if kind is None:
                continue
            on_update(kind, value, timestamp)
            delivered += 1
        return delivered

    async def _read_loop(self, subscription: Subscription, on_update: UpdateCallback) -> None:
        try:
            while True:
                try:
                    line = await self.reader.readline()
                except (ValueError, asyncio.LimitOverrunError) as e:
                    # readline has already discarded the oversized chunk
                    logger.warning("Skipping oversized delta line: %s", e)
                    continue
                if not line:
                    logger.info("Delta stream closed")
                    break
                try:
                    self.dispatch_line(line, subscription, on_update)
                except Exception as e:
                    logger.error("Subscription error: %s", e, exc_info=True)
        finally:
            self._finished.set()
