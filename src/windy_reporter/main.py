"""Main entry point for running the Windy.com weather reporter."""

import argparse
import asyncio
import logging
import signal
import sys
from typing import NoReturn

from . import __version__
from .config import Settings, get_settings
from .exceptions import ConfigurationError
from .plugin import WindyPlugin
from .sources import DeltaStreamSource

logger = logging.getLogger(__name__)

_shutdown_event: asyncio.Event | None = None


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def handle_shutdown(signum: int, frame: object) -> None:
    """Handle shutdown signals gracefully."""
    sig_name = signal.Signals(signum).name
    logger.info("Received %s, initiating shutdown...", sig_name)
    if _shutdown_event:
        _shutdown_event.set()


async def open_stdin_reader() -> asyncio.StreamReader:
    """Wrap stdin in an asyncio stream reader."""
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
    return reader


async def run_plugin(plugin: WindyPlugin, shutdown_event: asyncio.Event) -> None:
    """Run the plugin until shutdown is signalled or input ends.

    Args:
        plugin: Configured plugin, not yet started.
        shutdown_event: Event to signal shutdown.
    """
    plugin.start()
    waiters = [asyncio.create_task(shutdown_event.wait(), name="shutdown")]
    if isinstance(plugin.source, DeltaStreamSource):
        waiters.append(asyncio.create_task(plugin.source.wait_finished(), name="input"))

    try:
        await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for waiter in waiters:
            waiter.cancel()
        logger.info("Shutting down reporter")
        await plugin.stop()


async def run_reporter(settings: Settings) -> None:
    """Run the reporter over Signal K deltas read from stdin."""
    global _shutdown_event
    _shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, lambda s=sig: handle_shutdown(s, None))

    source = DeltaStreamSource(await open_stdin_reader())
    plugin = WindyPlugin(settings.windy, source)
    await run_plugin(plugin, _shutdown_event)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Windy.com weather reporter - aggregate Signal K deltas and submit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Forward deltas from a Signal K server dump
  signalk-deltas | windy-reporter

  # Run with debug logging
  windy-reporter --log-level DEBUG < deltas.jsonl

Environment Variables:
  WINDY_API_KEY                  API key from stations.windy.com (required)
  WINDY_SUBMIT_INTERVAL_MINUTES  Minutes between submissions (default: 5)
  WINDY_STATION_ID               Windy.com station ID (default: 100)
  WINDY_STATION_NAME             Station display name
  WINDY_PROVIDER                 Provider name
  WINDY_URL                      Station web site
  WINDY_HUMIDITY_MODE            fraction or raw (default: fraction)
  WINDY_WIND_AGGREGATION         median or latest (default: median)
  WINDY_LENIENT_SUCCESS          Accept any HTTP status as success (default: false)
        """,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args()


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()
    settings = get_settings()

    setup_logging(args.log_level or settings.log_level)
    logger.info("Windy reporter starting")

    try:
        asyncio.run(run_reporter(settings))
    except ConfigurationError as e:
        logger.error("%s", e)
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")

    logger.info("Shutdown complete")
    sys.exit(0)


if __name__ == "__main__":
    main()
