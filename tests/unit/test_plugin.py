"""Unit tests for the plugin lifecycle."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from windy_reporter.clients import SubmissionResult, WindyClient
from windy_reporter.config import WindyConfig
from windy_reporter.exceptions import ConfigurationError
from windy_reporter.plugin import WindyPlugin
from windy_reporter.reporting import FlushOutcome
from windy_reporter.schemas import MeasurementKind
from windy_reporter.sources import Subscription


class FakeSource:
    """Update source recording its subscription."""

    def __init__(self) -> None:
        self.subscription: Subscription | None = None
        self.on_update = None
        self.unsubscribed = False

    def subscribe(self, subscription, on_update):
        self.subscription = subscription
        self.on_update = on_update
        return self.unsubscribe

    def unsubscribe(self) -> None:
        self.unsubscribed = True

    def emit(self, kind: MeasurementKind, value) -> None:
        self.on_update(kind, value, None)


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def mock_client() -> MagicMock:
    """Windy client whose submissions succeed."""
    client = MagicMock(spec=WindyClient)
    client.submit = AsyncMock(return_value=SubmissionResult(success=True, status_code=200))
    client.close = AsyncMock()
    return client


@pytest.fixture
def plugin(windy_config: WindyConfig, source: FakeSource, mock_client: MagicMock) -> WindyPlugin:
    return WindyPlugin(windy_config, source, client=mock_client, status_sink=MagicMock())


def emit_complete(source: FakeSource) -> None:
    source.emit(MeasurementKind.POSITION, {"latitude": 37.8, "longitude": -122.4})
    source.emit(MeasurementKind.WIND_SPEED, 4.0)
    source.emit(MeasurementKind.WIND_DIRECTION, 3.1416)
    source.emit(MeasurementKind.AIR_TEMPERATURE, 293.15)


class TestStart:
    @pytest.mark.asyncio
    async def test_missing_api_key_refuses_to_start(
        self, source: FakeSource, mock_client: MagicMock
    ):
        """Test no subscription or timer is started without an API key."""
        plugin = WindyPlugin(WindyConfig(api_key=""), source, client=mock_client)

        with pytest.raises(ConfigurationError, match="API Key is required"):
            plugin.start()

        assert source.subscription is None
        assert not plugin.running

    @pytest.mark.asyncio
    async def test_blank_api_key_rejected(self, source: FakeSource, mock_client: MagicMock):
        """Test whitespace is not a valid API key."""
        plugin = WindyPlugin(WindyConfig(api_key="   "), source, client=mock_client)

        with pytest.raises(ConfigurationError):
            plugin.start()

    @pytest.mark.asyncio
    async def test_start_subscribes_and_runs(self, plugin: WindyPlugin, source: FakeSource):
        """Test start registers interest in every kind and starts timers."""
        plugin.start()

        assert plugin.running
        assert source.subscription is not None
        assert len(source.subscription.paths) == 7
        assert plugin.status == "Submitting weather report every 5 minutes"

        await plugin.stop()

    @pytest.mark.asyncio
    async def test_double_start_rejected(self, plugin: WindyPlugin):
        """Test starting twice is an error."""
        plugin.start()
        with pytest.raises(RuntimeError):
            plugin.start()
        await plugin.stop()


class TestUpdates:
    @pytest.mark.asyncio
    async def test_updates_fold_into_buffer(self, plugin: WindyPlugin, source: FakeSource):
        """Test updates delivered by the source reach the buffer."""
        plugin.start()
        emit_complete(source)

        assert plugin.buffer.is_complete
        assert plugin.buffer.wind_direction == 180
        assert plugin.buffer.air_temperature == 20.0

        await plugin.stop()

    @pytest.mark.asyncio
    async def test_flush_records_status(
        self, plugin: WindyPlugin, source: FakeSource, mock_client: MagicMock
    ):
        """Test a successful flush clears the buffer and updates status."""
        plugin.start()
        emit_complete(source)

        assert await plugin.scheduler.flush_once() == FlushOutcome.SUBMITTED
        assert plugin.buffer.is_empty
        assert plugin.status_reporter.report_once() is not None
        assert plugin.status.startswith("Last successful submission was")

        await plugin.stop()


class TestStop:
    @pytest.mark.asyncio
    async def test_stop_cancels_and_cleans_up(
        self, plugin: WindyPlugin, source: FakeSource, mock_client: MagicMock
    ):
        """Test stop unsubscribes, closes the client and drops pending data."""
        plugin.start()
        emit_complete(source)

        await plugin.stop()

        assert not plugin.running
        assert source.unsubscribed
        mock_client.close.assert_awaited_once()
        mock_client.submit.assert_not_awaited()
        assert plugin.buffer.is_empty
        assert plugin.status == "Plugin stopped"

    @pytest.mark.asyncio
    async def test_stop_cancels_in_flight_submission(
        self, plugin: WindyPlugin, source: FakeSource, mock_client: MagicMock
    ):
        """Test a hung submission is cancelled on stop."""

        async def hang(report):
            await asyncio.sleep(3600)

        mock_client.submit.side_effect = hang
        plugin.start()
        emit_complete(source)
        plugin.scheduler.tick()
        await asyncio.sleep(0)

        await plugin.stop()

        assert plugin.scheduler.in_flight == 0

    @pytest.mark.asyncio
    async def test_stop_without_start(self, plugin: WindyPlugin):
        """Test stopping an idle plugin is harmless."""
        await plugin.stop()
        assert plugin.status == "Plugin stopped"
