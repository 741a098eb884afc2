"""Shared test fixtures for all tests."""

import pytest

from windy_reporter.config import WindyConfig


@pytest.fixture
def sample_api_key() -> str:
    """Sample Windy.com API key for testing."""
    return "test-api-key"


@pytest.fixture
def windy_config(sample_api_key: str) -> WindyConfig:
    """Windy configuration for testing."""
    return WindyConfig(
        api_key=sample_api_key,
        submit_interval_minutes=5,
        station_id=42,
        station_name="Sea Breeze",
        provider="Test Provider",
        url="https://example.com/boat",
        base_url="https://stations.windy.com/pws/update/",
        request_timeout_seconds=5.0,
    )


@pytest.fixture
def submit_url(sample_api_key: str) -> str:
    """URL the test configuration submits to."""
    return f"https://stations.windy.com/pws/update/{sample_api_key}"
