"""Fixtures for schema unit tests."""

import pytest


@pytest.fixture
def valid_station_data() -> dict:
    """Valid StationEntry data."""
    return {
        "station": 42,
        "name": "Sea Breeze",
        "type": "Signal K Windy Plugin",
        "provider": "Test Provider",
        "url": "https://example.com/boat",
        "lat": 37.8,
        "lon": -122.4,
    }


@pytest.fixture
def valid_observation_data() -> dict:
    """Valid ObservationEntry data."""
    return {
        "station": 42,
        "temp": 26.9,
        "wind": 3.3,
        "gust": 5.4,
        "winddir": 90,
        "pressure": 101325.0,
        "rh": 64,
    }


@pytest.fixture
def minimal_observation_data() -> dict:
    """Minimal valid ObservationEntry (only required fields)."""
    return {
        "station": 42,
        "temp": 15.0,
        "wind": 2.0,
        "winddir": 180,
    }
