"""Unit test fixtures - buffers and sample deltas."""

import pytest

from windy_reporter.aggregation import AccumulationBuffer, IngestFolder
from windy_reporter.schemas import MeasurementKind


@pytest.fixture
def buffer() -> AccumulationBuffer:
    """Empty accumulation buffer."""
    return AccumulationBuffer()


@pytest.fixture
def folder(buffer: AccumulationBuffer) -> IngestFolder:
    """Folder writing to the `buffer` fixture with default modes."""
    return IngestFolder(buffer)


@pytest.fixture
def complete_buffer(folder: IngestFolder) -> AccumulationBuffer:
    """Buffer holding every measurement, ready to flush."""
    folder.fold(MeasurementKind.POSITION, {"latitude": 37.8, "longitude": -122.4})
    for speed in (2.1, 5.4, 3.3):
        folder.fold(MeasurementKind.WIND_SPEED, speed)
    folder.fold(MeasurementKind.WIND_DIRECTION, 1.5708)
    folder.fold(MeasurementKind.WATER_TEMPERATURE, 290.15)
    folder.fold(MeasurementKind.AIR_TEMPERATURE, 300.0)
    folder.fold(MeasurementKind.PRESSURE, 101325)
    folder.fold(MeasurementKind.HUMIDITY, 0.64)
    return folder.buffer


@pytest.fixture
def sample_delta() -> dict:
    """Signal K delta carrying position and wind speed."""
    return {
        "context": "vessels.self",
        "updates": [
            {
                "source": {"label": "gps"},
                "timestamp": "2024-01-15T12:00:00.000Z",
                "values": [
                    {
                        "path": "navigation.position",
                        "value": {"latitude": 37.8, "longitude": -122.4},
                    },
                    {"path": "environment.wind.speedOverGround", "value": 4.25},
                ],
            }
        ],
    }
