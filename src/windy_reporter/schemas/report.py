"""Weather report schema submitted to the Windy.com station API."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """Geographic position as delivered by `navigation.position`.

    Extra keys such as `altitude` are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    latitude: Annotated[float, Field(ge=-90.0, le=90.0, allow_inf_nan=False)]
    longitude: Annotated[float, Field(ge=-180.0, le=180.0, allow_inf_nan=False)]


class StationEntry(BaseModel):
    """Station description sent along with every observation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    station: int
    name: str
    share_option: Literal["Open"] = Field(default="Open", alias="shareOption")
    type: str
    provider: str
    url: str
    lat: float
    lon: float
    elevation: int = 1


class ObservationEntry(BaseModel):
    """A single aggregated observation.

    Air temperature, wind and direction are always present because the
    flush gate requires them; the rest are null when nothing was received.
    """

    model_config = ConfigDict(frozen=True)

    station: int
    temp: float
    wind: float
    gust: float | None = None
    winddir: int
    pressure: float | None = None
    rh: float | None = None


class WeatherReport(BaseModel):
    """Request body for one submission."""

    model_config = ConfigDict(frozen=True)

    stations: list[StationEntry]
    observations: list[ObservationEntry]

    def to_payload(self) -> dict:
        """Serialize with the wire field names, keeping null fields."""
        return self.model_dump(mode="json", by_alias=True)
