"""Configuration settings loaded from environment variables."""

from pydantic import field_validator
from pydantic_settings import BaseSettings

from .schemas.enums import HumidityMode, WindAggregation


class WindyConfig(BaseSettings):
    """Windy.com station and submission configuration."""

    api_key: str = ""  # Obtain from stations.windy.com, required at start
    submit_interval_minutes: float = 5
    station_id: int = 100
    station_name: str = ""
    station_type: str = "Signal K Windy Plugin"
    provider: str = ""
    url: str = ""
    base_url: str = "https://stations.windy.com/pws/update/"
    humidity_mode: HumidityMode = HumidityMode.FRACTION
    wind_aggregation: WindAggregation = WindAggregation.MEDIAN
    lenient_success: bool = False  # Any response without transport error counts
    request_timeout_seconds: float = 30.0
    poll_interval_seconds: float = 1.0
    status_interval_seconds: float = 60.0

    model_config = {"env_prefix": "WINDY_"}

    @field_validator(
        "submit_interval_minutes",
        "request_timeout_seconds",
        "poll_interval_seconds",
        "status_interval_seconds",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Intervals and timeouts must be strictly positive."""
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @property
    def submit_url(self) -> str:
        """Full submission URL including the API key suffix."""
        return f"{self.base_url}{self.api_key}"

    @property
    def submit_interval_seconds(self) -> float:
        """Flush period in seconds."""
        return self.submit_interval_minutes * 60


class Settings(BaseSettings):
    """Application settings combining all configs."""

    log_level: str = "INFO"
    windy: WindyConfig = WindyConfig()


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()
