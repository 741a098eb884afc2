"""Windy.com personal weather station API client."""

import logging
from dataclasses import dataclass

import httpx

from ..config import WindyConfig
from ..exceptions import SubmissionError
from ..schemas import WeatherReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a single report submission."""

    success: bool
    status_code: int | None = None
    body: str | None = None
    error: str | None = None  # Transport error description, if any


class WindyClient:
    """HTTP client posting weather reports to stations.windy.com."""

    def __init__(
        self,
        config: WindyConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize Windy client.

        Args:
            config: Windy configuration settings.
            http_client: Optional custom HTTP client for testing.
        """
        self.config = config or WindyConfig()
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.request_timeout_seconds,
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def is_success(self, response: httpx.Response) -> bool:
        """Classify a response received without transport error.

        In lenient mode any response counts, otherwise only 2xx.
        """
        return self.config.lenient_success or response.is_success

    async def submit(self, report: WeatherReport) -> SubmissionResult:
        """Post a report and classify the outcome.

        Never raises on transport or HTTP errors.

        Args:
            report: Report to submit.

        Returns:
            SubmissionResult describing the outcome.
        """
        try:
            response = await self.http_client.post(
                self.config.submit_url,
                json=report.to_payload(),
            )
        except httpx.RequestError as e:
            logger.error("Error submitting to Windy.com API: %s", e)
            return SubmissionResult(success=False, error=str(e) or e.__class__.__name__)

        if not self.is_success(response):
            logger.error(
                "Error submitting to Windy.com API (HTTP %d)", response.status_code
            )
            logger.debug("Response body: %s", response.text)
            return SubmissionResult(
                success=False,
                status_code=response.status_code,
                body=response.text,
            )

        logger.debug("Weather report successfully submitted (HTTP %d)", response.status_code)
        return SubmissionResult(
            success=True,
            status_code=response.status_code,
            body=response.text,
        )

    async def submit_or_raise(self, report: WeatherReport) -> SubmissionResult:
        """Post a report, raising if it was not accepted.

        Raises:
            SubmissionError: On transport error or rejected status.
        """
        result = await self.submit(report)
        if not result.success:
            message = result.error or f"HTTP {result.status_code}"
            raise SubmissionError(
                f"Weather report rejected: {message}",
                status_code=result.status_code,
                body=result.body,
            )
        return result
