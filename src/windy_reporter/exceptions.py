"""Exception hierarchy for the Windy reporter."""

from __future__ import annotations


class WindyReporterError(Exception):
    """Base exception for all reporter errors."""


class ConfigurationError(WindyReporterError):
    """Raised when the reporter cannot start with the given settings."""


class SubmissionError(WindyReporterError):
    """Raised when a weather report is not accepted by the station API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)
