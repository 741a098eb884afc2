"""HTTP clients for weather report submission."""

from .windy import SubmissionResult, WindyClient

__all__ = [
    "SubmissionResult",
    "WindyClient",
]
