"""Periodic submission and status reporting."""

from .flush import FlushOutcome, FlushScheduler, build_report
from .status import StatusReporter, time_since

__all__ = [
    "FlushOutcome",
    "FlushScheduler",
    "StatusReporter",
    "build_report",
    "time_since",
]
