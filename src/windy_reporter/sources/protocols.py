"""Protocols for measurement update sources."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Protocol

from ..schemas import MeasurementKind

UpdateCallback = Callable[[MeasurementKind, Any, datetime | None], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class SubscriptionPath:
    """A single path of interest and its requested delivery period."""

    path: str
    period_ms: int


@dataclass(frozen=True)
class Subscription:
    """Set of paths a source should deliver updates for."""

    context: str
    paths: tuple[SubscriptionPath, ...]

    @classmethod
    def for_all_kinds(
        cls,
        poll_interval_seconds: float = 1.0,
        context: str = "vessels.self",
    ) -> "Subscription":
        """Subscribe to every measurement kind at the same period."""
        period_ms = int(poll_interval_seconds * 1000)
        return cls(
            context=context,
            paths=tuple(SubscriptionPath(kind.value, period_ms) for kind in MeasurementKind),
        )

    def covers(self, path: str) -> bool:
        """True if updates for the path were requested."""
        return any(entry.path == path for entry in self.paths)


class UpdateSource(Protocol):
    """Protocol for sources delivering measurement updates."""

    def subscribe(self, subscription: Subscription, on_update: UpdateCallback) -> Unsubscribe:
        """Start delivering updates, returning a callable that stops delivery."""
        ...
