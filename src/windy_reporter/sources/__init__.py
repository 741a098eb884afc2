"""Sources delivering measurement updates."""

from .delta_stream import DeltaStreamSource
from .protocols import Subscription, SubscriptionPath, UpdateSource

__all__ = [
    "DeltaStreamSource",
    "Subscription",
    "SubscriptionPath",
    "UpdateSource",
]
