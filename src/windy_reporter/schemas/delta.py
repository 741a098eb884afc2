"""Parsing helpers for Signal K delta messages."""

import logging
from collections.abc import Iterator, Mapping
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse an ISO 8601 update timestamp, None if absent or invalid."""
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str) or not raw:
        return None
    try:
        # fromisoformat only accepts a trailing Z from 3.11 on
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Invalid update timestamp: %s", raw)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def iter_delta_values(delta: Any) -> Iterator[tuple[str, Any, datetime | None]]:
    """Yield `(path, value, timestamp)` for every value in a delta.

    Entries that do not follow the delta shape are skipped.
    """
    if not isinstance(delta, Mapping):
        logger.warning("Ignoring delta that is not an object: %r", delta)
        return

    updates = delta.get("updates")
    if not isinstance(updates, list):
        logger.debug("Ignoring delta without updates")
        return

    for update in updates:
        if not isinstance(update, Mapping):
            continue
        values = update.get("values")
        if not isinstance(values, list):
            continue
        timestamp = parse_timestamp(update.get("timestamp"))
        for entry in values:
            if not isinstance(entry, Mapping) or not isinstance(entry.get("path"), str):
                logger.debug("Ignoring delta value without path: %r", entry)
                continue
            yield entry["path"], entry.get("value"), timestamp
