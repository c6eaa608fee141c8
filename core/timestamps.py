"""Timezone-aware UTC timestamp utilities.

All code should use these helpers instead of datetime.utcnow() so every
serialized timestamp carries a +00:00 offset. Token claims use integer
epoch seconds; the conversions live here too.
"""

from datetime import datetime, timezone


def now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def isonow() -> str:
    """Return the current UTC time as an ISO 8601 string with +00:00 offset."""
    return now().isoformat()


def to_epoch(dt: datetime) -> int:
    """Whole epoch seconds for a datetime (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def from_epoch(seconds: int) -> datetime:
    """UTC datetime for epoch seconds."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)
