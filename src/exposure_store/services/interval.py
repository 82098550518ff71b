"""Interval number arithmetic for diagnosis key buckets.

All functions are pure: the same instant always maps to the same interval.
Instants must be timezone-aware so that wall-clock offsets cannot shift a
key into a neighbouring bucket.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Final

from exposure_store.core.settings import settings
from exposure_store.db.time import utcnow

SECONDS_PER_HOUR: Final[int] = 3_600
SECONDS_PER_24_HOURS: Final[int] = 24 * SECONDS_PER_HOUR
SECONDS_PER_10_MINUTES: Final[int] = 600
TEN_MINUTE_INTERVALS_PER_24_HOURS: Final[int] = SECONDS_PER_24_HOURS // SECONDS_PER_10_MINUTES

_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=UTC)


def _epoch_seconds(instant: datetime) -> int:
    if instant.tzinfo is None:
        raise ValueError("Interval arithmetic requires a timezone-aware datetime")
    return int((instant - _EPOCH) // timedelta(seconds=1))


def to_interval(instant: datetime, hours: int) -> int:
    """Return the number of the ``hours``-wide bucket containing ``instant``."""
    if hours <= 0:
        raise ValueError("Interval width must be a positive number of hours")
    return _epoch_seconds(instant) // (hours * SECONDS_PER_HOUR)


def to_24_hour_interval(instant: datetime) -> int:
    """Return the 24 hour interval number containing ``instant``."""
    return _epoch_seconds(instant) // SECONDS_PER_24_HOURS


def to_10_minute_interval(instant: datetime) -> int:
    """Return the 10 minute rolling interval number used in key validity."""
    return _epoch_seconds(instant) // SECONDS_PER_10_MINUTES


def start_of_24_hour_interval(interval: int) -> datetime:
    """Return the first instant belonging to a 24 hour interval."""
    return _EPOCH + timedelta(seconds=interval * SECONDS_PER_24_HOURS)


def first_10_minute_interval(interval: int) -> int:
    """Return the first 10 minute interval number inside a 24 hour interval."""
    return interval * TEN_MINUTE_INTERVALS_PER_24_HOURS


def current_interval(now: datetime | None = None) -> int:
    """Return the configured-width interval for ``now`` (defaults to the current time)."""
    return to_interval(now or utcnow(), settings.interval_length_hours)
