"""Tests for interval number arithmetic."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from exposure_store.core.settings import settings
from exposure_store.services import interval as interval_utils

# 2020-05-01T00:00:00Z
MAY_FIRST = datetime(2020, 5, 1, tzinfo=UTC)
MAY_FIRST_24H = 18_383


def test_to_24_hour_interval_is_days_since_epoch() -> None:
    assert interval_utils.to_24_hour_interval(datetime(1970, 1, 1, tzinfo=UTC)) == 0
    assert interval_utils.to_24_hour_interval(MAY_FIRST) == MAY_FIRST_24H
    assert interval_utils.to_24_hour_interval(MAY_FIRST + timedelta(hours=23, minutes=59)) == (
        MAY_FIRST_24H
    )
    assert interval_utils.to_24_hour_interval(MAY_FIRST + timedelta(days=1)) == MAY_FIRST_24H + 1


def test_interval_ignores_wall_clock_offset() -> None:
    helsinki_summer = timezone(timedelta(hours=3))
    local_midnight = datetime(2020, 5, 2, 0, 30, tzinfo=helsinki_summer)
    # Still 21:30 UTC on May 1st.
    assert interval_utils.to_24_hour_interval(local_midnight) == MAY_FIRST_24H


def test_naive_datetimes_are_rejected() -> None:
    with pytest.raises(ValueError):
        interval_utils.to_24_hour_interval(datetime(2020, 5, 1))


def test_to_10_minute_interval_matches_24_hour_start() -> None:
    assert interval_utils.to_10_minute_interval(MAY_FIRST) == MAY_FIRST_24H * 144
    assert interval_utils.first_10_minute_interval(MAY_FIRST_24H) == MAY_FIRST_24H * 144
    assert interval_utils.to_10_minute_interval(MAY_FIRST + timedelta(minutes=10)) == (
        MAY_FIRST_24H * 144 + 1
    )


def test_start_of_24_hour_interval_round_trips() -> None:
    start = interval_utils.start_of_24_hour_interval(MAY_FIRST_24H)
    assert start == MAY_FIRST
    assert interval_utils.to_24_hour_interval(start) == MAY_FIRST_24H
    assert interval_utils.to_24_hour_interval(start - timedelta(microseconds=1)) == (
        MAY_FIRST_24H - 1
    )


def test_to_interval_with_custom_width() -> None:
    assert interval_utils.to_interval(MAY_FIRST, 24) == MAY_FIRST_24H
    assert interval_utils.to_interval(MAY_FIRST, 12) == MAY_FIRST_24H * 2
    assert interval_utils.to_interval(MAY_FIRST + timedelta(hours=13), 12) == MAY_FIRST_24H * 2 + 1
    with pytest.raises(ValueError):
        interval_utils.to_interval(MAY_FIRST, 0)


def test_current_interval_uses_configured_width(monkeypatch) -> None:
    monkeypatch.setattr(settings, "interval_length_hours", 6)
    assert interval_utils.current_interval(MAY_FIRST + timedelta(hours=7)) == MAY_FIRST_24H * 4 + 1
