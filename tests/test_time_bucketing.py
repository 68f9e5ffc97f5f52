"""Tests for UTC hour bucketing and day boundaries."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from presence_history.application.services.time_bucketing import (
    day_bucket_ids,
    hour_bucket_id,
    retained_bucket_ids,
    utc_day_start,
)


def test_hour_bucket_id_formats_utc_hour_start() -> None:
    """Given an instant, when bucketing, then the key is the ISO start of its UTC hour."""
    assert hour_bucket_id(datetime(2024, 1, 1, 10, 15, 42, tzinfo=UTC)) == (
        "2024-01-01T10:00:00.000Z"
    )


@pytest.mark.parametrize(
    ("first", "second"),
    [
        (datetime(2024, 1, 1, 10, 0, tzinfo=UTC), datetime(2024, 1, 1, 10, 59, 59, tzinfo=UTC)),
        (
            datetime(2024, 3, 31, 23, 0, 0, 1, tzinfo=UTC),
            datetime(2024, 3, 31, 23, 30, tzinfo=UTC),
        ),
    ],
)
def test_instants_in_same_hour_share_a_key(first: datetime, second: datetime) -> None:
    """Given two instants within one UTC hour, when bucketing, then the keys are identical."""
    assert hour_bucket_id(first) == hour_bucket_id(second)


def test_instants_in_different_hours_get_different_keys() -> None:
    """Given instants one second apart across an hour boundary, when bucketing, then keys differ."""
    before = datetime(2024, 1, 1, 10, 59, 59, tzinfo=UTC)
    after = before + timedelta(seconds=1)

    assert hour_bucket_id(before) != hour_bucket_id(after)
    assert hour_bucket_id(before) < hour_bucket_id(after)


def test_hour_bucket_id_converts_other_timezones_to_utc() -> None:
    """Given an instant in UTC+2, when bucketing, then the UTC hour is used."""
    berlin_summer = timezone(timedelta(hours=2))
    instant = datetime(2024, 7, 1, 12, 30, tzinfo=berlin_summer)

    assert hour_bucket_id(instant) == "2024-07-01T10:00:00.000Z"


def test_hour_bucket_id_treats_naive_as_utc() -> None:
    """Given a naive datetime, when bucketing, then it is interpreted as UTC."""
    assert hour_bucket_id(datetime(2024, 1, 1, 3, 5)) == "2024-01-01T03:00:00.000Z"


def test_utc_day_start_today_and_days_ago() -> None:
    """Given now, when asking for day starts, then UTC midnights counting back are returned."""
    now = datetime(2024, 1, 2, 0, 0, 1, tzinfo=UTC)

    assert utc_day_start(0, now) == datetime(2024, 1, 2, tzinfo=UTC)
    assert utc_day_start(1, now) == datetime(2024, 1, 1, tzinfo=UTC)
    assert utc_day_start(3, now) == datetime(2023, 12, 30, tzinfo=UTC)


def test_utc_day_start_uses_utc_day_of_aware_now() -> None:
    """Given now late in the evening west of UTC, when asking for today, then the UTC day is used."""
    new_york = timezone(timedelta(hours=-5))
    now = datetime(2024, 1, 1, 22, 0, tzinfo=new_york)  # 03:00 UTC on Jan 2

    assert utc_day_start(0, now) == datetime(2024, 1, 2, tzinfo=UTC)


def test_day_bucket_ids_cover_24_hours_in_order() -> None:
    """Given a day start, when listing its buckets, then 24 ascending keys are returned."""
    keys = day_bucket_ids(datetime(2024, 1, 1, tzinfo=UTC))

    assert len(keys) == 24
    assert keys[0] == "2024-01-01T00:00:00.000Z"
    assert keys[-1] == "2024-01-01T23:00:00.000Z"
    assert keys == sorted(keys)


def test_retained_bucket_ids_span_horizon_including_rest_of_today() -> None:
    """Given a 3-day horizon, when listing retained keys, then 72 keys from two days ago on are returned."""
    now = datetime(2024, 1, 3, 5, 0, tzinfo=UTC)

    keep = retained_bucket_ids(3, now)

    assert len(keep) == 72
    assert min(keep) == "2024-01-01T00:00:00.000Z"
    assert max(keep) == "2024-01-03T23:00:00.000Z"
