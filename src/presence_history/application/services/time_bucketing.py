"""UTC hour buckets and day boundaries.

All keys are derived in UTC so they stay stable regardless of the viewer's
timezone. Every function takes the current instant explicitly.
"""

from datetime import UTC, datetime, timedelta

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)
HOURS_PER_DAY = 24

_BUCKET_FORMAT = "%Y-%m-%dT%H:00:00.000Z"


def to_utc(instant: datetime) -> datetime:
    """Convert an instant to aware UTC; naive datetimes are taken as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def hour_start(instant: datetime) -> datetime:
    """Start of the UTC hour containing instant."""
    return to_utc(instant).replace(minute=0, second=0, microsecond=0)


def hour_bucket_id(instant: datetime) -> str:
    """Key of the UTC hour containing instant, e.g. ``2024-01-01T10:00:00.000Z``."""
    return hour_start(instant).strftime(_BUCKET_FORMAT)


def utc_day_start(days_ago: int, now: datetime) -> datetime:
    """UTC midnight ``days_ago`` whole days before the UTC day containing now."""
    today = to_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)
    return today - days_ago * DAY


def day_bucket_ids(day_start: datetime) -> list[str]:
    """The 24 bucket ids of the UTC day starting at day_start, in hour order."""
    return [hour_bucket_id(day_start + hour * HOUR) for hour in range(HOURS_PER_DAY)]


def retained_bucket_ids(horizon_days: int, now: datetime) -> set[str]:
    """All bucket ids from ``utc_day_start(horizon_days - 1)`` through the end of today."""
    keep: set[str] = set()
    for days_ago in range(horizon_days):
        keep.update(day_bucket_ids(utc_day_start(days_ago, now)))
    return keep
