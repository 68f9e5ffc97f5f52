"""Rolling-window retention for hourly presence buckets."""

import logging
from datetime import datetime

from presence_history.application.services.time_bucketing import retained_bucket_ids
from presence_history.domain.models import PresenceStore

logger = logging.getLogger(__name__)


def prune_expired_buckets(store: PresenceStore, horizon_days: int, now: datetime) -> int:
    """Delete hourly buckets outside the retention horizon from every record.

    Keeps exactly the buckets of the last ``horizon_days`` UTC days (today
    included), so no record holds more than ``horizon_days * 24`` buckets.
    Records themselves are never removed, even when their history is empty.

    Args:
        store: The store to prune in place.
        horizon_days: Number of UTC days to retain, at least 1.
        now: The current instant.

    Returns:
        Number of deleted buckets.

    Raises:
        ValueError: If horizon_days is less than 1.
    """
    if horizon_days < 1:
        raise ValueError(f"horizon_days must be at least 1, got {horizon_days}")

    keep = retained_bucket_ids(horizon_days, now)
    removed = 0
    for record in store.users.values():
        expired = [key for key in record.hourly if key not in keep]
        for key in expired:
            del record.hourly[key]
        removed += len(expired)

    if removed > 0:
        logger.info(f"Pruned {removed} expired hour bucket(s) (horizon: {horizon_days} day(s))")
    return removed
