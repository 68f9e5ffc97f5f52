"""Merge presence snapshots into the store."""

import logging
from collections.abc import Iterable
from datetime import datetime

from presence_history.application.services.time_bucketing import hour_bucket_id, to_utc
from presence_history.domain.models import (
    HourTally,
    ObservedEntity,
    PresenceRecord,
    PresenceStatus,
    PresenceStore,
)

logger = logging.getLogger(__name__)

# Fields overwritten only when the snapshot carries a non-empty value.
_STICKY_FIELDS = (
    "name",
    "avatar",
    "custom_status_text",
    "custom_status_emoji_alt",
    "custom_status_emoji_shortcode",
    "custom_status_image_ref",
)


def _apply_identity(record: PresenceRecord, entity: ObservedEntity) -> None:
    """Copy non-empty identity and custom status fields onto the record."""
    for field in _STICKY_FIELDS:
        value = getattr(entity, field)
        if value:
            setattr(record, field, value)


def merge_entity(record: PresenceRecord, entity: ObservedEntity, now: datetime) -> None:
    """Record one observation of entity at now."""
    _apply_identity(record, entity)

    record.last_status = entity.status
    if entity.status is PresenceStatus.ACTIVE:
        record.last_active_at = to_utc(now)

    bucket = hour_bucket_id(now)
    tally = record.hourly.get(bucket)
    if tally is None:
        tally = HourTally()
        record.hourly[bucket] = tally
    tally.record(entity.status)


def merge_snapshot(
    store: PresenceStore, snapshot: Iterable[ObservedEntity], now: datetime
) -> PresenceStore:
    """Upsert every observed entity into the store and count one sample each.

    Not idempotent: every call is one observation and increments the tally of
    the current hour bucket. Records of users missing from the snapshot are
    left untouched.

    Args:
        store: The store to update in place.
        snapshot: Entities observed in this sampling cycle.
        now: The sampling instant.

    Returns:
        The same store instance, updated.
    """
    created = 0
    merged = 0
    for entity in snapshot:
        record = store.users.get(entity.id)
        if record is None:
            record = PresenceRecord(id=entity.id)
            store.users[entity.id] = record
            created += 1
        merge_entity(record, entity, now)
        merged += 1

    logger.debug(
        f"Merged {merged} observation(s) into bucket {hour_bucket_id(now)} "
        f"({created} new user(s))"
    )
    return store
