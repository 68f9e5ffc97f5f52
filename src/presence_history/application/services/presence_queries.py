"""Read-only queries deriving display summaries from the presence store."""

from collections.abc import Iterable
from datetime import datetime

from presence_history.application.services.time_bucketing import (
    HOUR,
    HOURS_PER_DAY,
    day_bucket_ids,
    hour_bucket_id,
    to_utc,
    utc_day_start,
)
from presence_history.application.services.vacation_detector import is_vacation
from presence_history.domain.models import (
    Classification,
    HourTally,
    ObservedEntity,
    OverlayFilter,
    Preferences,
    PresenceRecord,
    PresenceStatus,
    UserPresenceView,
)

NEVER = "never"
VACATION_LABEL = "\U0001f334"
DEFAULT_WINDOW_HOURS = 12

STATUS_LABELS = {
    PresenceStatus.ACTIVE: "active",
    PresenceStatus.AWAY: "away",
    PresenceStatus.DND: "DND",
    PresenceStatus.OFFLINE: "offline",
}


def classify(tally: HourTally | None, threshold: int) -> Classification:
    """Classify an hour bucket; priority is active, then dnd, then away."""
    if tally is None:
        return Classification.INACTIVE
    if tally.active >= threshold:
        return Classification.ACTIVE
    if tally.dnd >= threshold:
        return Classification.DND
    if tally.away >= threshold:
        return Classification.AWAY
    return Classification.INACTIVE


def _classify_key(record: PresenceRecord | None, key: str, threshold: int) -> Classification:
    tally = record.hourly.get(key) if record is not None else None
    return classify(tally, threshold)


def rolling_window(
    record: PresenceRecord | None, window_hours: int, now: datetime, threshold: int
) -> list[Classification]:
    """Classifications of the last ``window_hours`` hours, oldest first, ending with now's hour.

    Raises:
        ValueError: If window_hours is negative.
    """
    if window_hours < 0:
        raise ValueError(f"window_hours must not be negative, got {window_hours}")
    return [
        _classify_key(record, hour_bucket_id(now - offset * HOUR), threshold)
        for offset in range(window_hours - 1, -1, -1)
    ]


def heatmap_grid(
    record: PresenceRecord | None, horizon_days: int, now: datetime, threshold: int
) -> list[list[Classification]]:
    """Day by hour grid of classifications.

    Row 0 is today (UTC), row ``d`` is ``d`` days back; column ``h`` is the
    UTC hour of that day. The grid always has ``horizon_days`` rows of 24
    cells, however sparse the history is.
    """
    grid: list[list[Classification]] = []
    for days_ago in range(horizon_days):
        keys = day_bucket_ids(utc_day_start(days_ago, now))
        grid.append([_classify_key(record, key, threshold) for key in keys])
    return grid


def heatmap_day_starts(horizon_days: int, now: datetime) -> list[datetime]:
    """UTC start of each heatmap row, row 0 first."""
    return [utc_day_start(days_ago, now) for days_ago in range(horizon_days)]


def time_since(instant: datetime | None, now: datetime) -> str:
    """Humanize the time elapsed since instant: just now, minutes, hours or days."""
    if instant is None:
        return NEVER

    elapsed = max(0, int((to_utc(now) - to_utc(instant)).total_seconds()))
    minutes = elapsed // 60
    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes} min"
    hours = minutes // 60
    if hours < HOURS_PER_DAY:
        return f"{hours} h"
    return f"{hours // HOURS_PER_DAY} d"


def status_label(status: PresenceStatus, on_vacation: bool = False) -> str:
    """Short label shown next to a user; vacation overrides the raw status."""
    if on_vacation:
        return VACATION_LABEL
    return STATUS_LABELS.get(status, STATUS_LABELS[PresenceStatus.OFFLINE])


def last_seen_at(
    record: PresenceRecord | None, live_status: PresenceStatus | None, now: datetime
) -> datetime | None:
    """Instant the user was last active; now if the live status is active."""
    if live_status is PresenceStatus.ACTIVE:
        return to_utc(now)
    return record.last_active_at if record is not None else None


def matches_filter(entity: ObservedEntity, overlay_filter: OverlayFilter, query: str = "") -> bool:
    """Whether a live entity passes the overlay filter and the name search."""
    needle = query.strip().lower()
    if needle and needle not in entity.name.lower():
        return False
    if overlay_filter is OverlayFilter.ACTIVE:
        return entity.status is PresenceStatus.ACTIVE
    if overlay_filter is OverlayFilter.INACTIVE:
        return entity.status is not PresenceStatus.ACTIVE
    if overlay_filter is OverlayFilter.VACATION:
        return is_vacation(entity)
    return True


def filter_entities(
    entities: Iterable[ObservedEntity], overlay_filter: OverlayFilter, query: str = ""
) -> list[ObservedEntity]:
    """Entities passing the overlay filter and name search, in snapshot order."""
    return [entity for entity in entities if matches_filter(entity, overlay_filter, query)]


def build_user_view(
    entity: ObservedEntity | None,
    record: PresenceRecord | None,
    preferences: Preferences,
    now: datetime,
    window_hours: int = DEFAULT_WINDOW_HOURS,
    prefer_record: bool = False,
) -> UserPresenceView:
    """Combine a live entity and its stored record into one display summary.

    Stored identity wins over the live read; the live status wins over the
    last recorded one. "Last seen" is now only when the user is live and
    active, otherwise the recorded last active instant.

    Vacation is judged from the live entity first, or from the stored record
    first when prefer_record is set; the note is the first non-empty custom
    status text in the same order.

    Raises:
        ValueError: If both entity and record are None.
    """
    if entity is None and record is None:
        raise ValueError("either a live entity or a stored record is required")

    user_id = entity.id if entity is not None else record.id  # type: ignore[union-attr]
    name = (record.name if record else "") or (entity.name if entity else "") or "Unknown"
    avatar = (record.avatar if record else "") or (entity.avatar if entity else "")
    status = entity.status if entity is not None else record.last_status  # type: ignore[union-attr]

    live_status = entity.status if entity is not None else None

    ordered = (record, entity) if prefer_record else (entity, record)
    sources = [source for source in ordered if source is not None]
    on_vacation = is_vacation(sources[0])
    note = ""
    if on_vacation:
        texts = (source.custom_status_text.strip() for source in sources)
        note = next((text for text in texts if text), "")

    return UserPresenceView(
        user_id=user_id,
        name=name,
        avatar=avatar,
        status=status,
        status_label=status_label(status, on_vacation),
        on_vacation=on_vacation,
        vacation_note=note,
        last_seen=time_since(last_seen_at(record, live_status, now), now),
        mini_bars=tuple(rolling_window(record, window_hours, now, preferences.active_threshold)),
    )
