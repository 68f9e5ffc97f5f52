"""Application services (use cases) for presence history."""

from presence_history.application.services.preferences_repository import (
    PREFS_KEY,
    PreferencesRepository,
)
from presence_history.application.services.presence_merger import merge_snapshot
from presence_history.application.services.presence_queries import (
    NEVER,
    build_user_view,
    classify,
    filter_entities,
    heatmap_grid,
    rolling_window,
    time_since,
)
from presence_history.application.services.presence_repository import (
    STORE_KEY,
    PresenceStoreRepository,
)
from presence_history.application.services.retention_pruner import prune_expired_buckets
from presence_history.application.services.sampling_service import PresenceSamplingService
from presence_history.application.services.time_bucketing import hour_bucket_id, utc_day_start
from presence_history.application.services.vacation_detector import is_vacation

__all__ = [
    "NEVER",
    "PREFS_KEY",
    "STORE_KEY",
    "PreferencesRepository",
    "PresenceSamplingService",
    "PresenceStoreRepository",
    "build_user_view",
    "classify",
    "filter_entities",
    "heatmap_grid",
    "hour_bucket_id",
    "is_vacation",
    "merge_snapshot",
    "prune_expired_buckets",
    "rolling_window",
    "time_since",
    "utc_day_start",
]
