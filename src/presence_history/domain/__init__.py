"""Domain layer - core presence model and ports."""

from presence_history.domain.models import (
    Classification,
    HourTally,
    ObservedEntity,
    PresenceRecord,
    PresenceStatus,
    PresenceStore,
)
from presence_history.domain.ports import (
    DisplayAdapter,
    KeyValueStore,
    SnapshotSource,
)

__all__ = [
    "Classification",
    "DisplayAdapter",
    "HourTally",
    "KeyValueStore",
    "ObservedEntity",
    "PresenceRecord",
    "PresenceStatus",
    "PresenceStore",
    "SnapshotSource",
]
