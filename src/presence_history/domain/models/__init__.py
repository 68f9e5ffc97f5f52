"""Domain models for presence history."""

from presence_history.domain.models.export_artifact import ExportArtifact
from presence_history.domain.models.hour_tally import HourTally
from presence_history.domain.models.observed_entity import ObservedEntity
from presence_history.domain.models.preferences import Preferences
from presence_history.domain.models.presence_record import PresenceRecord, PresenceStore
from presence_history.domain.models.presence_status import (
    Classification,
    OverlayFilter,
    PresenceStatus,
)
from presence_history.domain.models.sample_result import SampleResult
from presence_history.domain.models.user_presence_view import UserPresenceView

__all__ = [
    "Classification",
    "ExportArtifact",
    "HourTally",
    "ObservedEntity",
    "OverlayFilter",
    "Preferences",
    "PresenceRecord",
    "PresenceStatus",
    "PresenceStore",
    "SampleResult",
    "UserPresenceView",
]
