"""Sampling cycle result domain model."""

from dataclasses import dataclass
from datetime import datetime

from presence_history.domain.models.presence_record import PresenceStore


@dataclass(frozen=True)
class SampleResult:
    """Outcome of one sample, merge, prune and persist cycle."""

    sampled_at: datetime
    observed: int
    pruned: int
    store: PresenceStore
