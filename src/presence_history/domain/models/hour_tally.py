"""Hour tally domain model."""

from pydantic import BaseModel, NonNegativeInt

from presence_history.domain.models.presence_status import PresenceStatus


class HourTally(BaseModel):
    """Sample counters for one UTC hour bucket.

    ``total`` counts every sample; at most one of ``active``, ``away`` or
    ``dnd`` is incremented per sample, so their sum never exceeds ``total``.
    """

    active: NonNegativeInt = 0
    away: NonNegativeInt = 0
    dnd: NonNegativeInt = 0
    total: NonNegativeInt = 0

    def record(self, status: PresenceStatus) -> None:
        """Count one sample with the given status."""
        if status is PresenceStatus.ACTIVE:
            self.active += 1
        elif status is PresenceStatus.AWAY:
            self.away += 1
        elif status is PresenceStatus.DND:
            self.dnd += 1
        self.total += 1
