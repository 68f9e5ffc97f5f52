"""Snapshot source port."""

from typing import Protocol

from presence_history.domain.models.observed_entity import ObservedEntity


class SnapshotSource(Protocol):
    """Port for reading the currently observed users and their live status.

    Called once per sampling cycle and again whenever views are rendered, so
    implementations must be cheap to call repeatedly.
    """

    def get_snapshot(self) -> list[ObservedEntity]:
        """Return all currently observed users."""
        ...
