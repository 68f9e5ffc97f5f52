"""Protocol for one presence sampling cycle."""

from datetime import datetime
from typing import Protocol

from presence_history.domain.models.sample_result import SampleResult


class PresenceSamplerProtocol(Protocol):
    """Protocol for running a sample, merge, prune and persist cycle."""

    @property
    def sampling_interval_seconds(self) -> int:
        """Seconds to wait between two cycles."""
        ...

    def sample_once(self, now: datetime | None = None) -> SampleResult | None:
        """Run one cycle.

        Args:
            now: The sampling instant; defaults to the current UTC time.

        Returns:
            The cycle result, or None if another cycle was still running.
        """
        ...
