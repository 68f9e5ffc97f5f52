"""Protocol for periodic presence sampling."""

from typing import Protocol


class SamplingPollerProtocol(Protocol):
    """Protocol for running the sampling cycle on a fixed cadence."""

    async def start(self) -> None:
        """Start the sampling poller."""
        ...

    async def stop(self) -> None:
        """Stop the sampling poller."""
        ...
