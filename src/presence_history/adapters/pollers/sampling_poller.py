"""Sampling poller running the presence cycle on a fixed cadence."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from presence_history.domain.contracts.sampling_poller import SamplingPollerProtocol

if TYPE_CHECKING:
    from presence_history.domain.contracts.presence_sampler import PresenceSamplerProtocol
    from presence_history.domain.models.sample_result import SampleResult

logger = logging.getLogger(__name__)


class SamplingPoller(SamplingPollerProtocol):
    """Runs sampling cycles periodically in a background task."""

    def __init__(
        self,
        sampler: PresenceSamplerProtocol,
        on_sample: Callable[[SampleResult], None] | None = None,
    ) -> None:
        """Initialize the sampling poller.

        Args:
            sampler: The cycle to run (sample, merge, prune, persist).
            on_sample: Optional callback invoked after each successful cycle,
                e.g. to re-render views.
        """
        self.sampler = sampler
        self.on_sample = on_sample
        self.completed_cycles = 0
        self.failed_cycles = 0
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        """Whether the polling task is active."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the sampling poller."""
        if self.is_running:
            logger.warning("Sampling poller already running")
            return

        self._task = asyncio.create_task(self._poll_loop())
        logger.info(
            f"Started sampling poller (every {self.sampler.sampling_interval_seconds}s)"
        )

    async def stop(self) -> None:
        """Stop the sampling poller."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Sampling poller cancelled")
            logger.info("Stopped sampling poller")

    async def _poll_loop(self) -> None:
        """Main polling loop."""
        try:
            # Do initial sample immediately
            await self._run_cycle()

            while True:
                await asyncio.sleep(self.sampler.sampling_interval_seconds)
                await self._run_cycle()
        except asyncio.CancelledError:
            logger.info("Sampling poller cancelled")
            raise

    async def _run_cycle(self) -> None:
        """Run one cycle in a worker thread; a failed cycle is logged and the next one starts fresh."""
        try:
            result = await asyncio.to_thread(self.sampler.sample_once)
        except Exception as e:
            self.failed_cycles += 1
            logger.error(f"Sampling cycle failed: {e}", exc_info=True)
            return

        if result is None:
            return
        self.completed_cycles += 1
        if self.on_sample is not None:
            self.on_sample(result)
