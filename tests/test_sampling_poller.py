"""Tests for SamplingPoller behavior."""

import asyncio
import threading
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from presence_history.adapters.pollers import SamplingPoller
from presence_history.domain.models import PresenceStore, SampleResult


def _result() -> SampleResult:
    return SampleResult(
        sampled_at=datetime(2024, 1, 1, tzinfo=UTC), observed=1, pruned=0, store=PresenceStore()
    )


@pytest.fixture
def sampler() -> MagicMock:
    """Create a mock sampler with a short interval."""
    mock = MagicMock()
    mock.sampling_interval_seconds = 0.01
    mock.sample_once.return_value = _result()
    return mock


@pytest.mark.asyncio
async def test_poller_samples_immediately_and_periodically(sampler: MagicMock) -> None:
    """Given a started poller, when time passes, then cycles run immediately and on the cadence."""
    on_sample = MagicMock()
    poller = SamplingPoller(sampler, on_sample=on_sample)

    await poller.start()
    await asyncio.sleep(0.05)
    await poller.stop()

    assert sampler.sample_once.call_count >= 2
    assert poller.completed_cycles == sampler.sample_once.call_count
    on_sample.assert_called_with(sampler.sample_once.return_value)
    assert poller.is_running is False


@pytest.mark.asyncio
async def test_poller_keeps_running_after_failed_cycle(sampler: MagicMock) -> None:
    """Given a cycle that raises, when polling continues, then later cycles still run."""
    calls = {"count": 0}

    def flaky_sample() -> SampleResult:
        calls["count"] += 1
        if calls["count"] == 1:
            raise RuntimeError("boom")
        return _result()

    sampler.sample_once.side_effect = flaky_sample
    poller = SamplingPoller(sampler)

    await poller.start()
    for _ in range(100):
        if sampler.sample_once.call_count >= 3:
            break
        await asyncio.sleep(0.01)
    await poller.stop()

    assert poller.failed_cycles == 1
    assert poller.completed_cycles >= 1


@pytest.mark.asyncio
async def test_poller_skipped_cycle_does_not_notify(sampler: MagicMock) -> None:
    """Given a cycle skipped by the sampler, when polling, then the callback is not invoked."""
    sampler.sample_once.return_value = None
    on_sample = MagicMock()
    poller = SamplingPoller(sampler, on_sample=on_sample)

    await poller.start()
    await asyncio.sleep(0.03)
    await poller.stop()

    on_sample.assert_not_called()
    assert poller.completed_cycles == 0


@pytest.mark.asyncio
async def test_start_twice_keeps_single_task(sampler: MagicMock) -> None:
    """Given a running poller, when started again, then no second task is created."""
    poller = SamplingPoller(sampler)

    await poller.start()
    first_task = poller._task
    await poller.start()

    assert poller._task is first_task
    await poller.stop()


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(sampler: MagicMock) -> None:
    """Given a poller that never started, when stopping, then nothing happens."""
    poller = SamplingPoller(sampler)

    await poller.stop()

    sampler.sample_once.assert_not_called()


@pytest.mark.asyncio
async def test_poller_samples_outside_event_loop_thread(sampler: MagicMock) -> None:
    """Given a blocking sampler, when a cycle runs, then it runs in a worker thread."""
    loop_thread = threading.get_ident()
    sample_threads: list[int] = []

    def blocking_sample() -> SampleResult:
        sample_threads.append(threading.get_ident())
        return _result()

    sampler.sample_once.side_effect = blocking_sample
    poller = SamplingPoller(sampler)

    await poller.start()
    for _ in range(100):
        if sample_threads:
            break
        await asyncio.sleep(0.01)
    await poller.stop()

    assert sample_threads
    assert loop_thread not in sample_threads
