"""Main entry point: sample presence on a fixed cadence until interrupted."""

import asyncio
import logging
import sys

from presence_history.adapters.config import AppConfig
from presence_history.adapters.pollers import SamplingPoller
from presence_history.composition import build_components
from presence_history.domain.models import SampleResult

logger = logging.getLogger(__name__)


def _log_result(result: SampleResult) -> None:
    logger.debug(
        f"Cycle at {result.sampled_at.isoformat()}: {result.observed} observed, "
        f"{result.pruned} pruned"
    )


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    try:
        config.load_toml_overrides()
    except (FileNotFoundError, ValueError) as e:
        logging.basicConfig(stream=sys.stderr)
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    config.configure_logging()

    components = build_components(config)
    preferences = components.service.preferences
    logger.info(
        f"Tracking presence from '{config.snapshot_file}' into '{config.data_file}' "
        f"(interval: {preferences.sampling_interval_seconds}s, "
        f"horizon: {preferences.horizon_days} day(s), "
        f"threshold: {preferences.active_threshold})"
    )

    poller = SamplingPoller(components.service, on_sample=_log_result)
    await poller.start()
    try:
        await asyncio.Event().wait()
    finally:
        logger.info("Shutting down...")
        await poller.stop()


def run() -> None:
    """Synchronous entry point for the sampling daemon."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
