"""Pollers for periodic presence sampling."""

from presence_history.adapters.pollers.sampling_poller import SamplingPoller

__all__ = ["SamplingPoller"]
