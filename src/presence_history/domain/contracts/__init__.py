"""Domain contracts (protocols) implemented by application services and adapters."""

from presence_history.domain.contracts.presence_sampler import PresenceSamplerProtocol
from presence_history.domain.contracts.sampling_poller import SamplingPollerProtocol

__all__ = ["PresenceSamplerProtocol", "SamplingPollerProtocol"]
