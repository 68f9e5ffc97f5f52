"""User preferences domain model."""

from pydantic import BaseModel, ConfigDict, Field

from presence_history.domain.models.presence_status import OverlayFilter


class Preferences(BaseModel):
    """Sampling cadence, retention and display settings persisted across sessions."""

    model_config = ConfigDict(frozen=True)

    sampling_interval_seconds: int = Field(default=60, ge=1)
    horizon_days: int = Field(default=10, ge=1)
    active_threshold: int = Field(default=1, ge=1)
    overlay_filter: OverlayFilter = OverlayFilter.ALL
