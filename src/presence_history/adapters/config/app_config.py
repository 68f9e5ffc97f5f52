"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from presence_history.domain.models import OverlayFilter, Preferences

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Settings a [presence] table in the TOML file may override.
_TOML_KEYS = (
    "data_file",
    "snapshot_file",
    "sampling_interval_seconds",
    "horizon_days",
    "active_threshold",
    "overlay_filter",
    "mini_bar_hours",
    "log_level",
)


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Storage and source
    data_file: str = Field(
        default="presence-history.json",
        description="JSON file holding the persisted presence store and preferences",
    )
    snapshot_file: str = Field(
        default="snapshot.json",
        description="JSON file the presence snapshot is read from on every cycle",
    )

    # Sampling and retention
    sampling_interval_seconds: int = Field(
        default=60, description="Interval between presence samples in seconds"
    )
    horizon_days: int = Field(
        default=10, description="Number of UTC days of hourly history to retain"
    )
    active_threshold: int = Field(
        default=1,
        description="Minimum samples in an hour for it to count as active, away or DND",
    )

    # Display
    overlay_filter: str = Field(
        default="all", description="User list filter: 'all', 'active', 'inactive' or 'vacation'"
    )
    mini_bar_hours: int = Field(
        default=12, description="Number of hours shown in the compact activity bars"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    # Optional TOML file with a [presence] table overriding the settings above
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file",
    )

    @field_validator("overlay_filter")
    @classmethod
    def validate_overlay_filter(cls, v: str) -> str:
        """Validate overlay filter is one of the known filters."""
        normalized = v.strip().lower()
        if normalized not in {f.value for f in OverlayFilter}:
            raise ValueError(
                "overlay_filter must be one of 'all', 'active', 'inactive' or 'vacation'"
            )
        return normalized

    @field_validator(
        "sampling_interval_seconds", "horizon_days", "active_threshold", "mini_bar_hours"
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate counts and intervals are positive."""
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return v.upper()

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load TOML configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def load_toml_overrides(self) -> "AppConfig":
        """Apply the [presence] table of the TOML file, if configured.

        Returns:
            This config, updated in place.
        """
        if not self.config_file:
            return self

        presence = self._load_toml_data().get("presence", {})
        for key in _TOML_KEYS:
            if key in presence:
                setattr(self, key, presence[key])
        return self

    def default_preferences(self) -> Preferences:
        """Preferences defaults derived from this configuration."""
        return Preferences(
            sampling_interval_seconds=self.sampling_interval_seconds,
            horizon_days=self.horizon_days,
            active_threshold=self.active_threshold,
            overlay_filter=OverlayFilter(self.overlay_filter),
        )

    def configure_logging(self) -> None:
        """Configure root logging for the entry points."""
        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
