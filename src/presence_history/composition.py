"""Wiring of adapters and application services from configuration."""

from dataclasses import dataclass

from presence_history.adapters.config import AppConfig
from presence_history.adapters.sources import JsonFileSnapshotSource
from presence_history.adapters.storage import JsonFileKeyValueStore
from presence_history.application.services import (
    PreferencesRepository,
    PresenceSamplingService,
    PresenceStoreRepository,
)
from presence_history.domain.ports import KeyValueStore, SnapshotSource


@dataclass
class Components:
    """Application components built for one process."""

    config: AppConfig
    preferences_repository: PreferencesRepository
    service: PresenceSamplingService


def build_components(
    config: AppConfig,
    key_value_store: KeyValueStore | None = None,
    snapshot_source: SnapshotSource | None = None,
) -> Components:
    """Build the sampling service and repositories for the given configuration.

    Args:
        config: Application configuration.
        key_value_store: Storage to use instead of the configured JSON file.
        snapshot_source: Source to use instead of the configured snapshot file.
    """
    kv = key_value_store if key_value_store is not None else JsonFileKeyValueStore(config.data_file)
    source = (
        snapshot_source
        if snapshot_source is not None
        else JsonFileSnapshotSource(config.snapshot_file)
    )

    preferences_repository = PreferencesRepository(kv)
    preferences = preferences_repository.load(config.default_preferences())
    service = PresenceSamplingService(
        snapshot_source=source,
        store_repository=PresenceStoreRepository(kv),
        preferences=preferences,
        window_hours=config.mini_bar_hours,
    )
    return Components(
        config=config, preferences_repository=preferences_repository, service=service
    )
