"""Shared fixtures for presence history tests."""

from datetime import UTC, datetime

import pytest

from presence_history.adapters.storage import InMemoryKeyValueStore
from presence_history.application.services import (
    PresenceSamplingService,
    PresenceStoreRepository,
)
from presence_history.domain.models import Preferences
from tests.fakes import StaticSnapshotSource


@pytest.fixture
def now() -> datetime:
    """A fixed sampling instant in the middle of a UTC hour."""
    return datetime(2024, 1, 1, 10, 15, tzinfo=UTC)


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def snapshot_source() -> StaticSnapshotSource:
    """Snapshot source with no users."""
    return StaticSnapshotSource()


@pytest.fixture
def service(
    snapshot_source: StaticSnapshotSource, kv_store: InMemoryKeyValueStore
) -> PresenceSamplingService:
    """Sampling service over in-memory storage with default preferences."""
    return PresenceSamplingService(
        snapshot_source=snapshot_source,
        store_repository=PresenceStoreRepository(kv_store),
        preferences=Preferences(),
    )
