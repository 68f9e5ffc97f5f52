"""Ports (interfaces) for the ports-and-adapters architecture."""

from presence_history.domain.ports.display_adapter import DisplayAdapter
from presence_history.domain.ports.key_value_store import KeyValueStore
from presence_history.domain.ports.snapshot_source import SnapshotSource

__all__ = [
    "DisplayAdapter",
    "KeyValueStore",
    "SnapshotSource",
]
