"""Snapshot source adapters."""

from presence_history.adapters.sources.json_snapshot_source import (
    JsonFileSnapshotSource,
    parse_snapshot,
)

__all__ = ["JsonFileSnapshotSource", "parse_snapshot"]
