"""Snapshot source reading observed users from a JSON file."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from presence_history.domain.models.observed_entity import ObservedEntity
from presence_history.domain.ports.snapshot_source import SnapshotSource

logger = logging.getLogger(__name__)


def parse_snapshot(data: Any) -> list[ObservedEntity]:
    """Parse raw snapshot JSON into entities.

    Accepts either a list of user objects or an object with a ``users`` list.
    Entries that are not objects or carry no id are skipped with a warning.
    """
    items = data.get("users", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        logger.warning(f"Snapshot has unexpected shape ({type(data).__name__}), ignoring it")
        return []

    entities: list[ObservedEntity] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(f"Skipping snapshot entry {index}: not an object")
            continue
        try:
            entities.append(ObservedEntity.from_raw(item))
        except (ValueError, ValidationError) as e:
            logger.warning(f"Skipping snapshot entry {index}: {e}")
    return entities


class JsonFileSnapshotSource(SnapshotSource):
    """Reads the current presence snapshot from a JSON file written by an exporter."""

    def __init__(self, path: str | Path) -> None:
        """Initialize with the path of the snapshot file."""
        self.path = Path(path)

    def get_snapshot(self) -> list[ObservedEntity]:
        """Return all users listed in the snapshot file.

        A missing file is an empty snapshot.

        Raises:
            OSError: If the file exists but cannot be read.
            json.JSONDecodeError: If the file is not valid JSON.
        """
        if not self.path.exists():
            logger.debug(f"Snapshot file {self.path} does not exist, no users observed")
            return []
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        return parse_snapshot(data)
