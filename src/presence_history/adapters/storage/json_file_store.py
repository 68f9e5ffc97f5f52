"""Key-value store persisted as a single JSON document on disk."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from presence_history.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Stores all keys as one JSON object in a file.

    Every operation re-reads the file so several processes (the poller and the
    CLI) see each other's writes. Writes replace the file atomically.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize with the path of the JSON file (created on first write)."""
        self.path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        """Read the whole document; a missing or malformed file reads as empty."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read {self.path}, treating it as empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {self.path}: top-level value is not an object")
            return {}
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        """Get the value stored under key, or default if absent."""
        return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        """Remove key; a missing key is not an error."""
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
