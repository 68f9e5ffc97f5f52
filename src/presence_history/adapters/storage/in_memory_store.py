"""In-memory key-value store."""

from __future__ import annotations

import copy
from typing import Any

from presence_history.domain.ports.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Keeps values in a dict; values are deep-copied in and out like a real store."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        """Initialize the store, optionally with pre-populated values."""
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get the value stored under key, or default if absent."""
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        """Store a value under key."""
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        """Remove key; a missing key is not an error."""
        self._data.pop(key, None)

    def keys(self) -> set[str]:
        """All keys currently stored."""
        return set(self._data.keys())
