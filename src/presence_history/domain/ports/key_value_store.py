"""Key-value persistence port."""

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Port for persisting JSON-serializable values under string keys."""

    def get(self, key: str, default: Any = None) -> Any:
        """Get the value stored under key, or default if absent."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove key; a missing key is not an error."""
        ...
