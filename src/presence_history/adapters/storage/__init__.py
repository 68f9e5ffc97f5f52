"""Key-value storage adapters."""

from presence_history.adapters.storage.in_memory_store import InMemoryKeyValueStore
from presence_history.adapters.storage.json_file_store import JsonFileKeyValueStore

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore"]
