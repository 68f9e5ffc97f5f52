"""Presence store persistence on top of the key-value port."""

import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import ValidationError

from presence_history.application.services.time_bucketing import to_utc
from presence_history.domain.models import ExportArtifact, PresenceStore

if TYPE_CHECKING:
    from presence_history.domain.ports import KeyValueStore

logger = logging.getLogger(__name__)

# Bump the version suffix whenever the persisted schema changes incompatibly.
STORE_KEY = "presence_history.store.v2"

EXPORT_PREFIX = "presence-history"


class PresenceStoreRepository:
    """Loads, saves, clears and exports the presence store."""

    def __init__(self, key_value_store: "KeyValueStore", key: str = STORE_KEY) -> None:
        """Initialize with the key-value store to persist into."""
        self._kv = key_value_store
        self._key = key

    def load(self) -> PresenceStore:
        """Load the persisted store; missing or unreadable data yields an empty store."""
        try:
            raw = self._kv.get(self._key, None)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read presence store '{self._key}': {e}")
            return PresenceStore()

        if raw is None:
            return PresenceStore()
        if not isinstance(raw, dict):
            logger.warning(
                f"Ignoring presence store '{self._key}': expected an object, "
                f"got {type(raw).__name__}"
            )
            return PresenceStore()

        try:
            return PresenceStore.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                f"Ignoring malformed presence store '{self._key}' "
                f"({e.error_count()} validation error(s))"
            )
            return PresenceStore()

    def save(self, store: PresenceStore) -> None:
        """Persist the full store."""
        self._kv.set(self._key, store.model_dump(mode="json"))

    def clear(self) -> PresenceStore:
        """Delete the persisted store and return a fresh empty one."""
        self._kv.delete(self._key)
        logger.info(f"Cleared presence store '{self._key}'")
        return PresenceStore()

    def export(self, now: datetime) -> ExportArtifact:
        """Serialize the full store as a JSON document named after the UTC instant."""
        store = self.load()
        timestamp = to_utc(now).strftime("%Y-%m-%dT%H-%M-%S")
        content = json.dumps(store.model_dump(mode="json"), indent=2, ensure_ascii=False)
        return ExportArtifact(filename=f"{EXPORT_PREFIX}-{timestamp}.json", content=content)
