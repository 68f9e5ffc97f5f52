"""Preferences persistence on top of the key-value port."""

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from presence_history.domain.models import OverlayFilter, Preferences

if TYPE_CHECKING:
    from presence_history.domain.ports import KeyValueStore

logger = logging.getLogger(__name__)

PREFS_KEY = "presence_history.prefs.v2"


class PreferencesRepository:
    """Loads and saves preferences, merging persisted overrides over defaults."""

    def __init__(self, key_value_store: "KeyValueStore", key: str = PREFS_KEY) -> None:
        """Initialize with the key-value store to persist into."""
        self._kv = key_value_store
        self._key = key

    def load(self, defaults: Preferences) -> Preferences:
        """Load preferences; persisted values override the given defaults.

        Unknown keys are ignored. If the persisted overrides are unreadable
        or invalid, the defaults are returned unchanged.
        """
        try:
            raw = self._kv.get(self._key, None)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read preferences '{self._key}': {e}")
            return defaults

        if not isinstance(raw, dict) or not raw:
            return defaults

        known = set(Preferences.model_fields)
        overrides = {k: v for k, v in raw.items() if k in known}
        try:
            return Preferences.model_validate({**defaults.model_dump(), **overrides})
        except ValidationError as e:
            logger.warning(
                f"Ignoring invalid preferences '{self._key}' "
                f"({e.error_count()} validation error(s))"
            )
            return defaults

    def save(self, preferences: Preferences) -> None:
        """Persist preferences."""
        self._kv.set(self._key, preferences.model_dump(mode="json"))

    def set_filter(self, preferences: Preferences, overlay_filter: OverlayFilter) -> Preferences:
        """Select a new overlay filter and persist the updated preferences."""
        updated = preferences.model_copy(update={"overlay_filter": OverlayFilter(overlay_filter)})
        self.save(updated)
        logger.info(f"Overlay filter set to '{updated.overlay_filter}'")
        return updated
