"""Presence sampling use case: snapshot, merge, prune, persist."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from presence_history.application.services.presence_merger import merge_snapshot
from presence_history.application.services.presence_queries import (
    DEFAULT_WINDOW_HOURS,
    build_user_view,
    filter_entities,
    heatmap_grid,
)
from presence_history.application.services.retention_pruner import prune_expired_buckets
from presence_history.domain.contracts.presence_sampler import PresenceSamplerProtocol
from presence_history.domain.models import (
    Classification,
    ExportArtifact,
    OverlayFilter,
    Preferences,
    PresenceRecord,
    PresenceStore,
    SampleResult,
    UserPresenceView,
)

if TYPE_CHECKING:
    from presence_history.application.services.presence_repository import (
        PresenceStoreRepository,
    )
    from presence_history.domain.ports import SnapshotSource

logger = logging.getLogger(__name__)


class PresenceSamplingService(PresenceSamplerProtocol):
    """Runs sampling cycles and answers display queries against the persisted store."""

    def __init__(
        self,
        snapshot_source: "SnapshotSource",
        store_repository: "PresenceStoreRepository",
        preferences: Preferences,
        window_hours: int = DEFAULT_WINDOW_HOURS,
    ) -> None:
        """Initialize the sampling service.

        Args:
            snapshot_source: Source of live presence snapshots.
            store_repository: Repository persisting the presence store.
            preferences: Retention, threshold and filter settings.
            window_hours: Number of hours shown in the compact activity bars.
        """
        self._source = snapshot_source
        self._repository = store_repository
        self.preferences = preferences
        self.window_hours = window_hours
        self._running = False

    @property
    def sampling_interval_seconds(self) -> int:
        """Seconds to wait between two cycles."""
        return self.preferences.sampling_interval_seconds

    def sample_once(self, now: datetime | None = None) -> SampleResult | None:
        """Take one snapshot and fold it into the persisted store.

        Overlapping invocations are skipped so the store is never read and
        written by two cycles at once. Errors from the snapshot source or the
        storage propagate; the caller decides whether to retry next cycle.
        """
        if self._running:
            logger.warning("Sampling cycle already in progress, skipping")
            return None

        self._running = True
        try:
            sampled_at = now or datetime.now(UTC)
            snapshot = self._source.get_snapshot()
            store = self._repository.load()
            merge_snapshot(store, snapshot, sampled_at)
            pruned = prune_expired_buckets(store, self.preferences.horizon_days, sampled_at)
            self._repository.save(store)
        finally:
            self._running = False

        logger.info(
            f"Sampled {len(snapshot)} user(s) at {sampled_at.isoformat()}, "
            f"tracking {len(store.users)} user(s)"
        )
        return SampleResult(
            sampled_at=sampled_at, observed=len(snapshot), pruned=pruned, store=store
        )

    def load_store(self) -> PresenceStore:
        """Read the persisted store."""
        return self._repository.load()

    def current_views(
        self,
        now: datetime | None = None,
        query: str = "",
        overlay_filter: OverlayFilter | None = None,
    ) -> list[UserPresenceView]:
        """Summaries of the currently observed users passing the filter and search.

        Sorted by display name, ignoring case. Reads the store and a fresh
        snapshot; never modifies the store.
        """
        at = now or datetime.now(UTC)
        selected = overlay_filter or self.preferences.overlay_filter
        store = self._repository.load()
        entities = filter_entities(self._source.get_snapshot(), selected, query)
        views = [
            build_user_view(entity, store.get(entity.id), self.preferences, at, self.window_hours)
            for entity in entities
        ]
        return sorted(views, key=lambda view: view.name.casefold())

    def user_view(self, user_id: str, now: datetime | None = None) -> UserPresenceView | None:
        """Summary of one user, judging vacation from stored history before the live read."""
        at = now or datetime.now(UTC)
        record = self._repository.load().get(user_id)
        entity = next((e for e in self._source.get_snapshot() if e.id == user_id), None)
        if entity is None and record is None:
            return None
        return build_user_view(
            entity, record, self.preferences, at, self.window_hours, prefer_record=True
        )

    def user_heatmap(
        self, user_id: str, now: datetime | None = None
    ) -> tuple[PresenceRecord | None, list[list[Classification]]]:
        """Stored record of a user and its heatmap grid over the retention horizon."""
        at = now or datetime.now(UTC)
        record = self._repository.load().get(user_id)
        grid = heatmap_grid(
            record, self.preferences.horizon_days, at, self.preferences.active_threshold
        )
        return record, grid

    def export(self, now: datetime | None = None) -> ExportArtifact:
        """Export the full store as a JSON artifact."""
        return self._repository.export(now or datetime.now(UTC))

    def clear(self) -> PresenceStore:
        """Discard all stored presence history."""
        return self._repository.clear()
