"""Display adapter port."""

from abc import ABC, abstractmethod
from datetime import datetime

from presence_history.domain.models.presence_record import PresenceRecord
from presence_history.domain.models.presence_status import Classification
from presence_history.domain.models.user_presence_view import UserPresenceView


class DisplayAdapter(ABC):
    """Port for presenting presence summaries to users."""

    @abstractmethod
    def render_user_list(self, views: list[UserPresenceView]) -> str:
        """Render the filtered user list with recent activity bars."""
        ...

    @abstractmethod
    def render_heatmap(
        self,
        view: UserPresenceView,
        record: PresenceRecord | None,
        grid: list[list[Classification]],
        day_starts: list[datetime],
    ) -> str:
        """Render the day by hour heatmap of one user."""
        ...
