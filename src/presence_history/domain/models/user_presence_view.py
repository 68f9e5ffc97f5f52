"""Display-ready presence summary of one user."""

from pydantic import BaseModel, ConfigDict

from presence_history.domain.models.presence_status import Classification, PresenceStatus


class UserPresenceView(BaseModel):
    """Summary of one user combining the live snapshot with stored history.

    Contains everything a renderer needs for one list row: identity, the
    current status label, the vacation note and the recent activity bars.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str
    avatar: str
    status: PresenceStatus
    status_label: str
    on_vacation: bool
    vacation_note: str
    last_seen: str
    mini_bars: tuple[Classification, ...]
