"""Presence record and store domain models."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from presence_history.domain.models.hour_tally import HourTally
from presence_history.domain.models.presence_status import PresenceStatus


class PresenceRecord(BaseModel):
    """Everything known about one user: identity, last status and hourly history."""

    id: str
    name: str = ""
    avatar: str = ""
    last_status: PresenceStatus = PresenceStatus.OFFLINE
    last_active_at: datetime | None = None
    custom_status_text: str = ""
    custom_status_emoji_alt: str = ""
    custom_status_emoji_shortcode: str = ""
    custom_status_image_ref: str = ""
    hourly: dict[str, HourTally] = Field(default_factory=dict)

    @field_validator("last_status", mode="before")
    @classmethod
    def parse_last_status(cls, v: object) -> PresenceStatus:
        """Accept any stored status value, unknown ones become offline."""
        return PresenceStatus.parse(v)


class PresenceStore(BaseModel):
    """Mapping from user id to presence record; the only persisted aggregate."""

    users: dict[str, PresenceRecord] = Field(default_factory=dict)

    def get(self, user_id: str) -> PresenceRecord | None:
        """Get the record for a user, or None if the user was never observed."""
        return self.users.get(user_id)

    def bucket_count(self, user_id: str) -> int:
        """Number of retained hour buckets for a user."""
        record = self.users.get(user_id)
        return len(record.hourly) if record else 0
