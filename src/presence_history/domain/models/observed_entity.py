"""Observed entity domain model (one entry of a presence snapshot)."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from presence_history.domain.models.presence_status import PresenceStatus

_TEXT_FIELDS = (
    "name",
    "avatar",
    "custom_status_text",
    "custom_status_emoji_alt",
    "custom_status_emoji_shortcode",
    "custom_status_image_ref",
)

# Keys used by snapshot producers that export camelCase JSON.
_CAMEL_CASE_KEYS = {
    "customStatusText": "custom_status_text",
    "customStatusEmojiAlt": "custom_status_emoji_alt",
    "customStatusEmojiShortcode": "custom_status_emoji_shortcode",
    "customStatusImageRef": "custom_status_image_ref",
}


class ObservedEntity(BaseModel):
    """A user as seen in one snapshot of the live presence source."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    avatar: str = ""
    status: PresenceStatus = PresenceStatus.OFFLINE
    custom_status_text: str = ""
    custom_status_emoji_alt: str = ""
    custom_status_emoji_shortcode: str = ""
    custom_status_image_ref: str = ""

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: object) -> PresenceStatus:
        """Map unknown status values to offline instead of failing."""
        return PresenceStatus.parse(v)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def blank_if_missing(cls, v: object) -> str:
        """Treat None as an empty value and strip surrounding whitespace."""
        if v is None:
            return ""
        return str(v).strip()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ObservedEntity":
        """Build an entity from a raw snapshot mapping.

        Accepts snake_case and camelCase keys; ``presence`` is accepted as a
        synonym for ``status``. Missing optional fields become empty strings.

        Raises:
            ValueError: If the mapping carries no usable id.
        """
        data: dict[str, Any] = {}
        for key, value in raw.items():
            data[_CAMEL_CASE_KEYS.get(key, key)] = value
        if "status" not in data and "presence" in data:
            data["status"] = data["presence"]

        user_id = data.get("id")
        if user_id is None or not str(user_id).strip():
            raise ValueError("snapshot entity has no id")

        fields = {name: data.get(name) for name in _TEXT_FIELDS}
        return cls(id=str(user_id).strip(), status=data.get("status"), **fields)
