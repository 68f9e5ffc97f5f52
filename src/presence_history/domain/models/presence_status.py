"""Presence status and display classification enums."""

from enum import StrEnum

_STATUS_ALIASES = {
    "donotdisturb": "dnd",
    "do_not_disturb": "dnd",
}


class PresenceStatus(StrEnum):
    """Raw presence status observed in a snapshot."""

    ACTIVE = "active"
    AWAY = "away"
    DND = "dnd"
    OFFLINE = "offline"

    @classmethod
    def parse(cls, value: object) -> "PresenceStatus":
        """Parse a raw status value, falling back to offline for anything unknown."""
        if isinstance(value, PresenceStatus):
            return value
        if not isinstance(value, str):
            return cls.OFFLINE
        normalized = value.strip().lower()
        normalized = _STATUS_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            return cls.OFFLINE


class Classification(StrEnum):
    """Display category of one hour bucket."""

    ACTIVE = "active"
    AWAY = "away"
    DND = "dnd"
    INACTIVE = "inactive"


class OverlayFilter(StrEnum):
    """User list filter selected in the overlay."""

    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
    VACATION = "vacation"
