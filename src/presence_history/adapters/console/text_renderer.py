"""Plain-text rendering of presence summaries for the terminal."""

from datetime import datetime

from presence_history.domain.models.presence_record import PresenceRecord
from presence_history.domain.models.presence_status import Classification
from presence_history.domain.models.user_presence_view import UserPresenceView
from presence_history.domain.ports.display_adapter import DisplayAdapter

CELL_SYMBOLS = {
    Classification.ACTIVE: "#",
    Classification.DND: "x",
    Classification.AWAY: "~",
    Classification.INACTIVE: ".",
}

LEGEND = "# active  ~ away  x DND  . inactive"

HOUR_HEADER = "00    06    12    18  23"


def render_cells(cells: list[Classification] | tuple[Classification, ...]) -> str:
    """One character per classified hour."""
    return "".join(CELL_SYMBOLS[cell] for cell in cells)


class TextRenderer(DisplayAdapter):
    """Renders the user list and heatmaps as fixed-width text."""

    def __init__(self, name_width: int = 24, status_width: int = 8) -> None:
        """Initialize the renderer.

        Args:
            name_width: Column width for user names (longer names are truncated).
            status_width: Column width for the status label.
        """
        self.name_width = name_width
        self.status_width = status_width

    def _fit(self, text: str, width: int) -> str:
        if len(text) <= width:
            return text.ljust(width)
        return text[: width - 1] + "…"

    def render_user_list(self, views: list[UserPresenceView]) -> str:
        """Render the filtered user list with recent activity bars."""
        lines = [f"{len(views)} user(s)"]
        for view in views:
            line = (
                f"{self._fit(view.name, self.name_width)}  "
                f"{render_cells(view.mini_bars)}  "
                f"{self._fit(view.status_label, self.status_width)}  "
                f"last seen: {view.last_seen}"
            )
            lines.append(line.rstrip())
            if view.vacation_note:
                lines.append(f"    Note: {view.vacation_note}")
        return "\n".join(lines)

    def render_heatmap(
        self,
        view: UserPresenceView,
        record: PresenceRecord | None,
        grid: list[list[Classification]],
        day_starts: list[datetime],
    ) -> str:
        """Render the day by hour heatmap of one user, today first."""
        header = f"{view.name} [{view.status_label}] last seen: {view.last_seen}"
        if view.on_vacation and view.vacation_note:
            header += f" - {view.vacation_note}"
        if record is None:
            header += " (no history)"

        lines = [header, f"{'':10}  {HOUR_HEADER}"]
        for day_start, row in zip(day_starts, grid, strict=True):
            lines.append(f"{day_start.strftime('%a %m/%d'):10}  {render_cells(row)}")
        lines.append(LEGEND)
        return "\n".join(lines)
