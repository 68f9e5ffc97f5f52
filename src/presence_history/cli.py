"""Command line tool for inspecting and maintaining presence history."""

import argparse
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from presence_history.adapters.config import AppConfig
from presence_history.adapters.console import TextRenderer
from presence_history.application.services.presence_queries import heatmap_day_starts
from presence_history.composition import Components, build_components
from presence_history.domain.models import OverlayFilter

logger = logging.getLogger(__name__)


def sample(components: Components, now: datetime | None = None) -> str:
    """Take one sample and describe the outcome."""
    result = components.service.sample_once(now)
    if result is None:
        return "Sampling skipped: another cycle is in progress."
    return (
        f"Sampled {result.observed} user(s); tracking {len(result.store.users)} user(s), "
        f"pruned {result.pruned} expired bucket(s)."
    )


def show(
    components: Components,
    query: str = "",
    overlay_filter: OverlayFilter | None = None,
    now: datetime | None = None,
) -> str:
    """Render the filtered list of currently observed users."""
    views = components.service.current_views(now=now, query=query, overlay_filter=overlay_filter)
    return TextRenderer().render_user_list(views)


def heatmap(components: Components, user_id: str, now: datetime | None = None) -> str | None:
    """Render the heatmap of one user, or None if the user is unknown."""
    at = now or datetime.now(UTC)
    view = components.service.user_view(user_id, now=at)
    if view is None:
        return None
    record, grid = components.service.user_heatmap(user_id, now=at)
    day_starts = heatmap_day_starts(components.service.preferences.horizon_days, at)
    return TextRenderer().render_heatmap(view, record, grid, day_starts)


def export(components: Components, output_dir: Path, now: datetime | None = None) -> Path:
    """Write the presence store export into output_dir and return its path."""
    artifact = components.service.export(now)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / artifact.filename
    path.write_text(artifact.content, encoding="utf-8")
    return path


def set_filter(components: Components, value: str) -> OverlayFilter:
    """Persist a new overlay filter selection."""
    updated = components.preferences_repository.set_filter(
        components.service.preferences, OverlayFilter(value)
    )
    components.service.preferences = updated
    return updated.overlay_filter


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Presence history helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Record one sample from the snapshot file
  presence-history-cli sample

  # List active users whose name contains "ann"
  presence-history-cli show --filter active --query ann

  # Show the 10-day heatmap of one user
  presence-history-cli heatmap D0123456

  # Export the stored history as JSON
  presence-history-cli export --output-dir exports
        """,
    )
    parser.add_argument("--config-file", help="TOML configuration file")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("sample", help="Record one presence sample")

    filters = [f.value for f in OverlayFilter]
    show_parser = subparsers.add_parser("show", help="List observed users with activity bars")
    show_parser.add_argument("--query", default="", help="Only users whose name contains this")
    show_parser.add_argument("--filter", choices=filters, help="Override the selected filter")

    heatmap_parser = subparsers.add_parser("heatmap", help="Show the day by hour heatmap of a user")
    heatmap_parser.add_argument("user_id", help="User id")

    export_parser = subparsers.add_parser("export", help="Export stored history as JSON")
    export_parser.add_argument("--output-dir", default=".", help="Directory to write into")

    clear_parser = subparsers.add_parser("clear", help="Delete stored presence history")
    clear_parser.add_argument("--yes", action="store_true", help="Confirm deletion")

    filter_parser = subparsers.add_parser("filter", help="Select the user list filter")
    filter_parser.add_argument("value", choices=filters, help="Filter to select")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run a command; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = AppConfig(config_file=args.config_file) if args.config_file else AppConfig()
        config.load_toml_overrides()
        config.configure_logging()
        components = build_components(config)

        if args.command == "sample":
            print(sample(components))

        elif args.command == "show":
            overlay_filter = OverlayFilter(args.filter) if args.filter else None
            print(show(components, query=args.query, overlay_filter=overlay_filter))

        elif args.command == "heatmap":
            rendered = heatmap(components, args.user_id)
            if rendered is None:
                print(f"User {args.user_id} not found.", file=sys.stderr)
                return 1
            print(rendered)

        elif args.command == "export":
            path = export(components, Path(args.output_dir))
            print(f"Exported presence history to {path}")

        elif args.command == "clear":
            if not args.yes:
                print("Refusing to delete stored history without --yes.", file=sys.stderr)
                return 1
            components.service.clear()
            print("Stored presence history deleted.")

        elif args.command == "filter":
            selected = set_filter(components, args.value)
            print(f"Filter set to '{selected}'.")

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
