"""Tests for CLI commands."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from presence_history import cli
from presence_history.adapters.config import AppConfig
from presence_history.adapters.storage import InMemoryKeyValueStore
from presence_history.application.services import PREFS_KEY, STORE_KEY
from presence_history.composition import Components, build_components
from presence_history.domain.models import ObservedEntity, OverlayFilter
from tests.fakes import StaticSnapshotSource

NOW = datetime(2024, 1, 1, 10, 15, tzinfo=UTC)


@pytest.fixture
def source() -> StaticSnapshotSource:
    """Snapshot source with one active and one vacationing user."""
    return StaticSnapshotSource(
        [
            ObservedEntity(id="u1", name="Ann", status="active"),
            ObservedEntity(
                id="u2", name="Bob", status="offline", custom_status_text="Out of office"
            ),
        ]
    )


@pytest.fixture
def components(
    source: StaticSnapshotSource, kv_store: InMemoryKeyValueStore, monkeypatch: pytest.MonkeyPatch
) -> Components:
    """Components over in-memory storage and a static source."""
    monkeypatch.delenv("OVERLAY_FILTER", raising=False)
    return build_components(AppConfig(), key_value_store=kv_store, snapshot_source=source)


def test_build_components_merges_persisted_preferences() -> None:
    """Given persisted preferences, when building components, then they override config defaults."""
    kv_store = InMemoryKeyValueStore({PREFS_KEY: {"overlay_filter": "vacation"}})

    built = build_components(
        AppConfig(horizon_days=3),
        key_value_store=kv_store,
        snapshot_source=StaticSnapshotSource(),
    )

    assert built.service.preferences.overlay_filter is OverlayFilter.VACATION
    assert built.service.preferences.horizon_days == 3


def test_sample_reports_counts(components: Components) -> None:
    """Given a snapshot, when sampling from the CLI, then the summary reports the users."""
    assert cli.sample(components, NOW) == (
        "Sampled 2 user(s); tracking 2 user(s), pruned 0 expired bucket(s)."
    )


def test_show_uses_selected_filter(components: Components) -> None:
    """Given the vacation filter, when showing, then only the out-of-office user is listed."""
    cli.sample(components, NOW)
    cli.set_filter(components, "vacation")

    text = cli.show(components, now=NOW)

    assert text.splitlines()[0] == "1 user(s)"
    assert "Bob" in text
    assert "Note: Out of office" in text


def test_show_query_and_explicit_filter(components: Components) -> None:
    """Given an explicit filter and query, when showing, then both narrow the list."""
    text = cli.show(components, query="ann", overlay_filter=OverlayFilter.ACTIVE, now=NOW)

    assert text.splitlines()[0] == "1 user(s)"
    assert "Ann" in text


def test_heatmap_for_known_and_unknown_user(components: Components) -> None:
    """Given a sampled user, when rendering the heatmap, then it has one row per retained day."""
    cli.sample(components, NOW)

    text = cli.heatmap(components, "u1", now=NOW)

    assert text is not None
    assert text.splitlines()[0] == "Ann [active] last seen: just now"
    assert "Mon 01/01" in text
    assert cli.heatmap(components, "nobody", now=NOW) is None


def test_export_writes_timestamped_file(components: Components, tmp_path: Path) -> None:
    """Given stored history, when exporting, then a JSON file named after the instant is written."""
    cli.sample(components, NOW)

    path = cli.export(components, tmp_path / "out", now=NOW)

    assert path.name == "presence-history-2024-01-01T10-15-00.json"
    assert set(json.loads(path.read_text(encoding="utf-8"))["users"]) == {"u1", "u2"}


def test_set_filter_persists(components: Components, kv_store: InMemoryKeyValueStore) -> None:
    """Given a filter choice, when setting it, then it is persisted and applied to the service."""
    selected = cli.set_filter(components, "inactive")

    assert selected is OverlayFilter.INACTIVE
    assert components.service.preferences.overlay_filter is OverlayFilter.INACTIVE
    assert kv_store.get(PREFS_KEY)["overlay_filter"] == "inactive"


def test_main_without_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    """Given no command, when running main, then help is printed and the exit code is 1."""
    assert cli.main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_main_end_to_end_with_files(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given snapshot and data files, when running sample, show, clear and export, then each succeeds."""
    monkeypatch.chdir(tmp_path)
    snapshot = tmp_path / "snapshot.json"
    snapshot.write_text(json.dumps([{"id": "u1", "name": "Ann", "status": "active"}]))
    monkeypatch.setenv("SNAPSHOT_FILE", str(snapshot))
    monkeypatch.setenv("DATA_FILE", str(tmp_path / "data.json"))
    monkeypatch.delenv("OVERLAY_FILTER", raising=False)

    assert cli.main(["sample"]) == 0
    assert cli.main(["show"]) == 0
    assert "Ann" in capsys.readouterr().out

    assert cli.main(["clear"]) == 1
    assert cli.main(["clear", "--yes"]) == 0
    data = json.loads((tmp_path / "data.json").read_text(encoding="utf-8"))
    assert STORE_KEY not in data

    assert cli.main(["export", "--output-dir", str(tmp_path / "exports")]) == 0
    exported = list((tmp_path / "exports").glob("presence-history-*.json"))
    assert len(exported) == 1
    assert json.loads(exported[0].read_text(encoding="utf-8")) == {"users": {}}


def test_main_reports_unknown_user(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given an unknown user id, when running heatmap, then an error is printed and exit code is 1."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SNAPSHOT_FILE", str(tmp_path / "none.json"))
    monkeypatch.setenv("DATA_FILE", str(tmp_path / "data.json"))

    assert cli.main(["heatmap", "nobody"]) == 1
    assert "User nobody not found." in capsys.readouterr().err
