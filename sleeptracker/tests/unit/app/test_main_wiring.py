from __future__ import annotations

import json

import pytest

pytest.importorskip("tkinter")

from sleeptracker.adapters.session_store_memory import InMemorySessionStore  # noqa: E402
from sleeptracker.adapters.session_store_sql import SqlSessionStore  # noqa: E402
from sleeptracker.adapters.storage_local import StorageLocal  # noqa: E402
from sleeptracker.app.main import MEMORY_DB, build_store, load_settings, parse_args  # noqa: E402


def test_parse_args_defaults() -> None:
    args = parse_args([])
    assert args.db is None
    assert args.settings_dir == "."

    args = parse_args(["--db", MEMORY_DB, "--settings-dir", "/tmp/x"])
    assert (args.db, args.settings_dir) == (MEMORY_DB, "/tmp/x")


def test_load_settings_applies_saved_file_and_saves_through_vm(tmp_path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    storage.save_user_settings({"database_url": "sqlite:///saved.db", "history_limit": 3})

    settings = load_settings(storage)
    assert settings.database_url == "sqlite:///saved.db"
    assert settings.history_limit == 3

    settings.history_limit = 7
    settings.cmd_save()
    assert storage.load_user_settings()["history_limit"] == 7


def test_load_settings_drops_unknown_keys_and_keeps_the_rest(tmp_path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    storage.save_user_settings({"legacy": True, "history_limit": 9})

    settings = load_settings(storage)
    assert settings.history_limit == 9

    settings.cmd_save()
    saved = storage.load_user_settings()
    assert "legacy" not in saved
    assert saved["history_limit"] == 9


def test_load_settings_never_overwrites_an_invalid_file(tmp_path) -> None:
    original = json.dumps({"history_limit": -4, "time_format": "%H:%M"})
    path = tmp_path / "user_settings.json"
    path.write_text(original, encoding="utf-8")

    settings = load_settings(StorageLocal(root_dir=str(tmp_path)))
    assert settings.history_limit == 0

    settings.cmd_save()
    assert path.read_text(encoding="utf-8") == original


def test_build_store_selects_adapter(tmp_path) -> None:
    assert isinstance(build_store(MEMORY_DB), InMemorySessionStore)
    assert isinstance(build_store(f"sqlite:///{tmp_path / 'n.db'}"), SqlSessionStore)
