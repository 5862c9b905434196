from __future__ import annotations

import sys

from salvo.game.infra.app_data import (
    ensure_app_data_dirs,
    resolve_app_data_root,
    resolve_game_root,
    resolve_leaderboard_path,
)


def test_resolve_app_data_root_prefers_configured_dir(monkeypatch, tmp_path) -> None:
    custom = tmp_path / "custom_root"
    monkeypatch.setenv("SALVO_APP_DATA_DIR", str(custom))
    assert resolve_app_data_root() == custom
    assert resolve_leaderboard_path() == custom / "leaderboard.json"


def test_relative_app_data_dir_is_anchored_at_game_root(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SALVO_APP_DATA_DIR", "state")
    assert resolve_app_data_root() == tmp_path / "state"


def test_resolve_app_data_root_defaults_to_appdata_under_cwd(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SALVO_APP_DATA_DIR", raising=False)
    assert resolve_app_data_root() == tmp_path / "appdata"


def test_ensure_app_data_dirs_creates_layout(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SALVO_APP_DATA_DIR", str(tmp_path / "salvo_data"))

    paths = ensure_app_data_dirs()

    assert paths["root"].is_dir()
    assert paths["logs"].is_dir()
    assert paths["logs"].name == "logs"
    assert paths["leaderboard"].name == "leaderboard.json"
    assert not paths["leaderboard"].exists()


def test_game_root_is_cwd_even_for_frozen_builds(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "executable", str(tmp_path / "dist" / "salvo.exe"))
    monkeypatch.delenv("SALVO_APP_DATA_DIR", raising=False)
    assert resolve_game_root() == tmp_path
    assert resolve_app_data_root() == tmp_path / "appdata"
