from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import pytest

from salvo.game.core.models import ShotRecord
from salvo.game.leaderboard import DISPLAY_CAP, RETENTION_CAP, LeaderboardRepository
from salvo.game.leaderboard.schema import LEADERBOARD_VERSION, entry_to_record, record_to_entry

_BASE = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _record(shots: int, opponent: str = "Admiral Varga", minutes: int = 0) -> ShotRecord:
    return ShotRecord(opponent_label=opponent, shot_count=shots, timestamp=_BASE + timedelta(minutes=minutes))


def test_missing_file_has_no_entries(tmp_path) -> None:
    repository = LeaderboardRepository(tmp_path / "leaderboard.json")
    assert repository.entries() == []
    assert repository.top() == []


def test_record_keeps_entries_sorted_by_shots(tmp_path) -> None:
    repository = LeaderboardRepository(tmp_path / "nested" / "leaderboard.json")
    for minutes, shots in enumerate((60, 35, 48)):
        repository.record(_record(shots, minutes=minutes))

    assert [entry.shot_count for entry in repository.entries()] == [35, 48, 60]
    assert repository.entries()[0].timestamp == _BASE + timedelta(minutes=1)


def test_equal_shot_counts_keep_insertion_order(tmp_path) -> None:
    repository = LeaderboardRepository(tmp_path / "leaderboard.json")
    repository.record(_record(40, opponent="Deckhand Dobbs"))
    repository.record(_record(40, opponent="Commander Reyes"))

    assert [entry.opponent_label for entry in repository.top()] == ["Deckhand Dobbs", "Commander Reyes"]


def test_retention_cap_drops_the_worst_entries(tmp_path) -> None:
    repository = LeaderboardRepository(tmp_path / "leaderboard.json", retention_cap=3)
    for shots in (70, 20, 50, 30, 90):
        repository.record(_record(shots))

    assert [entry.shot_count for entry in repository.entries()] == [20, 30, 50]


def test_top_limits_display(tmp_path) -> None:
    repository = LeaderboardRepository(tmp_path / "leaderboard.json")
    for shots in range(17, 17 + DISPLAY_CAP + 5):
        repository.record(_record(shots))

    assert len(repository.top()) == DISPLAY_CAP
    assert [entry.shot_count for entry in repository.top(3)] == [17, 18, 19]
    assert len(repository.entries()) == DISPLAY_CAP + 5


def test_default_retention_cap(tmp_path) -> None:
    repository = LeaderboardRepository(tmp_path / "leaderboard.json")
    for shots in range(RETENTION_CAP + 5, 0, -1):
        repository.record(_record(shots + 16))

    entries = repository.entries()
    assert len(entries) == RETENTION_CAP
    assert entries[0].shot_count == 17


def test_payload_shape_on_disk(tmp_path) -> None:
    path = tmp_path / "leaderboard.json"
    LeaderboardRepository(path).record(_record(42, opponent="Commander Reyes"))

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {
        "version": LEADERBOARD_VERSION,
        "entries": [{"opponent": "Commander Reyes", "shots": 42, "date": "2026-03-01T12:00:00+00:00"}],
    }


def test_corrupt_file_is_treated_as_empty_and_overwritten(tmp_path) -> None:
    path = tmp_path / "leaderboard.json"
    path.write_text("{not json", encoding="utf-8")
    repository = LeaderboardRepository(path)

    assert repository.entries() == []
    repository.record(_record(30))
    assert [entry.shot_count for entry in repository.entries()] == [30]


def test_malformed_entries_are_skipped(tmp_path) -> None:
    path = tmp_path / "leaderboard.json"
    path.write_text(
        json.dumps(
            {
                "version": 1,
                "entries": [
                    {"opponent": "Admiral Varga", "shots": 25, "date": "2026-03-01T12:00:00+00:00"},
                    {"opponent": "", "shots": 10, "date": "2026-03-01T12:00:00+00:00"},
                    {"opponent": "Deckhand Dobbs", "shots": "ten", "date": "2026-03-01T12:00:00+00:00"},
                    {"opponent": "Deckhand Dobbs", "shots": 12, "date": "yesterday"},
                    "garbage",
                ],
            }
        ),
        encoding="utf-8",
    )

    entries = LeaderboardRepository(path).entries()
    assert [(entry.opponent_label, entry.shot_count) for entry in entries] == [("Admiral Varga", 25)]


def test_bare_list_payload_is_accepted(tmp_path) -> None:
    path = tmp_path / "leaderboard.json"
    path.write_text(json.dumps([record_to_entry(_record(33))]), encoding="utf-8")
    assert [entry.shot_count for entry in LeaderboardRepository(path).entries()] == [33]


def test_non_list_entries_are_ignored(tmp_path) -> None:
    path = tmp_path / "leaderboard.json"
    path.write_text(json.dumps({"version": 1, "entries": "nope"}), encoding="utf-8")
    assert LeaderboardRepository(path).entries() == []


def test_entry_to_record_rejects_boolean_shots() -> None:
    with pytest.raises(ValueError):
        entry_to_record({"opponent": "Admiral Varga", "shots": True, "date": "2026-03-01T12:00:00+00:00"})


def test_retention_cap_must_be_positive(tmp_path) -> None:
    with pytest.raises(ValueError):
        LeaderboardRepository(tmp_path / "leaderboard.json", retention_cap=0)
