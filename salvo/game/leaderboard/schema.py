"""Leaderboard payload schema and conversion helpers."""

from __future__ import annotations

from datetime import datetime

from salvo.game.core.models import ShotRecord

LEADERBOARD_VERSION = 1


def record_to_entry(record: ShotRecord) -> dict[str, object]:
    """Convert a shot record to a JSON-serializable entry."""
    return {
        "opponent": record.opponent_label,
        "shots": record.shot_count,
        "date": record.timestamp.isoformat(),
    }


def entry_to_record(entry: object) -> ShotRecord:
    """Parse one stored entry, raising ValueError on malformed data."""
    if not isinstance(entry, dict):
        raise ValueError("Leaderboard entry must be an object.")
    opponent = entry.get("opponent")
    shots = entry.get("shots")
    date = entry.get("date")
    if not isinstance(opponent, str) or not opponent.strip():
        raise ValueError("Leaderboard entry is missing an opponent.")
    if not isinstance(shots, int) or isinstance(shots, bool) or shots <= 0:
        raise ValueError("Leaderboard entry shots must be a positive integer.")
    if not isinstance(date, str):
        raise ValueError("Leaderboard entry is missing a date.")
    return ShotRecord(
        opponent_label=opponent.strip(),
        shot_count=shots,
        timestamp=datetime.fromisoformat(date),
    )


def records_to_payload(records: list[ShotRecord]) -> dict[str, object]:
    return {"version": LEADERBOARD_VERSION, "entries": [record_to_entry(record) for record in records]}
