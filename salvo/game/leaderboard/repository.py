"""JSON file store for the fewest-shots leaderboard."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from salvo.game.core.models import ShotRecord
from salvo.game.leaderboard.schema import entry_to_record, records_to_payload

logger = logging.getLogger(__name__)

RETENTION_CAP = 50
DISPLAY_CAP = 20


class LeaderboardRepository:
    """Keeps the best human victories, fewest shots first."""

    def __init__(self, path: Path, retention_cap: int = RETENTION_CAP) -> None:
        if retention_cap <= 0:
            raise ValueError("retention_cap must be > 0")
        self._path = path
        self._retention_cap = retention_cap

    @property
    def path(self) -> Path:
        return self._path

    def entries(self) -> list[ShotRecord]:
        """Load all retained records, skipping unreadable entries."""
        if not self._path.exists():
            return []
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("leaderboard_unreadable path=%s error=%s", self._path, exc)
            return []

        raw_entries = payload.get("entries") if isinstance(payload, dict) else payload
        if not isinstance(raw_entries, list):
            logger.warning("leaderboard_malformed path=%s", self._path)
            return []

        records: list[ShotRecord] = []
        for raw in raw_entries:
            try:
                records.append(entry_to_record(raw))
            except ValueError as exc:
                logger.warning("leaderboard_entry_skipped path=%s error=%s", self._path, exc)
        return records

    def record(self, record: ShotRecord) -> None:
        """Append a record, re-rank ascending by shots and trim to the cap."""
        records = self.entries()
        records.append(record)
        records.sort(key=lambda item: item.shot_count)
        records = records[: self._retention_cap]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump(records_to_payload(records), handle, indent=2)
        logger.info(
            "leaderboard_recorded opponent=%s shots=%d retained=%d",
            record.opponent_label,
            record.shot_count,
            len(records),
        )

    def top(self, limit: int = DISPLAY_CAP) -> list[ShotRecord]:
        """Return the best `limit` records for display."""
        return sorted(self.entries(), key=lambda item: item.shot_count)[:limit]
