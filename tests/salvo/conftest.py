from __future__ import annotations

import logging
import random
from datetime import UTC, datetime

import pytest

from salvo.game.app.orchestrator import ComputerLayout, GameOrchestrator, LeaderboardSink
from salvo.game.core.grid import Grid
from salvo.game.core.models import Coord, Fleet, Orientation, ShipPlacement, ShipType, ShotRecord
from salvo.game.core.placement import build_fleet
from salvo.game.infra.config import GameConfig
from salvo.runtime.logging import shutdown_logging
from salvo.runtime.scheduler import Scheduler

FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


def make_standard_placements() -> list[ShipPlacement]:
    return [
        ShipPlacement(ShipType.CARRIER, Coord(0, 0), Orientation.HORIZONTAL),
        ShipPlacement(ShipType.BATTLESHIP, Coord(2, 0), Orientation.HORIZONTAL),
        ShipPlacement(ShipType.CRUISER, Coord(4, 0), Orientation.HORIZONTAL),
        ShipPlacement(ShipType.SUBMARINE, Coord(6, 0), Orientation.HORIZONTAL),
        ShipPlacement(ShipType.DESTROYER, Coord(8, 0), Orientation.HORIZONTAL),
    ]


class RecordingLeaderboard:
    def __init__(self) -> None:
        self.records: list[ShotRecord] = []

    def record(self, record: ShotRecord) -> None:
        self.records.append(record)


@pytest.fixture
def standard_placements() -> list[ShipPlacement]:
    return make_standard_placements()


@pytest.fixture
def standard_layout() -> tuple[Grid, Fleet]:
    return build_fleet(make_standard_placements())


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def recording_leaderboard() -> RecordingLeaderboard:
    return RecordingLeaderboard()


@pytest.fixture
def standard_computer_layout() -> ComputerLayout:
    def _layout(rng: random.Random, size: int) -> tuple[Grid, Fleet]:
        _ = rng
        return build_fleet(make_standard_placements(), size)

    return _layout


@pytest.fixture
def orchestrator_factory(scheduler: Scheduler, standard_computer_layout: ComputerLayout):
    def _make(
        *,
        seed: int = 1337,
        opponent_key: str = "easy",
        leaderboard: LeaderboardSink | None = None,
        computer_layout: ComputerLayout | None = standard_computer_layout,
        config: GameConfig | None = None,
    ) -> GameOrchestrator:
        return GameOrchestrator(
            rng=random.Random(seed),
            scheduler=scheduler,
            leaderboard=leaderboard,
            config=config or GameConfig(),
            opponent_key=opponent_key,
            computer_layout=computer_layout,
            clock=_fixed_clock,
        )

    return _make


def _fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        yield root
    finally:
        shutdown_logging()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)
