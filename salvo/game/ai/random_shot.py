"""Uniform random targeting."""

from __future__ import annotations

import random

from salvo.game.ai.context import AIMemory, OpponentView
from salvo.game.core.errors import NoLegalTargetError
from salvo.game.core.grid import Grid
from salvo.game.core.models import Coord


def choose_random_shot(view: OpponentView, memory: AIMemory, rng: random.Random) -> tuple[Coord, AIMemory]:
    return random_legal_target(view.grid, rng), memory


def random_legal_target(grid: Grid, rng: random.Random) -> Coord:
    """Pick uniformly among cells that have not been attacked."""
    available = grid.legal_targets()
    if not available:
        raise NoLegalTargetError("No legal targets remain.")
    return rng.choice(available)
