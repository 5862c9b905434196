"""AI strategy selection and dispatch."""

from __future__ import annotations

import random
from collections.abc import Callable
from enum import StrEnum

from salvo.game.ai.context import AIMemory, OpponentView
from salvo.game.ai.hunt_target import choose_hunt_target_shot, observe_hunt_target_outcome
from salvo.game.ai.probability_density import choose_probability_shot
from salvo.game.ai.random_shot import choose_random_shot
from salvo.game.core.attack import AttackOutcome
from salvo.game.core.grid import Grid
from salvo.game.core.models import Coord, Fleet

ChooseShot = Callable[[OpponentView, AIMemory, random.Random], tuple[Coord, AIMemory]]


class StrategyKind(StrEnum):
    """Closed set of computer targeting behaviours."""

    RANDOM = "RANDOM"
    HUNT_TARGET = "HUNT_TARGET"
    PROBABILITY_DENSITY = "PROBABILITY_DENSITY"


_CHOOSERS: dict[StrategyKind, ChooseShot] = {
    StrategyKind.RANDOM: choose_random_shot,
    StrategyKind.HUNT_TARGET: choose_hunt_target_shot,
    StrategyKind.PROBABILITY_DENSITY: choose_probability_shot,
}


def choose_target(
    kind: StrategyKind, grid: Grid, fleet: Fleet, memory: AIMemory, rng: random.Random
) -> tuple[Coord, AIMemory]:
    """Select the next coordinate against the defender's grid and fleet.

    Strategies only ever see the fogged view of `grid`.
    """
    return _CHOOSERS[kind](OpponentView.observe(grid, fleet), memory, rng)


def observe_outcome(kind: StrategyKind, memory: AIMemory, outcome: AttackOutcome, grid: Grid) -> AIMemory:
    """Update strategy memory with a resolved computer attack."""
    if kind is StrategyKind.HUNT_TARGET:
        return observe_hunt_target_outcome(memory, outcome, grid.fogged())
    return memory
