"""Hunt/Target AI: random search until a hit, then flood-fill its neighbours."""

from __future__ import annotations

import random

from salvo.game.ai.context import AIMemory, OpponentView
from salvo.game.ai.random_shot import random_legal_target
from salvo.game.core.attack import AttackOutcome
from salvo.game.core.grid import Grid
from salvo.game.core.models import Coord


def choose_hunt_target_shot(
    view: OpponentView, memory: AIMemory, rng: random.Random
) -> tuple[Coord, AIMemory]:
    """Pop queued follow-ups in FIFO order; fall back to a random legal cell."""
    queue = list(memory.pending_queue)
    while queue:
        candidate = queue.pop(0)
        if view.grid.in_bounds(candidate) and view.grid.is_legal_target(candidate):
            return candidate, AIMemory(pending_queue=tuple(queue), active_hits=memory.active_hits)

    remaining = AIMemory(pending_queue=(), active_hits=memory.active_hits)
    return random_legal_target(view.grid, rng), remaining


def observe_hunt_target_outcome(memory: AIMemory, outcome: AttackOutcome, grid: Grid) -> AIMemory:
    """Fold one resolved attack into hunt memory.

    `grid` is the defender grid after the attack was resolved.
    """
    if not outcome.hit:
        return memory

    queue = list(memory.pending_queue)
    hits = [*memory.active_hits, outcome.coord]
    for neighbor in outcome.coord.neighbors():
        if not grid.in_bounds(neighbor) or not grid.is_legal_target(neighbor):
            continue
        if neighbor not in queue:
            queue.append(neighbor)

    if outcome.sunk_ship is not None:
        sunk_cells = set(outcome.sunk_ship.coords)
        hits = [coord for coord in hits if coord not in sunk_cells]
        queue = [coord for coord in queue if coord not in sunk_cells and grid.is_legal_target(coord)]

    return AIMemory(pending_queue=tuple(queue), active_hits=tuple(hits))
