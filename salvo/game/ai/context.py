"""What an AI strategy may know about the defender, and what it remembers."""

from __future__ import annotations

from dataclasses import dataclass

from salvo.game.core.grid import Grid
from salvo.game.core.models import Coord, Fleet


@dataclass(frozen=True, slots=True)
class OpponentView:
    """Attacker-side knowledge of the defending side.

    ``grid`` is fogged: ship cells that have not been hit read as empty.
    ``remaining_lengths`` is public because every sink is announced.
    """

    grid: Grid
    remaining_lengths: tuple[int, ...]

    @classmethod
    def observe(cls, grid: Grid, fleet: Fleet) -> OpponentView:
        return cls(grid=grid.fogged(), remaining_lengths=fleet.remaining_lengths)


@dataclass(frozen=True, slots=True)
class AIMemory:
    """Strategy-local state carried between computer turns."""

    pending_queue: tuple[Coord, ...] = ()
    active_hits: tuple[Coord, ...] = ()
