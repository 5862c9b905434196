"""Shot outcome evaluation (miss/hit/sunk)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from salvo.game.core.errors import CellAlreadyAttackedError
from salvo.game.core.grid import Grid
from salvo.game.core.models import CellState, Coord, Fleet, Ship


class OutcomeKind(StrEnum):
    """Feedback category of a resolved attack."""

    MISS = "miss"
    HIT = "hit"
    SUNK = "sunk"


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """Result of a single resolved attack."""

    coord: Coord
    hit: bool
    sunk_ship: Ship | None
    fleet_defeated: bool

    @property
    def kind(self) -> OutcomeKind:
        if self.sunk_ship is not None:
            return OutcomeKind.SUNK
        return OutcomeKind.HIT if self.hit else OutcomeKind.MISS


def resolve_attack(grid: Grid, fleet: Fleet, coord: Coord) -> tuple[Grid, Fleet, AttackOutcome]:
    """Apply a shot and return the updated grid, fleet and outcome.

    The inputs are left untouched. Works for either side; it knows nothing
    about turns or phases.
    """
    current = grid.get(coord)
    if current not in (CellState.EMPTY, CellState.OCCUPIED):
        raise CellAlreadyAttackedError(f"({coord.row}, {coord.col}) was already attacked ({current.name}).")

    hit = current is CellState.OCCUPIED
    grid = grid.with_state((coord,), CellState.HIT if hit else CellState.MISS)

    newly_sunk: list[Ship] = []
    for ship in fleet.ships:
        if ship.sunk:
            continue
        if all(grid.get(cell) in (CellState.HIT, CellState.SUNK) for cell in ship.coords):
            newly_sunk.append(ship.as_sunk())

    for ship in newly_sunk:
        grid = grid.with_state(ship.coords, CellState.SUNK)
    if newly_sunk:
        fleet = fleet.replace_ships(newly_sunk)

    outcome = AttackOutcome(
        coord=coord,
        hit=hit,
        sunk_ship=newly_sunk[0] if newly_sunk else None,
        fleet_defeated=fleet.defeated,
    )
    return grid, fleet, outcome
