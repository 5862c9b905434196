"""Fleet placement validation and construction."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from salvo.game.core.errors import InvalidPlacementError, PlacementExhaustedError
from salvo.game.core.grid import Grid
from salvo.game.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    CellState,
    Coord,
    Fleet,
    Orientation,
    Ship,
    ShipPlacement,
    ShipType,
    cells_for,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10_000


def can_place(grid: Grid, bow: Coord, length: int, orientation: Orientation) -> bool:
    """Return whether every covered cell is in bounds and empty."""
    for cell in cells_for(bow, length, orientation):
        if not grid.in_bounds(cell):
            return False
        if grid.get(cell) is not CellState.EMPTY:
            return False
    return True


def place(
    grid: Grid, bow: Coord, length: int, orientation: Orientation
) -> tuple[Grid, tuple[Coord, ...]]:
    """Write a ship onto a copy of `grid` and return it with the covered cells.

    Callers are expected to check ``can_place`` first.
    """
    if not can_place(grid, bow, length, orientation):
        raise InvalidPlacementError(
            f"Cannot place length {length} {orientation.value.lower()} at ({bow.row}, {bow.col})."
        )
    cells = cells_for(bow, length, orientation)
    return grid.with_state(cells, CellState.OCCUPIED), cells


def random_placement(
    rng: random.Random,
    ship_types: Sequence[ShipType] = DEFAULT_FLEET,
    size: int = BOARD_SIZE,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> tuple[Grid, Fleet]:
    """Place each ship in order by rejection sampling random anchors."""
    if max_attempts <= 0:
        raise ValueError("max_attempts must be > 0")
    grid = Grid.create_empty(size)
    fleet = Fleet()

    for ship_id, ship_type in enumerate(ship_types, start=1):
        for _ in range(max_attempts):
            orientation = rng.choice([Orientation.HORIZONTAL, Orientation.VERTICAL])
            bow = Coord(rng.randrange(size), rng.randrange(size))
            if can_place(grid, bow, ship_type.size, orientation):
                grid, cells = place(grid, bow, ship_type.size, orientation)
                fleet = fleet.with_ship(Ship(ship_id=ship_id, ship_type=ship_type, coords=cells))
                break
        else:
            logger.warning(
                "placement_exhausted ship=%s size=%d attempts=%d", ship_type.value, size, max_attempts
            )
            raise PlacementExhaustedError(
                f"Could not place {ship_type.display_name} after {max_attempts} attempts."
            )

    return grid, fleet


def build_fleet(placements: Sequence[ShipPlacement], size: int = BOARD_SIZE) -> tuple[Grid, Fleet]:
    """Create a grid and fleet from explicit placements."""
    grid = Grid.create_empty(size)
    fleet = Fleet()
    for ship_id, placement in enumerate(placements, start=1):
        grid, cells = place(grid, placement.bow, placement.ship_type.size, placement.orientation)
        fleet = fleet.with_ship(Ship(ship_id=ship_id, ship_type=placement.ship_type, coords=cells))
    return grid, fleet
