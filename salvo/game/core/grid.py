"""Grid state representation and transition helpers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from salvo.game.core.errors import IllegalTransitionError, OutOfBoundsError
from salvo.game.core.models import BOARD_SIZE, CellState, Coord

_ALLOWED_TRANSITIONS: frozenset[tuple[CellState, CellState]] = frozenset(
    {
        (CellState.EMPTY, CellState.OCCUPIED),
        (CellState.OCCUPIED, CellState.HIT),
        (CellState.EMPTY, CellState.MISS),
        (CellState.HIT, CellState.SUNK),
    }
)


@dataclass(frozen=True, slots=True)
class Grid:
    """Numpy-backed square grid of cell states.

    The backing array is read-only. Every mutation returns a new ``Grid`` so
    placement previews and attack history can keep earlier snapshots.
    """

    cells: np.ndarray

    def __post_init__(self) -> None:
        cells = np.array(self.cells, dtype=np.int8, copy=True)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"grid must be square, got shape {cells.shape}")
        cells.flags.writeable = False
        object.__setattr__(self, "cells", cells)

    @classmethod
    def create_empty(cls, size: int = BOARD_SIZE) -> Grid:
        """Create a grid where every cell is empty."""
        if size <= 0:
            raise ValueError("size must be > 0")
        return cls(np.full((size, size), CellState.EMPTY, dtype=np.int8))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[CellState | int]]) -> Grid:
        """Build a grid from nested rows of cell states."""
        return cls(np.array([[int(cell) for cell in row] for row in rows], dtype=np.int8))

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in grid bounds."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def get(self, coord: Coord) -> CellState:
        """Return the state at `coord`."""
        if not self.in_bounds(coord):
            raise OutOfBoundsError(f"({coord.row}, {coord.col}) is outside a {self.size}x{self.size} grid.")
        return CellState(int(self.cells[coord.row, coord.col]))

    def with_state(self, coords: Iterable[Coord], state: CellState) -> Grid:
        """Return a copy with every coordinate moved to `state`."""
        updated = self.cells.copy()
        for coord in coords:
            current = self.get(coord)
            if current is state:
                continue
            if (current, state) not in _ALLOWED_TRANSITIONS:
                raise IllegalTransitionError(
                    f"({coord.row}, {coord.col}) cannot change from {current.name} to {state.name}."
                )
            updated[coord.row, coord.col] = state
        return Grid(updated)

    def is_legal_target(self, coord: Coord) -> bool:
        """Return whether the cell has not been attacked yet."""
        return self.get(coord) in (CellState.EMPTY, CellState.OCCUPIED)

    def legal_targets(self) -> list[Coord]:
        """Return every unattacked cell in row-major order."""
        mask = self.legal_mask()
        return [Coord(int(row), int(col)) for row, col in np.argwhere(mask)]

    def legal_mask(self) -> np.ndarray:
        return (self.cells == CellState.EMPTY) | (self.cells == CellState.OCCUPIED)

    def fogged(self) -> Grid:
        """Return the attacker's view: unhit ship cells read as empty."""
        view = np.where(self.cells == CellState.OCCUPIED, CellState.EMPTY, self.cells)
        return Grid(view.astype(np.int8))

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.cells == state))

    def to_rows(self) -> list[list[CellState]]:
        """Plain nested lists for renderers."""
        return [[CellState(int(value)) for value in row] for row in self.cells]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells.shape == other.cells.shape and bool(np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash(self.cells.tobytes())
