"""Core domain models used by game logic."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import IntEnum, StrEnum

from salvo.game.core.errors import InvalidPlacementError

BOARD_SIZE = 10


class CellState(IntEnum):
    """State of one grid cell."""

    EMPTY = 0
    OCCUPIED = 1
    HIT = 2
    MISS = 3
    SUNK = 4


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class ShipType(StrEnum):
    """Classic fleet ship types."""

    CARRIER = "CARRIER"
    BATTLESHIP = "BATTLESHIP"
    CRUISER = "CRUISER"
    SUBMARINE = "SUBMARINE"
    DESTROYER = "DESTROYER"

    @property
    def size(self) -> int:
        return SHIP_LENGTHS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


SHIP_LENGTHS: dict[ShipType, int] = {
    ShipType.CARRIER: 5,
    ShipType.BATTLESHIP: 4,
    ShipType.CRUISER: 3,
    ShipType.SUBMARINE: 3,
    ShipType.DESTROYER: 2,
}

DEFAULT_FLEET: tuple[ShipType, ...] = (
    ShipType.CARRIER,
    ShipType.BATTLESHIP,
    ShipType.CRUISER,
    ShipType.SUBMARINE,
    ShipType.DESTROYER,
)


class Side(StrEnum):
    """Turn owner and winner identity."""

    HUMAN = "HUMAN"
    COMPUTER = "COMPUTER"

    @property
    def opponent(self) -> Side:
        return Side.COMPUTER if self is Side.HUMAN else Side.HUMAN


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int

    def neighbors(self) -> tuple[Coord, ...]:
        """Return the four orthogonal neighbours (up, down, left, right)."""
        return (
            Coord(self.row - 1, self.col),
            Coord(self.row + 1, self.col),
            Coord(self.row, self.col - 1),
            Coord(self.row, self.col + 1),
        )


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Requested placement of a single ship."""

    ship_type: ShipType
    bow: Coord
    orientation: Orientation


def cells_for(bow: Coord, length: int, orientation: Orientation) -> tuple[Coord, ...]:
    """Compute the cells covered by a ship of `length` anchored at `bow`."""
    if orientation is Orientation.HORIZONTAL:
        return tuple(Coord(bow.row, bow.col + i) for i in range(length))
    return tuple(Coord(bow.row + i, bow.col) for i in range(length))


@dataclass(frozen=True, slots=True)
class Ship:
    """A committed ship and its sink status."""

    ship_id: int
    ship_type: ShipType
    coords: tuple[Coord, ...]
    sunk: bool = False

    @property
    def name(self) -> str:
        return self.ship_type.display_name

    @property
    def length(self) -> int:
        return len(self.coords)

    def covers(self, coord: Coord) -> bool:
        return coord in self.coords

    def as_sunk(self) -> Ship:
        return replace(self, sunk=True)


@dataclass(frozen=True, slots=True)
class Fleet:
    """Ordered, immutable collection of one side's ships."""

    ships: tuple[Ship, ...] = ()

    @property
    def defeated(self) -> bool:
        """Return whether every ship has been sunk."""
        return bool(self.ships) and all(ship.sunk for ship in self.ships)

    @property
    def sunk_count(self) -> int:
        return sum(1 for ship in self.ships if ship.sunk)

    @property
    def remaining_lengths(self) -> tuple[int, ...]:
        """Lengths of ships not yet sunk, in fleet order."""
        return tuple(ship.length for ship in self.ships if not ship.sunk)

    def ship_at(self, coord: Coord) -> Ship | None:
        for ship in self.ships:
            if ship.covers(coord):
                return ship
        return None

    def with_ship(self, ship: Ship) -> Fleet:
        return Fleet(ships=(*self.ships, ship))

    def replace_ships(self, updated: Iterable[Ship]) -> Fleet:
        """Return a fleet where ships with matching ids are swapped for `updated`."""
        by_id = {ship.ship_id: ship for ship in updated}
        return Fleet(ships=tuple(by_id.get(ship.ship_id, ship) for ship in self.ships))

    def validate(self, size: int = BOARD_SIZE) -> None:
        """Raise InvalidPlacementError if ships overlap or leave the grid."""
        seen: set[Coord] = set()
        for ship in self.ships:
            for coord in ship.coords:
                if not (0 <= coord.row < size and 0 <= coord.col < size):
                    raise InvalidPlacementError(f"{ship.name} leaves the grid at {coord}.")
                if coord in seen:
                    raise InvalidPlacementError(f"{ship.name} overlaps another ship at {coord}.")
                seen.add(coord)


@dataclass(frozen=True, slots=True)
class ShotRecord:
    """Leaderboard entry emitted on a human victory."""

    opponent_label: str
    shot_count: int
    timestamp: datetime
