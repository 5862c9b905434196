"""Game rule violations raised by the core."""

from __future__ import annotations


class GameError(Exception):
    """Base class for recoverable game rule violations."""


class OutOfBoundsError(GameError):
    """Coordinate lies outside the grid."""


class InvalidPlacementError(GameError):
    """Ship placement overlaps another ship or leaves the grid."""


class CellAlreadyAttackedError(GameError):
    """Target cell was already resolved to hit, miss or sunk."""


class WrongPhaseError(GameError):
    """Command issued outside the phase or turn that permits it."""


class PlacementExhaustedError(GameError):
    """Random placement ran out of attempts for a ship."""


class IllegalTransitionError(GameError):
    """Cell state change not permitted by the grid model."""


class NoLegalTargetError(GameError):
    """Every cell on the targeted grid is already resolved."""
