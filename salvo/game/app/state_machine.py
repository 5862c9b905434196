"""Game phase states for placement, battle, and game over."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from salvo.game.core.models import Side


class GamePhase(Enum):
    """Top-level game phases."""

    PLACEMENT = auto()
    BATTLE = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, slots=True)
class PlacementState:
    ship_index: int = 0

    @property
    def phase(self) -> GamePhase:
        return GamePhase.PLACEMENT


@dataclass(frozen=True, slots=True)
class BattleState:
    turn_owner: Side = Side.HUMAN

    @property
    def phase(self) -> GamePhase:
        return GamePhase.BATTLE


@dataclass(frozen=True, slots=True)
class GameOverState:
    winner: Side

    @property
    def phase(self) -> GamePhase:
        return GamePhase.GAME_OVER


GameState = PlacementState | BattleState | GameOverState
