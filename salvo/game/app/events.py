"""Feedback events published by the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass

from salvo.game.app.state_machine import GamePhase
from salvo.game.core.attack import AttackOutcome
from salvo.game.core.models import Side


@dataclass(frozen=True, slots=True)
class ShotResolved:
    """An attack landed; `outcome.kind` is hit, miss or sunk."""

    attacker: Side
    outcome: AttackOutcome


@dataclass(frozen=True, slots=True)
class PhaseChanged:
    previous: GamePhase
    current: GamePhase


@dataclass(frozen=True, slots=True)
class GameFinished:
    """The battle ended with a winner."""

    winner: Side
    shot_count: int
    opponent_label: str
