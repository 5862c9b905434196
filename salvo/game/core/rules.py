"""Turn ownership and attack resolution for a running battle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from salvo.game.core.attack import AttackOutcome, OutcomeKind, resolve_attack
from salvo.game.core.errors import WrongPhaseError
from salvo.game.core.grid import Grid
from salvo.game.core.models import Coord, Fleet, Side

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BattleSession:
    """Runtime battle state for both sides."""

    human_grid: Grid
    human_fleet: Fleet
    computer_grid: Grid
    computer_fleet: Fleet
    turn: Side = Side.HUMAN
    winner: Side | None = None
    shot_count: int = 0
    last_message: str = "Battle started. Your turn."
    history: list[str] = field(default_factory=list)

    def grid_of(self, side: Side) -> Grid:
        return self.human_grid if side is Side.HUMAN else self.computer_grid

    def fleet_of(self, side: Side) -> Fleet:
        return self.human_fleet if side is Side.HUMAN else self.computer_fleet


def create_session(
    human_grid: Grid, human_fleet: Fleet, computer_grid: Grid, computer_fleet: Fleet
) -> BattleSession:
    """Create a battle session from two placed fleets."""
    human_fleet.validate(human_grid.size)
    computer_fleet.validate(computer_grid.size)
    return BattleSession(
        human_grid=human_grid,
        human_fleet=human_fleet,
        computer_grid=computer_grid,
        computer_fleet=computer_fleet,
    )


def human_fire(session: BattleSession, coord: Coord) -> AttackOutcome:
    """Resolve the human's shot at the computer grid."""
    return _fire(session, Side.HUMAN, coord)


def computer_fire(session: BattleSession, coord: Coord) -> AttackOutcome:
    """Resolve the computer's shot at the human grid."""
    return _fire(session, Side.COMPUTER, coord)


def _fire(session: BattleSession, side: Side, coord: Coord) -> AttackOutcome:
    if session.winner is not None:
        raise WrongPhaseError("The battle is over.")
    if session.turn is not side:
        raise WrongPhaseError(f"It is not the {side.value.lower()} side's turn.")

    defender = side.opponent
    grid, fleet, outcome = resolve_attack(session.grid_of(defender), session.fleet_of(defender), coord)
    if defender is Side.COMPUTER:
        session.computer_grid, session.computer_fleet = grid, fleet
        session.shot_count += 1
    else:
        session.human_grid, session.human_fleet = grid, fleet

    session.last_message = _describe(side, outcome)
    session.history.append(session.last_message)
    logger.debug("attack side=%s coord=(%d, %d) result=%s", side.value, coord.row, coord.col, outcome.kind.value)

    if outcome.fleet_defeated:
        session.winner = side
        session.last_message = "You win." if side is Side.HUMAN else "Computer wins."
        session.history.append(session.last_message)
    else:
        session.turn = defender
    return outcome


def _describe(side: Side, outcome: AttackOutcome) -> str:
    actor = "You" if side is Side.HUMAN else "Computer"
    where = f"({outcome.coord.row}, {outcome.coord.col})"
    if outcome.kind is OutcomeKind.SUNK and outcome.sunk_ship is not None:
        return f"{actor} fired at {where}: sunk {outcome.sunk_ship.name}."
    return f"{actor} fired at {where}: {outcome.kind.value}."
