"""Tests for battle turn enforcement."""

import pytest

from salvo.game.core.errors import CellAlreadyAttackedError, InvalidPlacementError, WrongPhaseError
from salvo.game.core.models import CellState, Coord, Ship, ShipType, Side
from salvo.game.core.placement import build_fleet
from salvo.game.core.rules import computer_fire, create_session, human_fire


def _session(standard_placements):
    human_grid, human_fleet = build_fleet(standard_placements)
    computer_grid, computer_fleet = build_fleet(standard_placements)
    return create_session(human_grid, human_fleet, computer_grid, computer_fleet)


def test_human_fire_hands_turn_to_computer(standard_placements) -> None:
    session = _session(standard_placements)
    outcome = human_fire(session, Coord(0, 0))

    assert outcome.hit
    assert session.turn is Side.COMPUTER
    assert session.shot_count == 1
    assert session.computer_grid.get(Coord(0, 0)) is CellState.HIT
    assert session.history == ["You fired at (0, 0): hit."]


def test_fire_out_of_turn_is_rejected(standard_placements) -> None:
    session = _session(standard_placements)
    with pytest.raises(WrongPhaseError):
        computer_fire(session, Coord(0, 0))
    assert session.human_grid.get(Coord(0, 0)) is CellState.OCCUPIED


def test_repeat_shot_keeps_turn_and_count(standard_placements) -> None:
    session = _session(standard_placements)
    human_fire(session, Coord(5, 5))
    computer_fire(session, Coord(5, 5))

    with pytest.raises(CellAlreadyAttackedError):
        human_fire(session, Coord(5, 5))
    assert session.turn is Side.HUMAN
    assert session.shot_count == 1


def test_computer_shots_do_not_count_toward_human_total(standard_placements) -> None:
    session = _session(standard_placements)
    human_fire(session, Coord(9, 9))
    computer_fire(session, Coord(9, 9))
    assert session.shot_count == 1
    assert session.history[-1] == "Computer fired at (9, 9): miss."


def test_winner_blocks_further_fire(standard_placements) -> None:
    session = _session(standard_placements)
    targets = [cell for ship in session.computer_fleet.ships for cell in ship.coords]
    spare = iter(Coord(row, col) for row in (1, 3, 5, 7, 9) for col in range(10))

    for target in targets:
        outcome = human_fire(session, target)
        if outcome.fleet_defeated:
            break
        computer_fire(session, next(spare))

    assert session.winner is Side.HUMAN
    assert session.last_message == "You win."
    with pytest.raises(WrongPhaseError):
        human_fire(session, Coord(9, 9))


def test_create_session_rejects_overlapping_fleet(standard_layout) -> None:
    grid, fleet = standard_layout
    overlapping = fleet.with_ship(Ship(ship_id=6, ship_type=ShipType.DESTROYER, coords=(Coord(0, 0), Coord(1, 0))))
    with pytest.raises(InvalidPlacementError):
        create_session(grid, overlapping, grid, fleet)
