"""Game-level state machine sequencing placement, battle and game over."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from salvo.game.ai.context import AIMemory
from salvo.game.ai.strategy import choose_target, observe_outcome
from salvo.game.app.events import GameFinished, PhaseChanged, ShotResolved
from salvo.game.app.opponents import OpponentProfile, resolve_opponent
from salvo.game.app.state_machine import BattleState, GameOverState, GamePhase, GameState, PlacementState
from salvo.game.core.attack import AttackOutcome
from salvo.game.core.errors import GameError, InvalidPlacementError, OutOfBoundsError, WrongPhaseError
from salvo.game.core.grid import Grid
from salvo.game.core.models import DEFAULT_FLEET, Coord, Fleet, Orientation, Ship, ShipType, ShotRecord, Side
from salvo.game.core.placement import can_place, place, random_placement
from salvo.game.core.rules import BattleSession, computer_fire, create_session, human_fire
from salvo.game.infra.config import GameConfig
from salvo.runtime.events import EventBus
from salvo.runtime.scheduler import Scheduler

logger = logging.getLogger(__name__)

ComputerLayout = Callable[[random.Random, int], tuple[Grid, Fleet]]


class LeaderboardSink(Protocol):
    """Receives one record per human victory."""

    def record(self, record: ShotRecord) -> None: ...


class GameOrchestrator:
    """Owns both sides' state and serializes every mutation.

    Commands raise a ``GameError`` subclass and leave state unchanged when
    rejected. The computer turn runs as a cancellable task on `scheduler`.
    """

    def __init__(
        self,
        *,
        rng: random.Random,
        scheduler: Scheduler,
        events: EventBus | None = None,
        leaderboard: LeaderboardSink | None = None,
        config: GameConfig | None = None,
        opponent_key: str | None = None,
        computer_layout: ComputerLayout | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._rng = rng
        self._scheduler = scheduler
        self._events = events if events is not None else EventBus()
        self._leaderboard = leaderboard
        self._config = config or GameConfig()
        self._opponent = resolve_opponent(opponent_key or self._config.default_opponent)
        self._computer_layout = computer_layout or self._random_layout
        self._clock = clock or (lambda: datetime.now(UTC))

        self._state: GameState = PlacementState(0)
        self._human_grid = Grid.create_empty(self._config.board_size)
        self._human_fleet = Fleet()
        self._session: BattleSession | None = None
        self._memory = AIMemory()
        self._pending_task: int | None = None
        self._attack_in_flight = False
        self._status = self._placement_prompt(0)

    # Queries

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def turn_owner(self) -> Side | None:
        if isinstance(self._state, BattleState):
            return self._state.turn_owner
        return None

    @property
    def winner(self) -> Side | None:
        if isinstance(self._state, GameOverState):
            return self._state.winner
        return None

    @property
    def opponent(self) -> OpponentProfile:
        return self._opponent

    @property
    def status(self) -> str:
        return self._status

    @property
    def current_ship(self) -> ShipType | None:
        """Ship awaiting placement, if any."""
        if isinstance(self._state, PlacementState) and self._state.ship_index < len(DEFAULT_FLEET):
            return DEFAULT_FLEET[self._state.ship_index]
        return None

    @property
    def human_grid(self) -> Grid:
        return self._session.human_grid if self._session is not None else self._human_grid

    @property
    def human_fleet(self) -> Fleet:
        return self._session.human_fleet if self._session is not None else self._human_fleet

    @property
    def computer_grid(self) -> Grid:
        """The computer's grid as the human may see it."""
        if self._session is None:
            return Grid.create_empty(self._config.board_size)
        return self._session.computer_grid.fogged()

    @property
    def computer_fleet(self) -> Fleet:
        return self._session.computer_fleet if self._session is not None else Fleet()

    @property
    def sunk_counts(self) -> dict[Side, int]:
        return {Side.HUMAN: self.human_fleet.sunk_count, Side.COMPUTER: self.computer_fleet.sunk_count}

    @property
    def shot_count(self) -> int:
        return self._session.shot_count if self._session is not None else 0

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._session.history) if self._session is not None else ()

    @property
    def computer_turn_pending(self) -> bool:
        return self._pending_task is not None and self._scheduler.is_pending(self._pending_task)

    # Placement commands

    def select_opponent(self, key: str) -> OpponentProfile:
        """Choose the computer opponent; only allowed before battle."""
        self._require_placement("select an opponent")
        self._opponent = resolve_opponent(key)
        logger.info("opponent_selected key=%s strategy=%s", self._opponent.key, self._opponent.strategy.value)
        return self._opponent

    def place_ship(self, row: int, col: int, orientation: Orientation) -> GameState:
        """Place the next ship of the fleet with its bow at (row, col)."""
        state = self._require_placement("place a ship")
        ship_type = self.current_ship
        if ship_type is None:
            raise self._reject(WrongPhaseError("All ships are already placed."))

        bow = Coord(row, col)
        if not self._human_grid.in_bounds(bow):
            raise self._reject(OutOfBoundsError(f"({row}, {col}) is outside the grid."))
        if not can_place(self._human_grid, bow, ship_type.size, orientation):
            raise self._reject(
                InvalidPlacementError(f"{ship_type.display_name} does not fit at ({row}, {col}).")
            )
        self._human_grid, cells = place(self._human_grid, bow, ship_type.size, orientation)
        self._human_fleet = self._human_fleet.with_ship(
            Ship(ship_id=state.ship_index + 1, ship_type=ship_type, coords=cells)
        )
        self._state = PlacementState(state.ship_index + 1)
        self._status = self._placement_prompt(self._state.ship_index)
        logger.debug("ship_placed ship=%s bow=(%d, %d) orientation=%s", ship_type.value, row, col, orientation.value)
        return self._state

    def place_all_random(self) -> GameState:
        """Replace any partial placement with a full random fleet."""
        self._require_placement("place ships")
        try:
            grid, fleet = self._random_layout(self._rng, self._config.board_size)
        except GameError as exc:
            self._reject(exc)
            raise
        self._human_grid, self._human_fleet = grid, fleet
        self._state = PlacementState(len(DEFAULT_FLEET))
        self._status = self._placement_prompt(self._state.ship_index)
        logger.debug("fleet_placed_randomly ships=%d", len(fleet.ships))
        return self._state

    def reset_placement(self) -> GameState:
        self._require_placement("reset placement")
        self._human_grid = Grid.create_empty(self._config.board_size)
        self._human_fleet = Fleet()
        self._state = PlacementState(0)
        self._status = self._placement_prompt(0)
        return self._state

    def start_battle(self) -> GameState:
        """Lay out the computer fleet and hand the first turn to the human."""
        state = self._require_placement("start the battle")
        if state.ship_index < len(DEFAULT_FLEET):
            raise self._reject(WrongPhaseError("Place every ship before starting the battle."))

        computer_grid, computer_fleet = self._computer_layout(self._rng, self._config.board_size)
        self._session = create_session(self._human_grid, self._human_fleet, computer_grid, computer_fleet)
        self._memory = AIMemory()
        self._status = self._human_turn_prompt()
        follow_up = self._transition(BattleState(Side.HUMAN))
        logger.info(
            "battle_started opponent=%s strategy=%s",
            self._opponent.key,
            self._opponent.strategy.value,
        )
        self._publish(self._session, follow_up)
        return self._state

    # Battle commands

    def attack(self, row: int, col: int) -> AttackOutcome:
        """Fire the human's shot at the computer grid."""
        if self._attack_in_flight:
            raise self._reject(WrongPhaseError("An attack is already being resolved."))
        if not isinstance(self._state, BattleState) or self._state.turn_owner is not Side.HUMAN:
            raise self._reject(WrongPhaseError("It is not your turn to attack."))
        session = self._require_session()

        self._attack_in_flight = True
        try:
            try:
                outcome = human_fire(session, Coord(row, col))
            except GameError as exc:
                self._reject(exc)
                raise
            if outcome.fleet_defeated:
                follow_up = self._finish(Side.HUMAN)
            else:
                self._status = f"{self._opponent.label} is firing..."
                follow_up = self._transition(BattleState(Side.COMPUTER))
                self._pending_task = self._scheduler.call_later(
                    self._config.computer_delay_seconds, self._run_computer_turn
                )
            self._publish(session, [ShotResolved(attacker=Side.HUMAN, outcome=outcome), *follow_up])
        finally:
            self._attack_in_flight = False
        return outcome

    def reset_game(self) -> GameState:
        """Return to an empty placement board from any state."""
        if self._pending_task is not None:
            self._scheduler.cancel(self._pending_task)
            self._pending_task = None
        self._human_grid = Grid.create_empty(self._config.board_size)
        self._human_fleet = Fleet()
        self._session = None
        self._memory = AIMemory()
        self._attack_in_flight = False
        self._status = self._placement_prompt(0)
        follow_up = self._transition(PlacementState(0))
        logger.info("game_reset")
        self._publish(None, follow_up)
        return self._state

    def _run_computer_turn(self) -> None:
        self._pending_task = None
        if not isinstance(self._state, BattleState) or self._state.turn_owner is not Side.COMPUTER:
            logger.debug("computer_turn_skipped state=%s", self._state)
            return
        session = self._require_session()
        kind = self._opponent.strategy

        coord, memory = choose_target(kind, session.human_grid, session.human_fleet, self._memory, self._rng)
        outcome = computer_fire(session, coord)
        self._memory = observe_outcome(kind, memory, outcome, session.human_grid)

        if outcome.fleet_defeated:
            follow_up = self._finish(Side.COMPUTER)
        else:
            self._status = self._human_turn_prompt()
            follow_up = self._transition(BattleState(Side.HUMAN))
        self._publish(session, [ShotResolved(attacker=Side.COMPUTER, outcome=outcome), *follow_up])

    def _finish(self, winner: Side) -> list[object]:
        session = self._require_session()
        if winner is Side.HUMAN:
            self._status = f"You defeated {self._opponent.label} in {session.shot_count} shots!"
        else:
            self._status = f"{self._opponent.label} wins! All your ships are sunk."
        events = self._transition(GameOverState(winner))
        logger.info("game_over winner=%s shots=%d opponent=%s", winner.value, session.shot_count, self._opponent.key)
        if winner is Side.HUMAN and self._leaderboard is not None:
            self._leaderboard.record(
                ShotRecord(
                    opponent_label=self._opponent.label,
                    shot_count=session.shot_count,
                    timestamp=self._clock(),
                )
            )
        events.append(GameFinished(winner=winner, shot_count=session.shot_count, opponent_label=self._opponent.label))
        return events

    def _transition(self, state: GameState) -> list[object]:
        """Swap in the new state and return the phase event still to be published."""
        previous = self._state.phase
        self._state = state
        if previous is state.phase:
            return []
        logger.info("phase_changed from=%s to=%s", previous.name, state.phase.name)
        return [PhaseChanged(previous=previous, current=state.phase)]

    def _publish(self, session: BattleSession | None, events: list[object]) -> None:
        # Engine state is settled before this runs; a subscriber that resets
        # the game makes the remaining events stale.
        for event in events:
            if self._session is not session:
                logger.debug("events_dropped_after_reset type=%s", type(event).__name__)
                return
            self._events.publish(event)

    def _require_placement(self, action: str) -> PlacementState:
        if not isinstance(self._state, PlacementState):
            raise self._reject(WrongPhaseError(f"Cannot {action} during {self.phase.name.lower()}."))
        return self._state

    def _require_session(self) -> BattleSession:
        if self._session is None:
            raise WrongPhaseError("No battle in progress.")
        return self._session

    def _reject(self, error: GameError) -> GameError:
        logger.info("command_rejected error=%s reason=%s", type(error).__name__, error)
        return error

    def _random_layout(self, rng: random.Random, size: int) -> tuple[Grid, Fleet]:
        return random_placement(rng, DEFAULT_FLEET, size=size, max_attempts=self._config.placement_max_attempts)

    def _human_turn_prompt(self) -> str:
        return f"Your turn! Fire at {self._opponent.label}'s board."

    @staticmethod
    def _placement_prompt(ship_index: int) -> str:
        if ship_index >= len(DEFAULT_FLEET):
            return "All ships placed! Start the battle to begin."
        ship = DEFAULT_FLEET[ship_index]
        return f"Place your {ship.display_name} ({ship.size} cells)."
