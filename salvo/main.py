"""Application entry point: headless simulated games and the leaderboard."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence
from pathlib import Path

from salvo.game.ai import AIMemory, StrategyKind, choose_target, observe_outcome
from salvo.game.app.opponents import OPPONENTS, resolve_opponent
from salvo.game.app.orchestrator import GameOrchestrator
from salvo.game.app.state_machine import GamePhase
from salvo.game.core.models import Side
from salvo.game.infra.app_data import ensure_app_data_dirs
from salvo.game.infra.config import GameConfig, load_default_env_files
from salvo.game.infra.logging import setup_logging
from salvo.game.leaderboard import LeaderboardRepository
from salvo.runtime.scheduler import Scheduler

logger = logging.getLogger(__name__)


def play_autopilot_game(
    orchestrator: GameOrchestrator, scheduler: Scheduler, autopilot: StrategyKind, rng: random.Random
) -> Side:
    """Drive the human side with `autopilot` until the game ends."""
    orchestrator.place_all_random()
    orchestrator.start_battle()
    memory = AIMemory()
    while orchestrator.phase is GamePhase.BATTLE:
        if orchestrator.turn_owner is Side.HUMAN:
            coord, memory = choose_target(
                autopilot, orchestrator.computer_grid, orchestrator.computer_fleet, memory, rng
            )
            outcome = orchestrator.attack(coord.row, coord.col)
            memory = observe_outcome(autopilot, memory, outcome, orchestrator.computer_grid)
        else:
            scheduler.advance(orchestrator.config.computer_delay_seconds)
    winner = orchestrator.winner
    if winner is None:
        raise RuntimeError("game ended without a winner")
    return winner


def _cmd_simulate(args: argparse.Namespace, config: GameConfig) -> int:
    if args.games <= 0:
        print("--games must be positive.")
        return 2
    opponent = resolve_opponent(args.opponent or config.default_opponent)
    autopilot = StrategyKind(args.autopilot.upper())
    leaderboard = LeaderboardRepository(args.leaderboard_path, retention_cap=config.leaderboard_cap)
    wins = 0
    total_shots = 0
    for game_index in range(args.games):
        seed = args.seed + game_index
        scheduler = Scheduler()
        orchestrator = GameOrchestrator(
            rng=random.Random(seed),
            scheduler=scheduler,
            leaderboard=leaderboard if args.record else None,
            config=config,
            opponent_key=opponent.key,
        )
        winner = play_autopilot_game(orchestrator, scheduler, autopilot, random.Random(seed ^ 0x5A17))
        if winner is Side.HUMAN:
            wins += 1
        total_shots += orchestrator.shot_count
        print(f"game={game_index + 1} seed={seed} winner={winner.value.lower()} shots={orchestrator.shot_count}")

    print(
        f"opponent={opponent.label} autopilot={autopilot.value.lower()} "
        f"wins={wins}/{args.games} avg_shots={total_shots / args.games:.1f}"
    )
    return 0


def _cmd_leaderboard(args: argparse.Namespace, config: GameConfig) -> int:
    repository = LeaderboardRepository(args.leaderboard_path, retention_cap=config.leaderboard_cap)
    records = repository.top(args.limit or config.leaderboard_display)
    if not records:
        print("No victories recorded yet.")
        return 0
    for rank, record in enumerate(records, start=1):
        print(f"{rank:>2}. {record.shot_count:>3} shots vs {record.opponent_label} ({record.timestamp.date()})")
    return 0


def build_parser(default_leaderboard: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="salvo", description="Salvo grid-combat engine.")
    parser.add_argument("--leaderboard-path", default=default_leaderboard)
    subparsers = parser.add_subparsers(dest="command", required=True)

    simulate = subparsers.add_parser("simulate", help="Play headless games with an autopilot human side.")
    simulate.add_argument("--opponent", choices=[profile.key for profile in OPPONENTS], default=None)
    simulate.add_argument(
        "--autopilot",
        choices=[kind.value.lower() for kind in StrategyKind],
        default=StrategyKind.PROBABILITY_DENSITY.value.lower(),
    )
    simulate.add_argument("--games", type=int, default=1)
    simulate.add_argument("--seed", type=int, default=0)
    simulate.add_argument("--record", action="store_true", help="Record autopilot wins on the leaderboard.")
    simulate.set_defaults(handler=_cmd_simulate)

    leaderboard = subparsers.add_parser("leaderboard", help="Show the fewest-shots leaderboard.")
    leaderboard.add_argument("--limit", type=int, default=None)
    leaderboard.set_defaults(handler=_cmd_leaderboard)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Salvo command line."""
    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging()
    config = GameConfig.from_env()
    logger.info("app_data_paths root=%s logs=%s", paths["root"], paths["logs"])

    args = build_parser(str(paths["leaderboard"])).parse_args(argv)
    args.leaderboard_path = Path(args.leaderboard_path)
    return args.handler(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
