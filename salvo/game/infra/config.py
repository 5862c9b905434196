"""Application configuration and env loading."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from salvo.game.core.models import BOARD_SIZE

logger = logging.getLogger(__name__)


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = Path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files in order; later files win.

    Default order:
    1) appdata/config/.env.app
    2) appdata/config/.env.app.local
    3) .env
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else ("appdata/config/.env.app", "appdata/config/.env.app.local", ".env")
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Tunable game settings."""

    board_size: int = BOARD_SIZE
    computer_delay_seconds: float = 0.6
    placement_max_attempts: int = 10_000
    leaderboard_cap: int = 50
    leaderboard_display: int = 20
    default_opponent: str = "medium"

    @classmethod
    def from_env(cls) -> GameConfig:
        """Build config from SALVO_* variables, keeping defaults for bad values."""
        defaults = cls()
        return cls(
            board_size=_int("SALVO_BOARD_SIZE", defaults.board_size, minimum=5),
            computer_delay_seconds=_float("SALVO_COMPUTER_DELAY_SECONDS", defaults.computer_delay_seconds),
            placement_max_attempts=_int(
                "SALVO_PLACEMENT_MAX_ATTEMPTS", defaults.placement_max_attempts, minimum=1
            ),
            leaderboard_cap=_int("SALVO_LEADERBOARD_CAP", defaults.leaderboard_cap, minimum=1),
            leaderboard_display=_int("SALVO_LEADERBOARD_DISPLAY", defaults.leaderboard_display, minimum=1),
            default_opponent=os.getenv("SALVO_DEFAULT_OPPONENT", defaults.default_opponent).strip().lower()
            or defaults.default_opponent,
        )


def _int(name: str, default: int, *, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("config_invalid name=%s value=%r using=%d", name, raw, default)
        return default
    if value < minimum:
        logger.warning("config_out_of_range name=%s value=%d minimum=%d using=%d", name, value, minimum, default)
        return default
    return value


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("config_invalid name=%s value=%r using=%s", name, raw, default)
        return default
    if value < 0.0:
        logger.warning("config_out_of_range name=%s value=%s using=%s", name, value, default)
        return default
    return value
