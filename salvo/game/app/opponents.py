"""Computer opponent roster."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from salvo.game.ai.strategy import StrategyKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OpponentProfile:
    """A selectable computer opponent and the strategy it plays."""

    key: str
    label: str
    title: str
    description: str
    level: int
    strategy: StrategyKind


OPPONENTS: tuple[OpponentProfile, ...] = (
    OpponentProfile(
        key="easy",
        label="Deckhand Dobbs",
        title="The Loose Cannon",
        description="Fires at random. Not the sharpest strategist on the seas.",
        level=1,
        strategy=StrategyKind.RANDOM,
    ),
    OpponentProfile(
        key="medium",
        label="Commander Reyes",
        title="The Tracker",
        description="Hunts down your ships after every hit.",
        level=2,
        strategy=StrategyKind.HUNT_TARGET,
    ),
    OpponentProfile(
        key="hard",
        label="Admiral Varga",
        title="The Grandmaster",
        description="Plays the odds with probability-based targeting.",
        level=3,
        strategy=StrategyKind.PROBABILITY_DENSITY,
    ),
)

DEFAULT_OPPONENT_KEY = "medium"


def resolve_opponent(key: str) -> OpponentProfile:
    """Return the profile for `key`, falling back to the default opponent."""
    normalized = key.strip().lower()
    for profile in OPPONENTS:
        if profile.key == normalized:
            return profile
    logger.info("opponent_unknown key=%r fallback=%s", key, DEFAULT_OPPONENT_KEY)
    return resolve_opponent(DEFAULT_OPPONENT_KEY)
