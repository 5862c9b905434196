"""Computer opponent targeting strategies."""

from salvo.game.ai.context import AIMemory, OpponentView
from salvo.game.ai.probability_density import density_map
from salvo.game.ai.strategy import StrategyKind, choose_target, observe_outcome

__all__ = [
    "AIMemory",
    "OpponentView",
    "StrategyKind",
    "choose_target",
    "density_map",
    "observe_outcome",
]
