"""
Algorithm implementations for gametree.

Available Evaluators:
- RandomEvaluator: LCG baseline for testing strategy plumbing
- EndStateEvaluator: backward induction over Win/Draw outcomes
- MinimaxEvaluator: backward induction with signed scalar values
- MaskedEvaluator: belief-state bounds for games with hidden actions

Available Strategies:
- GreedyStrategy: highest evaluation wins
- MinMax / ScalarMinMax: perfect play over the end-state evaluators
"""

from .evaluator import (
    Evaluator, RandomEvaluator, EndStateEvaluator, MinimaxEvaluator, evaluate_all
)
from .masked import MaskedEvaluator
from .strategy import Strategy, GreedyStrategy, MinMax, ScalarMinMax
from .player import GamePlayer

__all__ = [
    "Evaluator",
    "RandomEvaluator",
    "EndStateEvaluator",
    "MinimaxEvaluator",
    "MaskedEvaluator",
    "evaluate_all",
    "Strategy",
    "GreedyStrategy",
    "MinMax",
    "ScalarMinMax",
    "GamePlayer",
]
