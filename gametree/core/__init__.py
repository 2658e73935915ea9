"""
Core game components for gametree.
"""

from .player import TwoPlayer, NPlayer, OnePlayer
from .outcome import Win, Draw, DRAW, Outcome, is_win_for, outcome_value
from .errors import (
    GameError, IllegalAction, GameOver, NoLegalActions,
    StrategyFailure, EvaluatorFailure,
)
from .game import GameState, Ongoing, Finished, Transition, Interactive
from .belief import (
    Visible, Masked, Invisible, INVISIBLE, Info,
    MaskedGameState, BeliefState, superposition,
)

__all__ = [
    "TwoPlayer", "NPlayer", "OnePlayer",
    "Win", "Draw", "DRAW", "Outcome", "is_win_for", "outcome_value",
    "GameError", "IllegalAction", "GameOver", "NoLegalActions",
    "StrategyFailure", "EvaluatorFailure",
    "GameState", "Ongoing", "Finished", "Transition", "Interactive",
    "Visible", "Masked", "Invisible", "INVISIBLE", "Info",
    "MaskedGameState", "BeliefState", "superposition",
]
