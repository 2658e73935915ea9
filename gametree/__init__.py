"""
gametree - Adversarial Game-Tree Evaluation
===========================================

A small framework for computing action values in turn-based games,
under perfect information or with some moves hidden from the opponent.

Key Features:
-------------
1. Minimal immutable game contract (apply / legal_actions / current_player)
2. Exhaustive backward-induction evaluators with permanent memoization
3. Belief-state evaluation for games with masked actions
4. Greedy and MinMax strategies, plus a driver to play games out
5. Reference games: tic-tac-toe and masked tic-tac-toe

Usage:
------
    from gametree.games import TicTacToe
    from gametree.algorithms import EndStateEvaluator, MinMax, GamePlayer

    player = GamePlayer(TicTacToe(), EndStateEvaluator(), MinMax())
    final_state, outcome = player.play()
    print(final_state)
    print(outcome)

License: MIT
"""

__version__ = "1.0.0"

from gametree.core.player import TwoPlayer
from gametree.core.outcome import Win, Draw, DRAW
from gametree.core.errors import GameError
from gametree.core.game import GameState, Ongoing, Finished
from gametree.core.belief import MaskedGameState, BeliefState

__all__ = [
    "TwoPlayer",
    "Win",
    "Draw",
    "DRAW",
    "GameError",
    "GameState",
    "Ongoing",
    "Finished",
    "MaskedGameState",
    "BeliefState",
]
