"""
Outcome Module
==============

Terminal results for games with one definite winner or a draw
(tic-tac-toe, chess, checkers, ...).

Games with other outcome shapes (numeric payoffs, rankings) may use any
value they like with the generic Evaluator contract; only the end-state
and minimax evaluators require the Win/Draw shape.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Win:
    """The game ended with `player` as the winner."""
    player: Any

    def __str__(self) -> str:
        return f"{self.player} wins"


@dataclass(frozen=True)
class Draw:
    """The game ended without a winner."""

    def __str__(self) -> str:
        return "Draw"


DRAW = Draw()

Outcome = Union[Win, Draw]


def is_win_for(outcome: Outcome, player: Any) -> bool:
    """True if `outcome` is a win for `player`."""
    return isinstance(outcome, Win) and outcome.player == player


def outcome_value(outcome: Outcome, player: Any) -> int:
    """
    Signed value of an outcome from `player`'s perspective.

    Returns:
        1 for a win, 0 for a draw, -1 for a loss
    """
    if isinstance(outcome, Draw):
        return 0
    return 1 if outcome.player == player else -1
