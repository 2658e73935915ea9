"""
Strategies: choosing a move from evaluations.

A strategy asks an evaluator about every legal action and picks one.
Strategies assume the game is not over; asking them to act in a
terminal state raises GameOver.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..core.errors import EvaluatorFailure, GameOver, NoLegalActions, StrategyFailure
from ..core.game import GameState
from ..core.outcome import Draw, Win
from .evaluator import EndStateEvaluator, Evaluator, MinimaxEvaluator


class Strategy(ABC):
    """Picks an action in a state, given an evaluator."""

    @abstractmethod
    def best_action(self, state: GameState, evaluator: Evaluator) -> Any:
        """Return the chosen action."""

    @staticmethod
    def _check_ongoing(state: GameState) -> None:
        if state.is_finished():
            raise GameOver(state)


def compare(left: Any, right: Any) -> Optional[int]:
    """
    Three-way comparison of two evaluations.

    Returns:
        -1, 0 or 1, or None if the evaluations are incomparable
    """
    try:
        if left < right:
            return -1
        if left > right:
            return 1
        if left == right:
            return 0
    except TypeError:
        return None
    return None


class GreedyStrategy(Strategy):
    """
    Take the action with the greatest evaluation.

    The first action seen keeps its place on ties. Evaluations must be
    totally ordered: two that cannot be compared raise EvaluatorFailure
    naming both actions.
    """

    def best_action(self, state: GameState, evaluator: Evaluator) -> Any:
        self._check_ongoing(state)
        best_action = None
        best_value = None
        found = False

        for action in state.legal_actions():
            value = evaluator.evaluate(state, action)
            if not found:
                best_action, best_value, found = action, value, True
                continue

            ordering = compare(best_value, value)
            if ordering is None:
                raise EvaluatorFailure(
                    state, [best_action, action], "evaluations are incomparable"
                )
            if ordering < 0:
                best_action, best_value = action, value

        if not found:
            raise NoLegalActions(state)
        return best_action


class MinMax(Strategy):
    """
    Perfect play over an EndStateEvaluator.

    Returns the first winning action found; otherwise the last drawing
    action, otherwise the last losing one.
    """

    def best_action(self, state: GameState, evaluator: EndStateEvaluator) -> Any:
        self._check_ongoing(state)
        mover = state.current_player()
        draw = None
        loss = None
        found = False

        for action in state.legal_actions():
            found = True
            outcome = evaluator.evaluate(state, action)
            if isinstance(outcome, Win) and outcome.player == mover:
                return action
            if isinstance(outcome, Draw):
                draw = action
            elif isinstance(outcome, Win):
                loss = action

        if not found:
            raise NoLegalActions(state)
        if draw is not None:
            return draw
        if loss is not None:
            return loss
        # Actions existed but none evaluated to a win, draw or loss
        raise StrategyFailure(state)


class ScalarMinMax(Strategy):
    """MinMax over the signed values of a MinimaxEvaluator."""

    def best_action(self, state: GameState, evaluator: MinimaxEvaluator) -> Any:
        self._check_ongoing(state)
        draw = None
        loss = None
        found = False

        for action in state.legal_actions():
            found = True
            value = evaluator.evaluate(state, action)
            if value == 1:
                return action
            if value == 0:
                draw = action
            elif value == -1:
                loss = action

        if not found:
            raise NoLegalActions(state)
        if draw is not None:
            return draw
        if loss is not None:
            return loss
        raise StrategyFailure(state)
