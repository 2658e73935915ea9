"""
Perfect-Information Evaluators
==============================

Evaluators score a (state, action) pair. Strategies turn those scores
into a move.

Available Evaluators:
- RandomEvaluator: pseudo-random baseline, consults no game semantics
- EndStateEvaluator: full backward induction returning an Outcome
- MinimaxEvaluator: the same recursion with signed scalar values

The recursive evaluators are exhaustive and only feasible for very
small games. Values are memoized on the concrete resulting state and
kept for the lifetime of the evaluator: states are immutable and a
position's game-theoretic value never changes.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

import numpy as np

from ..core.errors import NoLegalActions
from ..core.game import Finished, GameState
from ..core.outcome import DRAW, Draw, Outcome, Win

logger = logging.getLogger(__name__)


class Evaluator(ABC):
    """
    Scores actions from the perspective of the player making them.

    Evaluators own their memoization cache; one instance must not be
    shared between concurrent callers.
    """

    def __init__(self):
        self.cache: Dict[Any, Any] = {}
        self.nodes_expanded = 0
        self.cache_hits = 0

    @abstractmethod
    def evaluate(self, state: GameState, action: Any) -> Any:
        """Evaluate playing `action` in `state`."""

    def get_stats(self) -> Dict[str, int]:
        """Instrumentation counters for this evaluator."""
        return {
            "nodes_expanded": self.nodes_expanded,
            "cache_hits": self.cache_hits,
            "cache_size": len(self.cache),
        }

    def clear(self) -> None:
        """Drop every memoized value and reset the counters."""
        logger.debug("%s: dropping %d cached values", type(self).__name__, len(self.cache))
        self.cache.clear()
        self.nodes_expanded = 0
        self.cache_hits = 0


class RandomEvaluator(Evaluator):
    """
    Non-informative baseline for exercising strategy plumbing.

    Each new (state, action) pair advances a 64-bit linear congruential
    generator; repeated pairs return their cached value.
    """

    MULTIPLIER = np.uint64(1664525)
    INCREMENT = np.uint64(1013904223)

    def __init__(self, seed: int = 0):
        """
        Args:
            seed: Initial generator state, reduced modulo 2**64
        """
        super().__init__()
        if seed < 0:
            raise ValueError("seed must be non-negative")
        self.rng_state = np.uint64(seed % 2 ** 64)

    def next_value(self) -> int:
        """Advance the generator with wraparound arithmetic."""
        with np.errstate(over="ignore"):
            self.rng_state = self.rng_state * self.MULTIPLIER + self.INCREMENT
        return int(self.rng_state)

    def evaluate(self, state: GameState, action: Any) -> int:
        key = (state, action)
        if key in self.cache:
            self.cache_hits += 1
            return self.cache[key]

        self.nodes_expanded += 1
        value = self.next_value()
        self.cache[key] = value
        return value


class EndStateEvaluator(Evaluator):
    """
    Exact outcome of an action under perfect play by both sides.

    For the state reached by the action:
    1. If it is terminal, its outcome is the value
    2. If the next player has a move that wins for them, it is theirs
    3. Otherwise, if they have a move that draws, it is a draw
    4. Otherwise every move loses for them: a win for the mover

    Requires Win/Draw outcomes. A non-terminal state without legal
    actions raises NoLegalActions.
    """

    def evaluate(self, state: GameState, action: Any) -> Outcome:
        # Illegal actions and finished states raise from apply()
        transition = state.apply(action)
        new_state = transition.state

        if new_state in self.cache:
            self.cache_hits += 1
            return self.cache[new_state]

        if isinstance(transition, Finished):
            self.cache[new_state] = transition.outcome
            return transition.outcome

        outcome = self._expand(state, new_state)
        self.cache[new_state] = outcome
        return outcome

    def _expand(self, state: GameState, new_state: GameState) -> Outcome:
        self.nodes_expanded += 1
        next_player = new_state.current_player()
        has_actions = False
        has_draw = False

        for child_action in new_state.legal_actions():
            has_actions = True
            outcome = self.evaluate(new_state, child_action)
            if isinstance(outcome, Win) and outcome.player == next_player:
                return outcome
            if isinstance(outcome, Draw):
                has_draw = True

        if not has_actions:
            raise NoLegalActions(new_state)
        if has_draw:
            return DRAW
        return Win(state.current_player())


class MinimaxEvaluator(Evaluator):
    """
    Backward induction with signed values for two-player zero-sum games.

    Returns 1, 0 or -1: a win, draw or loss for the player making the
    action. Same recursion as EndStateEvaluator, with an int cached per
    state instead of an Outcome.
    """

    def evaluate(self, state: GameState, action: Any) -> int:
        mover = state.current_player()
        transition = state.apply(action)
        new_state = transition.state

        if new_state in self.cache:
            self.cache_hits += 1
            return self.cache[new_state]

        if isinstance(transition, Finished):
            outcome = transition.outcome
            if isinstance(outcome, Draw):
                value = 0
            else:
                value = 1 if outcome.player == mover else -1
        else:
            value = -self._best_reply(new_state)

        self.cache[new_state] = value
        return value

    def _best_reply(self, new_state: GameState) -> int:
        """Best value the next player can reach from `new_state`."""
        self.nodes_expanded += 1
        best = None
        for child_action in new_state.legal_actions():
            value = self.evaluate(new_state, child_action)
            if value == 1:
                return 1
            if best is None or value > best:
                best = value

        if best is None:
            raise NoLegalActions(new_state)
        return best


def evaluate_all(evaluator: Evaluator, state: GameState) -> Dict[Any, Any]:
    """Evaluate every legal action in `state`, keyed by action."""
    values = {action: evaluator.evaluate(state, action)
              for action in state.legal_actions()}
    logger.debug("Evaluated %d actions, stats %s", len(values), evaluator.get_stats())
    return values
