"""
Belief-State Evaluator
======================

Evaluates actions in games where some moves are hidden.

Looking at the literal current state would leak information the player
to move cannot have. Instead, evaluation works from the player's
observable history: every concrete state consistent with it (the
belief state) is enumerated and the action is scored against all of
them.

Each evaluation is a pair of signed bounds in {-1, 0, 1}:
- my_bound: the outcome the mover can guarantee
- their_bound: the outcome the opponent can guarantee

The two are not simply negatives of one another because each side
reasons over a different belief state.

Values are memoized on (observable history, action): the mover's
knowledge is a function of the history, not of the unknowable true
state.
"""

import logging
from typing import Any, Tuple

from ..core.belief import BeliefState, MaskedGameState, superposition
from ..core.errors import EvaluatorFailure, GameOver, IllegalAction, NoLegalActions
from ..core.outcome import Draw
from .evaluator import Evaluator

logger = logging.getLogger(__name__)

Bounds = Tuple[int, int]


class MaskedEvaluator(Evaluator):
    """
    Exhaustive belief-state evaluator for MaskedGameState games.

    For every candidate state where the action is legal:
    - a win for the mover means the opponent is guaranteed a loss there
    - a draw caps both bounds at 0
    - otherwise the opponent's replies are evaluated one ply deeper and
      combined conservatively across candidates

    Candidates where the action is illegal are skipped: the action is
    assumed to fail silently there. The action must be legal in the
    state passed in, and at least one candidate must admit it.
    """

    def evaluate(self, state: MaskedGameState, action: Any) -> Bounds:
        if state.is_finished():
            raise GameOver(state, action)
        if not state.is_legal(action):
            raise IllegalAction(state, action)

        info = state.visible_history()
        key = (info, action)
        if key in self.cache:
            self.cache_hits += 1
            return self.cache[key]

        self.nodes_expanded += 1
        mover = state.current_player()
        my_bound, their_bound = 1, 1
        candidates = 0

        for candidate in superposition(state.genesis(), info):
            if not candidate.is_legal(action):
                continue
            candidates += 1
            next_state = candidate.apply_unchecked(action)
            outcome = next_state.outcome()

            if outcome is None:
                my_bound, reply_bound = self._reply_bounds(next_state, my_bound)
                their_bound = min(their_bound, reply_bound)
            elif isinstance(outcome, Draw):
                my_bound, their_bound = min(my_bound, 0), min(their_bound, 0)
            elif outcome.player == mover:
                # Only a potential state: this does not mean the action wins
                their_bound = -1
            else:
                raise EvaluatorFailure(
                    candidate, [action], "opponent won on the mover's own action"
                )

        if candidates == 0:
            raise EvaluatorFailure(
                state, [action], f"no candidate state admits the action after {len(info)} plies"
            )

        logger.debug("Evaluated %s over %d candidates: %s", action, candidates,
                     (my_bound, their_bound))
        bounds = (my_bound, their_bound)
        self.cache[key] = bounds
        return bounds

    def _reply_bounds(self, next_state: MaskedGameState, my_bound: int) -> Bounds:
        """
        Fold the opponent's replies in `next_state` into the bounds.

        Returns:
            Updated my_bound, and the best bound the opponent reaches
        """
        reply_bound = -1
        has_reply = False

        for reply in next_state.legal_actions():
            has_reply = True
            # Evaluated from the opponent's side: (their bound, my bound)
            pair = self.evaluate(next_state, reply)

            if pair == (1, -1):
                my_bound, reply_bound = -1, 1
            elif pair == (0, 0):
                my_bound, reply_bound = min(my_bound, 0), max(reply_bound, 0)
            elif pair == (0, -1):
                my_bound, reply_bound = -1, max(reply_bound, 0)
            elif pair == (-1, 1):
                pass
            elif pair == (-1, 0):
                my_bound = min(my_bound, 0)
            elif pair == (-1, -1):
                my_bound = -1
            else:
                # (1, 1), (1, 0) and (0, 1) cannot come out of evaluate()
                raise EvaluatorFailure(
                    next_state, [reply], f"impossible bound combination {pair}"
                )

        if not has_reply:
            raise NoLegalActions(next_state)
        return my_bound, reply_bound

    def belief(self, state: MaskedGameState) -> BeliefState:
        """The belief state this evaluator reasons over for `state`."""
        return BeliefState.from_history(state)
