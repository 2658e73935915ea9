"""
Game Tree Analysis
==================

Reference computations used to check the evaluators.

Tools:
- solve / action_values: plain negamax over the whole tree, written
  independently of the evaluators so it can serve as ground truth
- reachable_states: enumerate every position reachable from genesis
- belief_statistics: how large belief states get in a masked game

All of these are exhaustive; use them on small games only.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Set

import numpy as np

from ..core.belief import BeliefState, MaskedGameState
from ..core.errors import NoLegalActions
from ..core.game import GameState
from ..core.outcome import outcome_value


def solve(state: GameState, table: Optional[Dict[GameState, int]] = None) -> int:
    """
    Game-theoretic value of `state` for the player to move.

    Two-player zero-sum Win/Draw games only.

    Args:
        state: Position to solve
        table: Optional transposition table shared between calls;
            without it every line of play is enumerated separately

    Returns:
        1 (win), 0 (draw) or -1 (loss) for state.current_player()
    """
    if table is not None and state in table:
        return table[state]

    outcome = state.outcome()
    if outcome is not None:
        value = outcome_value(outcome, state.current_player())
    else:
        children = [state.apply_unchecked(action) for action in state.legal_actions()]
        if not children:
            raise NoLegalActions(state)
        value = max(-solve(child, table) for child in children)

    if table is not None:
        table[state] = value
    return value


def action_values(state: GameState,
                  table: Optional[Dict[GameState, int]] = None) -> Dict[Any, int]:
    """Value of every legal action for the player to move in `state`."""
    return {
        action: -solve(state.apply_unchecked(action), table)
        for action in state.legal_actions()
    }


def reachable_states(genesis: GameState) -> Set[GameState]:
    """Every non-terminal state reachable from `genesis`, genesis included."""
    seen: Set[GameState] = set()
    stack = [genesis]

    while stack:
        state = stack.pop()
        if state in seen or state.is_finished():
            continue
        seen.add(state)
        for action in state.legal_actions():
            stack.append(state.apply_unchecked(action))

    return seen


@dataclass
class BeliefStatistics:
    """
    Summary of belief-state sizes over a set of positions.

    Attributes:
        count: Positions examined
        mean_size: Average number of candidate states
        max_size: Largest belief state
        histogram: histogram[k] positions have exactly k candidates
    """
    count: int
    mean_size: float
    max_size: int
    histogram: np.ndarray

    def __repr__(self) -> str:
        return (f"BeliefStatistics(count={self.count}, "
                f"mean_size={self.mean_size:.2f}, max_size={self.max_size})")


def belief_statistics(states: Iterable[MaskedGameState]) -> BeliefStatistics:
    """Collect belief-state sizes for the player to move in each state."""
    sizes = np.array(
        [BeliefState.from_history(state).size for state in states],
        dtype=np.int64,
    )
    if sizes.size == 0:
        return BeliefStatistics(0, 0.0, 0, np.zeros(0, dtype=np.int64))

    return BeliefStatistics(
        count=int(sizes.size),
        mean_size=float(np.mean(sizes)),
        max_size=int(np.max(sizes)),
        histogram=np.bincount(sizes),
    )
