"""
Game driver: plays a game to completion with evaluator/strategy pairs.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from ..core.errors import GameError
from ..core.game import Finished, GameState, Interactive
from ..core.outcome import Outcome
from .evaluator import Evaluator
from .strategy import Strategy

logger = logging.getLogger(__name__)

MoveCallback = Callable[[Any, Any, GameState], None]


class GamePlayer:
    """
    Drives a game from its current state to a terminal outcome.

    Attributes:
        state: Current game state, replaced after every move
        history: (player, action) for every move played by this driver
    """

    def __init__(self,
                 state: GameState,
                 evaluator: Evaluator,
                 strategy: Strategy,
                 on_move: Optional[MoveCallback] = None):
        """
        Args:
            state: Starting state
            evaluator: Evaluator handed to the strategy
            strategy: Picks the actions
            on_move: Optional callback(player, action, new_state) after each move
        """
        self.state = state
        self.evaluator = evaluator
        self.strategy = strategy
        self.on_move = on_move
        self.history: List[Tuple[Any, Any]] = []

    def _step(self, action: Any) -> Optional[Outcome]:
        """Apply one action; return the outcome if the game ended."""
        player = self.state.current_player()
        transition = self.state.apply(action)
        self.state = transition.state
        self.history.append((player, action))
        logger.debug("Move %d: %s plays %s", len(self.history), player, action)

        if self.on_move is not None:
            self.on_move(player, action, self.state)

        if isinstance(transition, Finished):
            logger.info("Game over after %d moves: %s", len(self.history), transition.outcome)
            return transition.outcome
        return None

    def play(self) -> Tuple[GameState, Outcome]:
        """Self-play: the same strategy moves for every player."""
        outcome = self.state.outcome()
        while outcome is None:
            action = self.strategy.best_action(self.state, self.evaluator)
            outcome = self._step(action)
        return self.state, outcome

    def play_against(self,
                     opponent_evaluator: Evaluator,
                     opponent_strategy: Strategy,
                     seat: Any) -> Tuple[GameState, Outcome]:
        """
        Play this driver's pair for `seat` against another pair.

        Args:
            opponent_evaluator: Evaluator for every other seat
            opponent_strategy: Strategy for every other seat
            seat: The player this driver's own strategy controls
        """
        outcome = self.state.outcome()
        while outcome is None:
            if self.state.current_player() == seat:
                action = self.strategy.best_action(self.state, self.evaluator)
            else:
                action = opponent_strategy.best_action(self.state, opponent_evaluator)
            outcome = self._step(action)
        return self.state, outcome

    def play_interactive(self,
                         human: Any,
                         get_input: Optional[Callable[[GameState], Any]] = None
                         ) -> Tuple[GameState, Outcome]:
        """
        Play against a human who controls `human`.

        Args:
            human: The player whose moves come from input
            get_input: Returns the human's action for a state; defaults to
                the game's own get_user_input()

        Raises:
            GameError: the game is not Interactive, or input ran out
            IllegalAction: the human chose an illegal action
        """
        if get_input is None:
            if not isinstance(self.state, Interactive):
                raise GameError(f"{type(self.state).__name__} does not support interactive play")
            get_input = lambda state: state.get_user_input()

        outcome = self.state.outcome()
        while outcome is None:
            if self.state.current_player() == human:
                action = get_input(self.state)
                if action is None:
                    raise GameError("Input ended before the game finished")
            else:
                action = self.strategy.best_action(self.state, self.evaluator)
            outcome = self._step(action)
        return self.state, outcome
