"""
Game Module: States, Actions, and Transitions
=============================================

Defines the contract every game must satisfy to be evaluated.

Game Flow:
1. A game starts from a genesis state
2. The current player picks one of the legal actions
3. Applying the action yields either a new ongoing state or a
   finished state together with its outcome
4. States are immutable values: applying an action never mutates the
   state it is applied to

Evaluators memoize by state and recurse through many branches sharing
ancestors, so states must be hashable and equality-comparable.

Actions come from a static table per game (see GameState.actions) and
are referenced by index where a compact key is needed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence, Union

from .errors import GameOver, IllegalAction
from .outcome import Outcome


@dataclass(frozen=True)
class Ongoing:
    """Result of an action that leaves the game in progress."""
    state: 'GameState'


@dataclass(frozen=True)
class Finished:
    """Result of an action that ends the game."""
    state: 'GameState'
    outcome: Outcome


Transition = Union[Ongoing, Finished]


class GameState(ABC):
    """
    Abstract immutable game position.

    Concrete games implement the five abstract methods below; the
    checked transition, legal action generation and the action index
    are derived from them.

    Subclasses must be hashable and define value equality (frozen
    dataclasses satisfy both).
    """

    @abstractmethod
    def actions(self) -> Sequence[Any]:
        """The static table of every action in the game, legal or not."""

    @abstractmethod
    def is_legal(self, action: Any) -> bool:
        """True if `action` may be played by the current player."""

    @abstractmethod
    def apply_unchecked(self, action: Any) -> 'GameState':
        """
        Apply an action without any checks.

        Precondition: the action is legal and the state is not terminal.
        Violating it yields a state outside the game's rules. Only use
        this where the caller has already established the precondition;
        everything else goes through apply().
        """

    @abstractmethod
    def outcome(self) -> Optional[Outcome]:
        """The outcome if the game is over, otherwise None."""

    @abstractmethod
    def current_player(self) -> Any:
        """The player to act."""

    def apply(self, action: Any) -> Transition:
        """
        Apply an action and return the resulting transition.

        Raises:
            GameOver: the state is already terminal
            IllegalAction: the action is not legal in this state
        """
        if self.outcome() is not None:
            raise GameOver(self, action)
        if not self.is_legal(action):
            raise IllegalAction(self, action)

        next_state = self.apply_unchecked(action)
        outcome = next_state.outcome()
        if outcome is None:
            return Ongoing(next_state)
        return Finished(next_state, outcome)

    def legal_actions(self) -> Iterator[Any]:
        """
        Lazily generate the legal actions for the current player.

        A fresh iterator is produced on every call. Terminal states have
        no legal actions.
        """
        if self.outcome() is not None:
            return iter(())
        return (action for action in self.actions() if self.is_legal(action))

    def is_finished(self) -> bool:
        return self.outcome() is not None

    def action_index(self, action: Any) -> int:
        """Position of `action` in the static action table."""
        return self.actions().index(action)


class Interactive(ABC):
    """
    Optional capability for games a human can play from a line source.

    The driver checks for it with isinstance; it is not part of the core
    contract.
    """

    @abstractmethod
    def get_user_input(self) -> Any:
        """Block until the human picks an action and return it."""
