"""
Belief State Module
===================

Tracks hidden information for games where some actions are masked.

Key Concepts:
- Observable information: what the player to move can derive about each
  action in the history
- Belief state: the set of concrete game states consistent with the
  observable information, starting from genesis
- Silent failure: a masked action on a square held by the opponent is
  absorbed without any public signal

Observation classes for one history entry:
- Visible(action): the action and its effect are known
- Masked(action): the observer attempted the action but does not know
  whether it succeeded
- Invisible: neither the action nor its effect is known

The first masked action taken by the observer is Visible to them,
every later one is Masked. Masked actions taken by the other player are
always Invisible.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, Tuple, Union

from .game import GameState


@dataclass(frozen=True)
class Visible:
    """The action and its effect are publicly known."""
    action: Any

    def __str__(self) -> str:
        return f"Visible({self.action})"


@dataclass(frozen=True)
class Masked:
    """The observer knows the attempt but not whether it succeeded."""
    action: Any

    def __str__(self) -> str:
        return f"Masked({self.action})"


@dataclass(frozen=True)
class Invisible:
    """Nothing about this action is known to the observer."""

    def __str__(self) -> str:
        return "Invisible"


INVISIBLE = Invisible()

Info = Union[Visible, Masked, Invisible]


class MaskedGameState(GameState):
    """
    Game state with hidden (masked) actions.

    Besides the base contract, concrete games expose their genesis
    state, the full action history and the set of masked actions.
    Masked actions must use "silently absorbed" semantics: an attempt
    that cannot take effect is recorded as a failure instead of being
    rejected, so legality never reveals hidden information.

    Turns alternate between two players, FIRST moving on even plies.
    """

    @abstractmethod
    def genesis(self) -> 'MaskedGameState':
        """The initial state of this game (same masked configuration)."""

    @abstractmethod
    def history(self) -> Tuple[Any, ...]:
        """Every action applied since genesis, in order."""

    @abstractmethod
    def masked_actions(self) -> Tuple[Any, ...]:
        """The actions whose effects are hidden from the opponent."""

    def is_masked(self, action: Any) -> bool:
        return action in self.masked_actions()

    def legal_masked(self) -> Iterator[Any]:
        """Masked actions that are legal for the current player."""
        return (action for action in self.masked_actions() if self.is_legal(action))

    def visible_history(self) -> Tuple[Info, ...]:
        """
        Project the action history onto what the current player knows.

        Returns:
            One Info entry per ply of history
        """
        observer = self.current_player().index
        seen_own_masked = False
        info: List[Info] = []

        for ply, action in enumerate(self.history()):
            if not self.is_masked(action):
                info.append(Visible(action))
            elif ply % 2 != observer:
                info.append(INVISIBLE)
            elif not seen_own_masked:
                # Own first masked attempt: nothing can have blocked it yet
                # from the observer's point of view
                info.append(Visible(action))
                seen_own_masked = True
            else:
                info.append(Masked(action))

        return tuple(info)


def superposition(genesis: MaskedGameState,
                  info: Sequence[Info]) -> List[MaskedGameState]:
    """
    Enumerate every concrete state consistent with `info`.

    Starting from genesis, known actions (Visible or Masked) are applied
    to every candidate where they are legal; Invisible entries branch
    every candidate over its legal masked actions. Any branch that
    reaches a terminal state is dropped: the outcome would have been
    public, so play could not have continued from it.

    Args:
        genesis: Initial state of the game
        info: Observable information, one entry per ply

    Returns:
        Candidate states in branch order
    """
    states: List[MaskedGameState] = [genesis]

    for observed in info:
        if isinstance(observed, Invisible):
            branched = []
            for state in states:
                for action in state.legal_masked():
                    next_state = state.apply_unchecked(action)
                    if next_state.outcome() is None:
                        branched.append(next_state)
            states = branched
        else:
            action = observed.action
            states = [
                next_state
                for next_state in (
                    state.apply_unchecked(action)
                    for state in states if state.is_legal(action)
                )
                if next_state.outcome() is None
            ]

    return states


@dataclass(frozen=True)
class BeliefState:
    """
    The set of concrete states consistent with an information sequence.

    Not cached anywhere: evaluators rebuild it per call and memoize on
    the (information, action) key instead.
    """
    info: Tuple[Info, ...]
    states: Tuple[MaskedGameState, ...]

    @classmethod
    def from_history(cls, state: MaskedGameState) -> 'BeliefState':
        """Build the belief of the player to move in `state`."""
        info = state.visible_history()
        return cls(info=info, states=tuple(superposition(state.genesis(), info)))

    @property
    def size(self) -> int:
        return len(self.states)

    def is_consistent(self, state: MaskedGameState) -> bool:
        return state in self.states

    def __iter__(self) -> Iterator[MaskedGameState]:
        return iter(self.states)

    def __len__(self) -> int:
        return len(self.states)

    def __repr__(self) -> str:
        observed = ", ".join(str(entry) for entry in self.info)
        return f"BeliefState([{observed}], {self.size} states)"
