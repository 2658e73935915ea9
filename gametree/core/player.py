"""
Player Module
=============

Defines player identities and turn order.

Turn order is cyclic: every player value knows who moves next and who
moved last. Two-player zero-sum games use TwoPlayer; games with three
or more seats use NPlayer.
"""

from enum import Enum
from dataclasses import dataclass


class TwoPlayer(Enum):
    """Two-player turn order. FIRST always opens the game."""
    FIRST = 0
    SECOND = 1

    def next(self) -> 'TwoPlayer':
        return TwoPlayer.SECOND if self == TwoPlayer.FIRST else TwoPlayer.FIRST

    def last(self) -> 'TwoPlayer':
        # With two seats the previous player is also the next one
        return self.next()

    def opponent(self) -> 'TwoPlayer':
        return self.next()

    @property
    def index(self) -> int:
        """0-based seat index."""
        return self.value

    @property
    def number(self) -> int:
        """1-based seat number."""
        return self.value + 1

    def __str__(self) -> str:
        return f"Player {self.number}"

    def __repr__(self) -> str:
        return f"TwoPlayer.{self.name}"


@dataclass(frozen=True)
class NPlayer:
    """
    Immutable seat in a game with three or more players.

    Attributes:
        n_players: Number of seats at the table
        index: 0-based seat of this player
    """
    n_players: int
    index: int = 0

    def __post_init__(self):
        if self.n_players < 3:
            raise ValueError("NPlayer requires at least 3 players, use TwoPlayer")
        if not 0 <= self.index < self.n_players:
            raise ValueError(
                f"Seat {self.index} out of range for {self.n_players} players"
            )

    def next(self) -> 'NPlayer':
        return NPlayer(self.n_players, (self.index + 1) % self.n_players)

    def last(self) -> 'NPlayer':
        return NPlayer(self.n_players, (self.index - 1) % self.n_players)

    @property
    def number(self) -> int:
        return self.index + 1

    def __str__(self) -> str:
        return f"Player {self.number}"


@dataclass(frozen=True)
class OnePlayer:
    """The only seat of a solitaire game."""

    def next(self) -> 'OnePlayer':
        return self

    def last(self) -> 'OnePlayer':
        return self

    @property
    def index(self) -> int:
        return 0

    def __str__(self) -> str:
        return "Player 1"
