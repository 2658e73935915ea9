"""
Tic-Tac-Toe
===========

Bitboard implementation of 3x3 tic-tac-toe.

Squares are numbered from the lower right corner, right to left and
bottom to top:

    8 | 7 | 6
    5 | 4 | 3
    2 | 1 | 0

Bit k of a player's board is set when that player holds square k.
"""

import sys
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Tuple

from ..core.game import GameState, Interactive
from ..core.outcome import DRAW, Outcome, Win
from ..core.player import TwoPlayer


@dataclass(frozen=True)
class Action:
    """Move to the single square whose bit is set."""
    bit: int

    @property
    def square(self) -> int:
        return self.bit.bit_length() - 1

    def __str__(self) -> str:
        return str(self.square)


# Process-wide action table; ALL_ACTIONS[k] moves to square k
ALL_ACTIONS: Tuple[Action, ...] = tuple(Action(1 << square) for square in range(9))

WINNING_POSITIONS: Tuple[int, ...] = (
    0b111_000_000,  # top row
    0b000_111_000,  # middle row
    0b000_000_111,  # bottom row
    0b100_100_100,  # left column
    0b010_010_010,  # middle column
    0b001_001_001,  # right column
    0b100_010_001,  # diagonal
    0b001_010_100,  # anti-diagonal
)

FULL_BOARD = 0b111_111_111

BOARD_GUIDE = "8|7|6\n5|4|3\n2|1|0"


class Piece(Enum):
    X = "X"
    O = "O"
    EMPTY = "_"

    def flip(self) -> 'Piece':
        if self == Piece.X:
            return Piece.O
        if self == Piece.O:
            return Piece.X
        return Piece.EMPTY

    def __str__(self) -> str:
        return self.value


def has_line(board: int) -> bool:
    """True if `board` contains a completed row, column or diagonal."""
    return any(board & line == line for line in WINNING_POSITIONS)


def parse_square(text: str) -> Optional[Action]:
    """Parse a square number 0-8; None if the text is not one."""
    text = text.strip()
    if not text.isdigit():
        return None
    square = int(text)
    if square > 8:
        return None
    return ALL_ACTIONS[square]


def read_action(lines: Optional[Iterable[str]] = None) -> Optional[Action]:
    """
    Read lines until one names a square.

    Args:
        lines: Line source, stdin by default

    Returns:
        The chosen action, or None if the source runs dry
    """
    if lines is None:
        lines = sys.stdin
    for line in lines:
        action = parse_square(line)
        if action is not None:
            return action
        print("Try again")
    return None


def render(cells: Iterable[str]) -> str:
    """Lay out nine cells, indexed by square, as a board."""
    c = list(cells)
    return (
        f"{c[8]}|{c[7]}|{c[6]}\n"
        f"{c[5]}|{c[4]}|{c[3]}\n"
        f"{c[2]}|{c[1]}|{c[0]}\n"
    )


@dataclass(frozen=True)
class TicTacToe(GameState, Interactive):
    """
    Immutable tic-tac-toe position.

    Attributes:
        boards: Bitboards of the FIRST and SECOND player
        to_move: Player to act
        player1_piece: Piece drawn for the FIRST player
    """
    boards: Tuple[int, int] = (0, 0)
    to_move: TwoPlayer = TwoPlayer.FIRST
    player1_piece: Piece = Piece.X

    def actions(self) -> Tuple[Action, ...]:
        return ALL_ACTIONS

    def is_legal(self, action: Action) -> bool:
        return (self.boards[0] | self.boards[1]) & action.bit == 0

    def apply_unchecked(self, action: Action) -> 'TicTacToe':
        assert self.is_legal(action), f"{action} is not legal"
        boards = list(self.boards)
        boards[self.to_move.index] |= action.bit
        return replace(self, boards=tuple(boards), to_move=self.to_move.next())

    def outcome(self) -> Optional[Outcome]:
        last = self.to_move.last()
        if has_line(self.boards[last.index]):
            return Win(last)
        if has_line(self.boards[self.to_move.index]):
            return Win(self.to_move)
        if self.boards[0] | self.boards[1] == FULL_BOARD:
            return DRAW
        return None

    def current_player(self) -> TwoPlayer:
        return self.to_move

    def piece_at(self, square: int) -> Piece:
        bit = 1 << square
        if self.boards[0] & bit:
            return self.player1_piece
        if self.boards[1] & bit:
            return self.player1_piece.flip()
        return Piece.EMPTY

    def get_user_input(self, lines: Optional[Iterable[str]] = None) -> Optional[Action]:
        return read_action(lines)

    def __str__(self) -> str:
        return render(str(self.piece_at(square)) for square in range(9))
