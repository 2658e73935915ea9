"""
Masked Tic-Tac-Toe
==================

Tic-tac-toe where a fixed set of squares is hidden.

Rules on top of the ordinary game:
- Pieces placed on masked squares are invisible to the opponent
- A player may attempt a masked square the opponent already holds; the
  attempt silently fails and that square can never be attempted again
- A player may never play a square they hold, nor a visible square the
  opponent holds

Every failed attempt consumes a turn, so games run for at most
9 + len(masked) plies.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from ..core.belief import MaskedGameState
from ..core.game import Interactive
from ..core.outcome import DRAW, Outcome, Win
from ..core.player import TwoPlayer
from .tic_tac_toe import (
    ALL_ACTIONS, FULL_BOARD, Action, Piece, has_line, read_action, render
)


@dataclass(frozen=True)
class MaskedTicTacToe(MaskedGameState, Interactive):
    """
    Immutable masked tic-tac-toe position.

    Attributes:
        masked: Hidden squares, as actions
        boards: Bitboards of the FIRST and SECOND player
        failed: Bitboard of masked squares where an attempt silently failed
        moves: Every action applied since genesis
        to_move: Player to act
        player1_piece: Piece drawn for the FIRST player
    """
    masked: Tuple[Action, ...] = ()
    boards: Tuple[int, int] = (0, 0)
    failed: int = 0
    moves: Tuple[Action, ...] = ()
    to_move: TwoPlayer = TwoPlayer.FIRST
    player1_piece: Piece = Piece.X

    def __post_init__(self):
        object.__setattr__(self, "masked", tuple(self.masked))
        if len(set(self.masked)) != len(self.masked):
            raise ValueError(f"Duplicate masked squares in {self.masked}")
        for action in self.masked:
            if action not in ALL_ACTIONS:
                raise ValueError(f"Unknown masked action {action!r}")

    def genesis(self) -> 'MaskedTicTacToe':
        return MaskedTicTacToe(masked=self.masked, player1_piece=self.player1_piece)

    def history(self) -> Tuple[Action, ...]:
        return self.moves

    def masked_actions(self) -> Tuple[Action, ...]:
        return self.masked

    def actions(self) -> Tuple[Action, ...]:
        return ALL_ACTIONS

    def is_legal(self, action: Action) -> bool:
        bit = action.bit
        if self.boards[self.to_move.index] & bit:
            return False
        if action in self.masked:
            return not (self.failed & bit)
        return not (self.boards[self.to_move.last().index] & bit)

    def apply_unchecked(self, action: Action) -> 'MaskedTicTacToe':
        assert self.is_legal(action), f"{action} is not legal"
        mover = self.to_move.index
        boards = list(self.boards)
        failed = self.failed
        if boards[1 - mover] & action.bit:
            # Only reachable for masked squares: the attempt is absorbed
            failed |= action.bit
        else:
            boards[mover] |= action.bit
        return replace(
            self,
            boards=tuple(boards),
            failed=failed,
            moves=self.moves + (action,),
            to_move=self.to_move.next(),
        )

    def outcome(self) -> Optional[Outcome]:
        last = self.to_move.last()
        if has_line(self.boards[last.index]):
            return Win(last)
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

    def public_view(self) -> str:
        """Board as both players see it: masked squares are hidden."""
        cells = []
        for square, action in enumerate(ALL_ACTIONS):
            piece = self.piece_at(square)
            if action in self.masked:
                cells.append("▮")
            elif piece == Piece.EMPTY:
                cells.append(str(square))
            else:
                cells.append(str(piece))
        return render(cells)

    def get_user_input(self, lines: Optional[Iterable[str]] = None) -> Optional[Action]:
        return read_action(lines)

    def __str__(self) -> str:
        return render(str(self.piece_at(square)) for square in range(9))
