"""
Reference games implementing the gametree contract.

Available Games:
- TicTacToe: perfect-information 3x3 tic-tac-toe
- MaskedTicTacToe: tic-tac-toe with hidden squares
"""

from .tic_tac_toe import ALL_ACTIONS, Action, Piece, TicTacToe
from .masked_tic_tac_toe import MaskedTicTacToe

__all__ = [
    "ALL_ACTIONS",
    "Action",
    "Piece",
    "TicTacToe",
    "MaskedTicTacToe",
]
