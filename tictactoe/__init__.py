"""Two-player Tic-Tac-Toe with move history, replay and branching."""
from .controller import GameController, GameSnapshot, MoveDescription, SortOrder
from .game import (
    Board,
    InvalidMoveError,
    InvalidMoveIndexError,
    TicTacToeError,
    WIN_LINES,
    evaluate,
    is_draw,
    winner,
)
from .history import GameHistory

__version__ = "0.1.0"

__all__ = [
    "Board",
    "GameController",
    "GameHistory",
    "GameSnapshot",
    "InvalidMoveError",
    "InvalidMoveIndexError",
    "MoveDescription",
    "SortOrder",
    "TicTacToeError",
    "WIN_LINES",
    "evaluate",
    "is_draw",
    "winner",
]
