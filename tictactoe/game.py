"""Board representation and rules for classic 3x3 Tic-Tac-Toe.

The board is kept independent from the history model and the UI.  A board is
an immutable sequence of nine cells in row-major order; each cell holds
``"X"``, ``"O"`` or :data:`EMPTY`.  Placing a mark never mutates a board, it
returns a new one, so snapshots stored in the game history can be shared
freely.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

Player = str  # Either "X" or "O"
WinningLine = Tuple[int, ...]

X: Player = "X"
O: Player = "O"
EMPTY = " "
MARKS: Tuple[Player, Player] = (X, O)

BOARD_SIZE = 3
BOARD_CELLS = BOARD_SIZE * BOARD_SIZE

# Rows top to bottom, columns left to right, then diagonal down and diagonal up.
# The order decides which line is reported when several are complete.
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

_EMPTY_SYMBOLS = frozenset({EMPTY, ".", "-"})


class TicTacToeError(RuntimeError):
    """Base class for game errors."""


class InvalidMoveError(TicTacToeError):
    """Raised when a move is attempted that is not legal in the current state."""

    def __init__(self, index: object, reason: str) -> None:
        super().__init__(f"Cannot play cell {index!r}: {reason}")
        self.index = index
        self.reason = reason


class InvalidMoveIndexError(TicTacToeError):
    """Raised when jumping to a move that is not in the history."""

    def __init__(self, move: object, length: int) -> None:
        super().__init__(f"Move {move!r} is outside the history range 0..{length - 1}")
        self.move = move
        self.length = length


def cell_coordinates(index: int) -> Tuple[int, int]:
    """Return the zero-based ``(row, column)`` of a cell index."""

    if not 0 <= index < BOARD_CELLS:
        raise ValueError("cell index must be in range 0..8")
    return divmod(index, BOARD_SIZE)


def mark_for_move(move_number: int) -> Player:
    """Return the mark that plays after ``move_number`` moves (X starts)."""

    return X if move_number % 2 == 0 else O


@dataclass(frozen=True)
class Board:
    """A single immutable snapshot of the nine cells."""

    cells: Tuple[str, ...] = field(default=(EMPTY,) * BOARD_CELLS)

    def __post_init__(self) -> None:
        cells = tuple(self.cells)
        if len(cells) != BOARD_CELLS:
            raise ValueError(f"a board needs exactly {BOARD_CELLS} cells, got {len(cells)}")
        for value in cells:
            if value != EMPTY and value not in MARKS:
                raise ValueError(f"unknown cell value {value!r}")
        object.__setattr__(self, "cells", cells)

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """Parse a 9-character layout such as ``"XO.X.O..X"``.

        Whitespace between rows is not allowed; use ``.``, ``-`` or a space for
        empty cells.
        """

        if len(text) != BOARD_CELLS:
            raise ValueError(f"board string must have {BOARD_CELLS} characters")
        cells = []
        for char in text:
            if char in _EMPTY_SYMBOLS:
                cells.append(EMPTY)
            elif char.upper() in MARKS:
                cells.append(char.upper())
            else:
                raise ValueError(f"unknown board symbol {char!r}")
        return cls(tuple(cells))

    def __getitem__(self, index: int) -> str:
        return self.cells[index]

    def __len__(self) -> int:
        return BOARD_CELLS

    def __iter__(self) -> Iterator[str]:
        return iter(self.cells)

    def place(self, index: int, player: Player) -> "Board":
        """Return a copy of the board with ``player`` written at ``index``."""

        if player not in MARKS:
            raise ValueError("player must be 'X' or 'O'")
        if not 0 <= index < BOARD_CELLS:
            raise ValueError("cell index must be in range 0..8")
        cells = list(self.cells)
        cells[index] = player
        return Board(tuple(cells))

    def is_empty_cell(self, index: int) -> bool:
        return self.cells[index] == EMPTY

    @property
    def is_full(self) -> bool:
        return all(cell != EMPTY for cell in self.cells)

    def empty_cells(self) -> Tuple[int, ...]:
        return tuple(idx for idx, value in enumerate(self.cells) if value == EMPTY)

    def count(self, player: Player) -> int:
        return sum(cell == player for cell in self.cells)

    def legal_action_mask(self) -> np.ndarray:
        """Return a boolean mask over the nine cells that can still be played."""

        mask = np.zeros(BOARD_CELLS, dtype=bool)
        if evaluate(self):
            return mask
        for idx in self.empty_cells():
            mask[idx] = True
        return mask

    def serialize(self) -> str:
        return "".join(cell if cell != EMPTY else "." for cell in self.cells)

    def render_ascii(self) -> str:
        rows = []
        for row in range(BOARD_SIZE):
            start = row * BOARD_SIZE
            rows.append(" | ".join(self.serialize()[start:start + BOARD_SIZE]))
        return "\n---------\n".join(rows)


def evaluate(board: Sequence[str]) -> WinningLine:
    """Return the first complete line on ``board`` or an empty tuple."""

    for line in WIN_LINES:
        a, b, c = line
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return line
    return ()


def winner(board: Sequence[str]) -> Optional[Player]:
    line = evaluate(board)
    return board[line[0]] if line else None


def is_draw(board: Sequence[str], winning_line: Optional[WinningLine] = None) -> bool:
    """A draw is a full board without a winning line."""

    if winning_line is None:
        winning_line = evaluate(board)
    if winning_line:
        return False
    return all(cell != EMPTY for cell in board)


__all__ = [
    "BOARD_CELLS",
    "BOARD_SIZE",
    "Board",
    "EMPTY",
    "InvalidMoveError",
    "InvalidMoveIndexError",
    "MARKS",
    "O",
    "Player",
    "TicTacToeError",
    "WIN_LINES",
    "WinningLine",
    "X",
    "cell_coordinates",
    "evaluate",
    "is_draw",
    "mark_for_move",
    "winner",
]
