"""Game controller turning view intents into history updates.

The controller is the only object that writes to :class:`GameHistory`.  Views
send it intents (a cell was clicked, jump to a move, toggle the move order)
and read back an immutable :class:`GameSnapshot`.  Winner and draw are always
derived from the current board instead of being stored.
"""
from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

import numpy as np

from .game import (
    BOARD_CELLS,
    Board,
    InvalidMoveError,
    InvalidMoveIndexError,
    Player,
    WinningLine,
    cell_coordinates,
    evaluate,
    is_draw,
    mark_for_move,
    winner as find_winner,
)
from .history import GameHistory

logger = logging.getLogger(__name__)


class SortOrder(Enum):
    """Display order of the move list."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    def toggled(self) -> "SortOrder":
        if self is SortOrder.ASCENDING:
            return SortOrder.DESCENDING
        return SortOrder.ASCENDING

    @classmethod
    def parse(cls, value: str) -> "SortOrder":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"sort order must be 'ascending' or 'descending', got {value!r}"
            ) from None


@dataclass(frozen=True)
class MoveDescription:
    """One entry of the move list shown next to the board."""

    move: int
    label: str
    is_current: bool
    mark: Optional[Player] = None
    cell: Optional[int] = None
    row: Optional[int] = None
    column: Optional[int] = None


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a view needs to render one frame."""

    board: Board
    current_move: int
    history_length: int
    next_player: Player
    winning_line: WinningLine
    status: str
    moves: Tuple[MoveDescription, ...]
    sort_order: SortOrder
    sort_label: str

    @property
    def is_over(self) -> bool:
        return bool(self.winning_line) or self.board.is_full


Listener = Callable[[GameSnapshot], None]


class GameController:
    def __init__(self, sort_order: SortOrder = SortOrder.ASCENDING) -> None:
        self._history = GameHistory()
        self._sort_order = sort_order
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Observers
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every accepted intent.

        Returns a function that removes the listener again.
        """

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                # State is already committed; keep notifying the rest.
                logger.exception("Listener %r failed", listener)

    # ------------------------------------------------------------------
    # Intents
    def play(self, index: int) -> Board:
        """Place the next mark at ``index`` or raise :class:`InvalidMoveError`."""

        if isinstance(index, bool) or not isinstance(index, numbers.Integral):
            raise InvalidMoveError(index, "cell index must be an integer")
        index = int(index)
        if not 0 <= index < BOARD_CELLS:
            raise InvalidMoveError(index, "cell index must be in range 0..8")
        board = self._history.current()
        if not board.is_empty_cell(index):
            raise InvalidMoveError(index, f"cell is already taken by {board[index]}")
        if evaluate(board):
            raise InvalidMoveError(index, "the game has already been won")

        player = self.next_player
        next_board = board.place(index, player)
        self._history.apply(next_board)
        logger.info("Move %d: %s plays cell %d", self.current_move, player, index)
        self._notify()
        return next_board

    def handle_cell_click(self, index: int) -> bool:
        """Play ``index`` if legal; illegal clicks are ignored."""

        try:
            self.play(index)
        except InvalidMoveError as exc:
            logger.debug("Ignored click: %s", exc)
            return False
        return True

    def handle_jump(self, move: int) -> bool:
        try:
            self._history.jump_to(move)
        except InvalidMoveIndexError as exc:
            logger.debug("Ignored jump: %s", exc)
            return False
        logger.info("Jumped to move %d", self.current_move)
        self._notify()
        return True

    def toggle_sort(self) -> SortOrder:
        self._sort_order = self._sort_order.toggled()
        logger.info("Move list sorted %s", self._sort_order.value)
        self._notify()
        return self._sort_order

    def reset(self) -> None:
        self._history.reset()
        logger.info("New game started")
        self._notify()

    # ------------------------------------------------------------------
    # Projections
    @property
    def board(self) -> Board:
        return self._history.current()

    @property
    def current_move(self) -> int:
        return self._history.current_move

    @property
    def history_length(self) -> int:
        return len(self._history)

    @property
    def snapshots(self) -> Tuple[Board, ...]:
        return self._history.snapshots

    @property
    def next_player(self) -> Player:
        return mark_for_move(self._history.current_move)

    @property
    def winning_line(self) -> WinningLine:
        return evaluate(self.board)

    @property
    def winner(self) -> Optional[Player]:
        return find_winner(self.board)

    @property
    def is_draw(self) -> bool:
        return is_draw(self.board)

    @property
    def is_over(self) -> bool:
        return bool(self.winning_line) or self.board.is_full

    @property
    def sort_order(self) -> SortOrder:
        return self._sort_order

    @property
    def sort_label(self) -> str:
        # Names the order the button switches to.
        return f"Sort moves {self._sort_order.toggled().value}"

    def legal_action_mask(self) -> np.ndarray:
        return self.board.legal_action_mask()

    def status(self) -> str:
        board = self.board
        line = evaluate(board)
        if line:
            return f"winner is {board[line[0]]}"
        if is_draw(board, line):
            return "draw"
        return f"next player is {self.next_player}"

    def move_descriptions(self) -> Tuple[MoveDescription, ...]:
        descriptions: List[MoveDescription] = []
        for move in range(len(self._history)):
            is_current = move == self.current_move
            if move == 0:
                label = "You are at game start" if is_current else "Go to game start"
                descriptions.append(MoveDescription(move=0, label=label, is_current=is_current))
                continue

            cell = self._history.changed_cell(move)
            if cell is None:
                suffix = ""
                mark = row = column = None
            else:
                mark = self._history[move][cell]
                row, column = cell_coordinates(cell)
                suffix = f" ({mark} to ({row + 1}, {column + 1}))"
            if is_current:
                label = f"You are at move #{move}{suffix}"
            else:
                label = f"Go to move #{move}{suffix}"
            descriptions.append(
                MoveDescription(
                    move=move,
                    label=label,
                    is_current=is_current,
                    mark=mark,
                    cell=cell,
                    row=row,
                    column=column,
                )
            )

        if self._sort_order is SortOrder.DESCENDING:
            descriptions.reverse()
        return tuple(descriptions)

    def snapshot(self) -> GameSnapshot:
        board = self.board
        return GameSnapshot(
            board=board,
            current_move=self.current_move,
            history_length=self.history_length,
            next_player=self.next_player,
            winning_line=evaluate(board),
            status=self.status(),
            moves=self.move_descriptions(),
            sort_order=self._sort_order,
            sort_label=self.sort_label,
        )


__all__ = [
    "GameController",
    "GameSnapshot",
    "Listener",
    "MoveDescription",
    "SortOrder",
]
