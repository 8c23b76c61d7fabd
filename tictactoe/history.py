"""Move history with a cursor that supports replay and branching."""
from __future__ import annotations

import logging
import numbers
from typing import Iterator, List, Optional, Tuple

from .game import Board, InvalidMoveIndexError

logger = logging.getLogger(__name__)


class GameHistory:
    """Ordered board snapshots, index ``i`` being the board after ``i`` moves.

    The cursor ``current_move`` always points at a stored snapshot.  Applying a
    board while the cursor is behind the last snapshot discards the abandoned
    future first, so a new move after a jump starts a new branch.
    """

    def __init__(self) -> None:
        self._snapshots: List[Board] = [Board.empty()]
        self._current_move = 0

    def __len__(self) -> int:
        return len(self._snapshots)

    def __getitem__(self, move: int) -> Board:
        return self._snapshots[move]

    def __iter__(self) -> Iterator[Board]:
        return iter(self._snapshots)

    @property
    def current_move(self) -> int:
        return self._current_move

    @property
    def last_index(self) -> int:
        return len(self._snapshots) - 1

    @property
    def snapshots(self) -> Tuple[Board, ...]:
        return tuple(self._snapshots)

    def current(self) -> Board:
        return self._snapshots[self._current_move]

    def apply(self, next_board: Board) -> None:
        """Truncate after the cursor, append ``next_board`` and advance to it.

        No legality checks happen here; the controller validates moves.
        """

        kept = self._snapshots[: self._current_move + 1]
        dropped = len(self._snapshots) - len(kept)
        kept.append(next_board)
        self._snapshots = kept
        self._current_move = len(kept) - 1
        if dropped:
            logger.debug("Discarded %d future snapshot(s) when branching", dropped)

    def jump_to(self, move: int) -> None:
        if isinstance(move, bool) or not isinstance(move, numbers.Integral):
            raise InvalidMoveIndexError(move, len(self._snapshots))
        move = int(move)
        if not 0 <= move < len(self._snapshots):
            raise InvalidMoveIndexError(move, len(self._snapshots))
        self._current_move = move

    def changed_cell(self, move: int) -> Optional[int]:
        """Return the first cell that differs from the previous snapshot."""

        if move == 0:
            return None
        previous = self._snapshots[move - 1]
        board = self._snapshots[move]
        for index, (before, after) in enumerate(zip(previous, board)):
            if before != after:
                return index
        return None

    def reset(self) -> None:
        self._snapshots = [Board.empty()]
        self._current_move = 0
