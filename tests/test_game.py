import itertools
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tictactoe.game import (
    EMPTY,
    WIN_LINES,
    Board,
    cell_coordinates,
    evaluate,
    is_draw,
    mark_for_move,
    winner,
)


def test_win_lines_follow_rows_columns_then_diagonals():
    assert WIN_LINES == (
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        (0, 4, 8),
        (2, 4, 6),
    )


@pytest.mark.parametrize("line", WIN_LINES)
def test_evaluate_detects_every_line(line):
    board = Board.empty()
    for index in line:
        board = board.place(index, "O")
    assert evaluate(board) == line
    assert winner(board) == "O"


def test_evaluate_empty_board_has_no_line():
    assert evaluate(Board.empty()) == ()
    assert winner(Board.empty()) is None


def test_evaluate_ignores_mixed_lines():
    board = Board.from_string("XXO.O.X..")
    assert evaluate(board) == ()


def test_evaluate_returns_earliest_line_when_several_complete():
    # Top row and left column both belong to X.
    board = Board.from_string("XXXXOOXOO")
    assert evaluate(board) == (0, 1, 2)

    # Middle column and diagonal down both complete.
    board = Board.from_string("XXOOXOOXX")
    assert evaluate(board) == (1, 4, 7)

    # Middle column and diagonal up both complete.
    board = Board.from_string("OXXOXOXXO")
    assert evaluate(board) == (1, 4, 7)


def test_evaluate_matches_brute_force_over_sampled_boards():
    symbols = ("X", "O", EMPTY)
    for cells in itertools.islice(itertools.product(symbols, repeat=9), 0, 19683, 37):
        expected = ()
        for line in WIN_LINES:
            values = {cells[i] for i in line}
            if len(values) == 1 and EMPTY not in values:
                expected = line
                break
        assert evaluate(Board(cells)) == expected


def test_is_draw_requires_full_board_without_winner():
    full_draw = Board.from_string("XOXXOOOXX")
    assert evaluate(full_draw) == ()
    assert is_draw(full_draw)
    assert is_draw(full_draw, ())

    assert not is_draw(Board.from_string("XOXXOO.XX"))
    full_win = Board.from_string("XXXOOXOXO")
    assert not is_draw(full_win)
    assert not is_draw(full_win, evaluate(full_win))


def test_place_returns_new_board_without_touching_original():
    board = Board.empty()
    after = board.place(4, "X")

    assert board[4] == EMPTY
    assert after[4] == "X"
    assert after is not board
    assert after.count("X") == 1
    assert board.empty_cells() == tuple(range(9))


def test_board_is_immutable():
    board = Board.empty()
    with pytest.raises(AttributeError):
        board.cells = ("X",) * 9
    with pytest.raises(TypeError):
        board.cells[0] = "X"


def test_place_rejects_bad_arguments():
    board = Board.empty()
    with pytest.raises(ValueError):
        board.place(9, "X")
    with pytest.raises(ValueError):
        board.place(0, "Z")


def test_board_validation():
    with pytest.raises(ValueError):
        Board(("X",) * 8)
    with pytest.raises(ValueError):
        Board(("Q",) * 9)
    with pytest.raises(ValueError):
        Board.from_string("XOX")
    with pytest.raises(ValueError):
        Board.from_string("XOX?OOOXX")


def test_from_string_and_serialize():
    board = Board.from_string("x.o-X O..")
    assert board.cells == ("X", EMPTY, "O", EMPTY, "X", EMPTY, "O", EMPTY, EMPTY)
    assert board.serialize() == "X.O.X.O.."
    assert board.render_ascii().splitlines()[0] == "X | . | O"


def test_legal_action_mask():
    board = Board.from_string("X...O....")
    mask = board.legal_action_mask()
    assert mask.dtype == np.bool_
    assert mask.tolist() == [False, True, True, True, False, True, True, True, True]

    won = Board.from_string("XXXOO....")
    assert not won.legal_action_mask().any()


def test_cell_coordinates_are_row_major():
    assert cell_coordinates(0) == (0, 0)
    assert cell_coordinates(5) == (1, 2)
    assert cell_coordinates(7) == (2, 1)
    with pytest.raises(ValueError):
        cell_coordinates(9)


def test_turn_parity():
    assert [mark_for_move(n) for n in range(4)] == ["X", "O", "X", "O"]
