from __future__ import annotations

from conftest import fill_rows
from tetris_arcade.game import Board, Cell
from tetris_arcade.game.grid import GARBAGE_COLOR


def test_board_defaults():
    board = Board()
    assert board.sealed.shape == (18, 10)
    assert board.filled_cells == 0
    assert board.is_occupiable(0, 0)
    assert not board.is_occupiable(-1, 0)
    assert not board.is_occupiable(10, 0)
    assert not board.is_occupiable(0, 18)


def test_seal_marks_positions():
    board = Board()
    board.seal([Cell(3, 4), Cell(4, 4)])
    assert not board.is_occupiable(3, 4)
    assert board.row_sum(4) == 2
    assert len(board.cells) == 2


def test_clear_single_row_moves_cells_above_down():
    board = Board()
    fill_rows(board, [10])
    board.seal([Cell(2, 9), Cell(5, 3), Cell(7, 12)])

    assert board.clear_full_rows() == 1
    assert board.filled_cells == 3
    positions = {c.position for c in board.cells}
    assert positions == {(2, 10), (5, 4), (7, 12)}
    assert board.sealed[10, 2] == 1
    assert board.sealed[4, 5] == 1
    assert board.sealed[12, 7] == 1
    assert board.sealed[9].sum() == 0


def test_clear_rows_separated_by_partial_row():
    board = Board()
    fill_rows(board, [15, 17])
    board.seal([Cell(2, 16), Cell(4, 14)])

    assert board.clear_full_rows() == 2
    assert {c.position for c in board.cells} == {(2, 17), (4, 16)}
    assert board.sealed[17, 2] == 1
    assert board.sealed[16, 4] == 1
    assert board.filled_cells == 2


def test_clear_adjacent_rows():
    board = Board()
    fill_rows(board, [14, 15, 16, 17])
    assert board.clear_full_rows() == 4
    assert board.filled_cells == 0
    assert board.cells == []


def test_clear_nothing_when_rows_have_gaps():
    board = Board()
    fill_rows(board, [16, 17], gaps=[0])
    assert board.clear_full_rows() == 0
    assert board.filled_cells == 18


def test_push_garbage_row_shifts_up_and_drops_top():
    board = Board()
    board.seal([Cell(0, 0), Cell(5, 17)])

    garbage = board.push_garbage_row(3)

    assert len(garbage) == 9
    assert all(c.garbage and c.color == GARBAGE_COLOR and c.y == 17 for c in garbage)
    assert board.row_sum(17) == 9
    assert board.sealed[17, 3] == 0
    assert board.sealed[16, 5] == 1
    assert board.sealed[0].sum() == 0
    assert len(board.cells) == 10
    assert (0, -1) not in {c.position for c in board.cells}


def test_top_rows_occupied():
    board = Board()
    assert not board.top_rows_occupied()
    board.seal([Cell(4, 2)])
    assert not board.top_rows_occupied()
    board.seal([Cell(4, 1)])
    assert board.top_rows_occupied()


def test_reset_and_clone():
    board = Board(width=6, height=8)
    fill_rows(board, [7], gaps=[1])
    state = board.clone_state()
    board.reset()
    assert state.sum() == 5
    assert board.filled_cells == 0
    assert board.cells == []
