import random

import numpy as np
import pytest

from connect4_engine.exceptions import InvalidState, OutOfBounds
from connect4_engine.game.board import BoardState
from connect4_engine.game.placement import drop, legal_columns
from connect4_engine.utils import ROWS, COLS, Cell

EMPTY_ROW = "0000000"
DRAW_STATE = "1212121" * 2 + "2121212" * 2 + "1212121" * 2


def state(*rows: str) -> str:
    """Build a serialized state from the bottom rows up; missing rows are empty."""
    return EMPTY_ROW * (ROWS - len(rows)) + "".join(rows)


def random_board(seed: int, moves: int) -> BoardState:
    rng = random.Random(seed)
    board = BoardState()
    player = 0
    for _ in range(moves):
        columns = legal_columns(board)
        if not columns:
            break
        drop(board, rng.choice(columns), player)
        player = 1 - player
    return board


def test_empty_board_serializes_to_all_zeros() -> None:
    board = BoardState()
    assert board.to_serialized_state() == "0" * 42
    assert not board.is_full()
    assert board.piece_count() == 0


def test_cell_at_reads_row_major_state() -> None:
    board = BoardState.from_serialized_state(state("1000002"))
    assert board.cell_at(0, 5) == Cell.PLAYER_A
    assert board.cell_at(6, 5) == Cell.PLAYER_B
    assert board.cell_at(3, 5) == Cell.EMPTY
    assert board.cell_at(0, 0) == Cell.EMPTY


@pytest.mark.parametrize("column,row", [(-1, 0), (7, 0), (0, -1), (0, 6), (10, 10)])
def test_cell_at_out_of_bounds(column, row) -> None:
    with pytest.raises(OutOfBounds):
        BoardState().cell_at(column, row)


def test_serialization_uses_player_symbols() -> None:
    board = BoardState()
    board.place(2, 5, 0)
    board.place(3, 5, 1)
    serialized = board.to_serialized_state()
    assert serialized[5 * 7 + 2] == "1"
    assert serialized[5 * 7 + 3] == "2"
    assert serialized.count("0") == 40


@pytest.mark.parametrize("seed", range(10))
def test_round_trip_reachable_boards(seed) -> None:
    board = random_board(seed, moves=seed * 4)
    serialized = board.to_serialized_state()
    restored = BoardState.from_serialized_state(serialized)
    assert restored == board
    assert restored.to_serialized_state() == serialized


def test_round_trip_full_board() -> None:
    board = BoardState.from_serialized_state(DRAW_STATE)
    assert board.is_full()
    assert board.to_serialized_state() == DRAW_STATE


@pytest.mark.parametrize("bad", [
    "",
    "0" * 41,
    "0" * 43,
    "0" * 41 + "3",
    "0" * 41 + "x",
    "0" * 41 + " ",
])
def test_malformed_state_rejected(bad) -> None:
    with pytest.raises(InvalidState):
        BoardState.from_serialized_state(bad)


def test_non_string_state_rejected() -> None:
    with pytest.raises(InvalidState):
        BoardState.from_serialized_state(["0"] * 42)


def test_floating_piece_rejected() -> None:
    # A piece in the row above the bottom with nothing beneath it
    with pytest.raises(InvalidState):
        BoardState.from_serialized_state(state("0100000", "0000000"))


def test_gap_below_stack_rejected() -> None:
    with pytest.raises(InvalidState):
        BoardState.from_serialized_state(state("2000000", "0000000", "1000000"))


def test_copy_is_independent() -> None:
    board = BoardState.from_serialized_state(state("1200000"))
    clone = board.copy()
    clone.place(5, 5, 0)
    assert board != clone
    assert board.cell_at(5, 5) == Cell.EMPTY


def test_column_height_and_get_state() -> None:
    board = BoardState.from_serialized_state(state("1000000", "1200000"))
    assert board.column_height(0) == 2
    assert board.column_height(1) == 1
    assert board.column_height(6) == 0
    grid = board.get_state()
    assert grid.shape == (ROWS, COLS)
    grid[:] = 0
    assert board.piece_count() == 3


def test_is_full_only_when_every_cell_occupied() -> None:
    almost = "0" + DRAW_STATE[1:]
    assert not BoardState.from_serialized_state(almost).is_full()
    assert BoardState.from_serialized_state(DRAW_STATE).is_full()


def test_render_marks_pieces() -> None:
    board = BoardState.from_serialized_state(state("1200000"))
    lines = board.render().splitlines()
    assert lines[ROWS] == "|X O          |"
    assert np.count_nonzero(board.grid) == 2
