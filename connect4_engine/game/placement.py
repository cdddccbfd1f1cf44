"""
placement.py - Gravity-aware placement rule

A drop into a column lands on the lowest empty cell of that column. The same
rule drives real moves and the moves simulated during search, so boards built
through it always keep every column a contiguous bottom-anchored stack.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

import numpy as np

from connect4_engine.debug import debug
from connect4_engine.exceptions import IllegalMove
from connect4_engine.game.board import BoardState
from connect4_engine.utils import ROWS, COLS, COLUMN_ORDER, Cell, is_valid_position


def _is_column(column) -> bool:
    return isinstance(column, (int, np.integer)) and not isinstance(column, bool) and 0 <= column < COLS


def resolve_drop(board: BoardState, column: int) -> Optional[int]:
    """
    Find the row a piece dropped into a column would land on.

    Args:
        board: The board to inspect
        column: Target column

    Returns:
        The lowest empty row in the column, or None if the column is full
        or out of range
    """
    if not _is_column(column):
        debug.trace(f"Rejected drop: column {column!r} out of range", "placement")
        return None

    grid = board.grid
    for row in range(ROWS - 1, -1, -1):
        if grid[row, column] == Cell.EMPTY.value:
            return row

    debug.trace(f"Rejected drop: column {column} is full", "placement")
    return None


def is_legal_drop(board: BoardState, column: int) -> bool:
    return resolve_drop(board, column) is not None


def require_drop(board: BoardState, column: int) -> int:
    """Like resolve_drop, but raise IllegalMove instead of returning None."""
    row = resolve_drop(board, column)
    if row is None:
        reason = "column is full" if _is_column(column) else "column out of range"
        raise IllegalMove(column, reason)
    return row


def can_place_at(board: BoardState, column: int, row: int) -> bool:
    """
    Per-cell form of the rule: an empty cell is placeable if it is on the
    bottom row or the cell directly below it is occupied.
    """
    if not is_valid_position(column, row):
        return False
    grid = board.grid
    if grid[row, column] != Cell.EMPTY.value:
        return False
    return row == ROWS - 1 or grid[row + 1, column] != Cell.EMPTY.value


def normalize_click(board: BoardState, column: int, row: int) -> Optional[int]:
    """
    Turn a clicked cell into the column it addresses.

    Any on-board click selects its column; the piece then falls to the
    gravity-resolved row. Off-board clicks select nothing.
    """
    if not is_valid_position(column, row):
        return None
    return column


def legal_columns(board: BoardState, order: Iterable[int] = COLUMN_ORDER) -> List[int]:
    """Columns that still accept a piece, in the given order."""
    return [col for col in order if resolve_drop(board, col) is not None]


def drop(board: BoardState, column: int, player: int) -> Optional[int]:
    """
    Drop a piece for a player into a column.

    Returns:
        The row the piece landed on, or None if the drop was rejected
        (the board is left untouched)
    """
    row = resolve_drop(board, column)
    if row is None:
        return None
    board.place(column, row, player)
    debug.trace(f"Player {player} dropped into ({column}, {row})", "placement")
    return row


@contextmanager
def dropped(board: BoardState, column: int, player: int) -> Iterator[Optional[int]]:
    """
    Temporarily drop a piece, removing it again when the block exits.

    Yields the landing row, or None if the column cannot take a piece (in
    which case nothing is placed or removed). The piece is cleared on every
    exit path, including exceptions and early returns.
    """
    row = drop(board, column, player)
    try:
        yield row
    finally:
        if row is not None:
            board.clear(column, row)
