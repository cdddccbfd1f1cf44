"""
win.py - Four-in-a-row and draw detection

The board is covered by overlapping 4x4 windows. Each window is tested against
a fixed table of ten 4-cell patterns local to the tile (four rows, four
columns, two diagonals). Window rows are scanned bottom-to-top and window
columns left-to-right, so a win resting on the bottom of the board is reported
before one higher up; within a window, patterns are tried in table order.
"""

from typing import Dict, List, Optional, Tuple

from connect4_engine.debug import debug
from connect4_engine.game.board import BoardState
from connect4_engine.utils import ROWS, COLS, CONNECT_N, Cell

Coord = Tuple[int, int]  # (column, row)
Line = Tuple[Coord, Coord, Coord, Coord]

# Cell q of a 4x4 tile sits at (column = q % 4, row = q // 4)
WINDOW_PATTERNS: Tuple[Tuple[int, int, int, int], ...] = (
    (0, 1, 2, 3), (4, 5, 6, 7), (8, 9, 10, 11), (12, 13, 14, 15),  # rows
    (0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15),  # columns
    (0, 5, 10, 15), (12, 9, 6, 3),                                 # diagonals
)

# Window origins: every placement of a 4x4 tile on the 7x6 board
WINDOW_ROWS = tuple(range(ROWS - CONNECT_N, -1, -1))  # 2, 1, 0 (bottom first)
WINDOW_COLUMNS = tuple(range(COLS - CONNECT_N + 1))   # 0, 1, 2, 3


def _build_scan() -> Tuple[Line, ...]:
    scan = []
    for macro_row in WINDOW_ROWS:
        for macro_col in WINDOW_COLUMNS:
            for pattern in WINDOW_PATTERNS:
                scan.append(tuple((q % 4 + macro_col, q // 4 + macro_row) for q in pattern))
    return tuple(scan)


# Absolute lines in scan order; windows overlap, so lines repeat
_SCAN = _build_scan()


def canonical_lines() -> List[Line]:
    """
    Every distinct four-in-a-line placement on the board (69 of them).

    Returns:
        Lines as tuples of (column, row), horizontal, vertical, then both diagonals
    """
    lines = []
    for row in range(ROWS):
        for col in range(COLS - 3):
            lines.append(tuple((col + i, row) for i in range(4)))
    for row in range(ROWS - 3):
        for col in range(COLS):
            lines.append(tuple((col, row + i) for i in range(4)))
    for row in range(ROWS - 3):
        for col in range(COLS - 3):
            lines.append(tuple((col + i, row + i) for i in range(4)))
    for row in range(3, ROWS):
        for col in range(COLS - 3):
            lines.append(tuple((col + i, row - i) for i in range(4)))
    return lines


def _index_lines_by_cell() -> Dict[Coord, Tuple[Line, ...]]:
    by_cell: Dict[Coord, List[Line]] = {}
    for line in canonical_lines():
        for cell in line:
            by_cell.setdefault(cell, []).append(line)
    return {cell: tuple(lines) for cell, lines in by_cell.items()}


_LINES_THROUGH = _index_lines_by_cell()


def _line_owner(grid, line: Line) -> Optional[int]:
    (c0, r0), (c1, r1), (c2, r2), (c3, r3) = line
    value = grid[r0, c0]
    if value != Cell.EMPTY.value and value == grid[r1, c1] == grid[r2, c2] == grid[r3, c3]:
        return Cell(int(value)).player
    return None


def find_winning_line(board: BoardState) -> Optional[Tuple[int, List[Coord]]]:
    """
    Find the first completed line under the bottom-first scan order.

    Args:
        board: The board to scan

    Returns:
        (winner ordinal, list of (column, row) cells), or None if nobody has four
    """
    grid = board.grid
    for line in _SCAN:
        owner = _line_owner(grid, line)
        if owner is not None:
            debug.debug(f"Player {owner} has four in a line at {list(line)}", "win")
            return owner, list(line)
    return None


def find_winner(board: BoardState) -> Optional[int]:
    """
    Get the ordinal of the player with four in a line, or None.
    """
    result = find_winning_line(board)
    return result[0] if result else None


def is_draw(board: BoardState) -> bool:
    """A full board with no four in a line."""
    return board.is_full() and find_winner(board) is None


def wins_through(board: BoardState, column: int, row: int) -> bool:
    """
    Check whether the piece at (column, row) is part of a completed line.

    Only the lines through that cell are read, so this is the cheap test to
    run right after a drop.
    """
    grid = board.grid
    if grid[row, column] == Cell.EMPTY.value:
        return False
    return any(_line_owner(grid, line) is not None for line in _LINES_THROUGH[(column, row)])
