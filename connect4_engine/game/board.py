"""
board.py - Board representation for the Connect Four engine

This module implements the BoardState class which owns cell occupancy for the
fixed 7x6 board and converts it to and from the 42-character serialized state
used for persistence and for the search's private working copy.
"""

import numpy as np

from connect4_engine.debug import debug
from connect4_engine.exceptions import InvalidState, OutOfBounds
from connect4_engine.utils import (ROWS, COLS, CELL_COUNT, EMPTY_SYMBOL, PLAYER_SYMBOLS,
                                   Cell, is_valid_position, render_board_ascii)

_ALPHABET = frozenset((EMPTY_SYMBOL,) + PLAYER_SYMBOLS)


class BoardState:
    """
    Represents a Connect Four board.

    Cells are addressed as (column, row) with row 0 at the top and row 5 at
    the bottom. The grid itself is a numpy array indexed [row, column] holding
    Cell values.

    place() and clear() are raw mutations; they do not check gravity. Legal
    play goes through connect4_engine.game.placement, which only ever fills
    the lowest empty cell of a column.
    """

    def __init__(self):
        """Initialize an empty board."""
        self.grid = np.zeros((ROWS, COLS), dtype=np.int8)

    @classmethod
    def empty(cls) -> 'BoardState':
        return cls()

    def copy(self) -> 'BoardState':
        """
        Create a deep copy of the current board.

        Returns:
            A new BoardState with the same occupancy
        """
        debug.trace("Creating board copy", "board")
        new_board = BoardState()
        new_board.grid = self.grid.copy()
        return new_board

    def _check_position(self, column: int, row: int) -> None:
        if not is_valid_position(column, row):
            raise OutOfBounds(column, row)

    def cell_at(self, column: int, row: int) -> Cell:
        """
        Get the occupancy of a cell.

        Args:
            column: Column index in [0, 7)
            row: Row index in [0, 6), 0 is the top row

        Returns:
            The Cell at that position

        Raises:
            OutOfBounds: If either coordinate is off the board
        """
        self._check_position(column, row)
        return Cell(int(self.grid[row, column]))

    def place(self, column: int, row: int, player: int) -> None:
        """Mark a cell as owned by a player ordinal."""
        self._check_position(column, row)
        self.grid[row, column] = Cell.for_player(player).value

    def clear(self, column: int, row: int) -> None:
        """Reset a cell to empty."""
        self._check_position(column, row)
        self.grid[row, column] = Cell.EMPTY.value

    def column_height(self, column: int) -> int:
        """Number of pieces stacked in a column."""
        self._check_position(column, ROWS - 1)
        return int(np.count_nonzero(self.grid[:, column]))

    def piece_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_full(self) -> bool:
        """True iff every cell is occupied."""
        return bool(np.all(self.grid != Cell.EMPTY.value))

    def to_serialized_state(self) -> str:
        """
        Encode the board as 42 symbols in row-major order (index = row*7 + column).

        Returns:
            The serialized state string
        """
        return "".join(Cell(int(value)).symbol for value in self.grid.flat)

    @classmethod
    def from_serialized_state(cls, state: str) -> 'BoardState':
        """
        Rebuild a board from its serialized state.

        Args:
            state: 42 symbols drawn from '0' (empty), '1' (player 0), '2' (player 1)

        Returns:
            The decoded board

        Raises:
            InvalidState: If the string is malformed or a column has a floating piece
        """
        if not isinstance(state, str):
            raise InvalidState(f"Serialized state must be a string, got {type(state).__name__}")
        if len(state) != CELL_COUNT:
            raise InvalidState(f"Serialized state must have {CELL_COUNT} symbols, got {len(state)}")

        bad = sorted(set(state) - _ALPHABET)
        if bad:
            raise InvalidState(f"Serialized state contains unknown symbols: {''.join(bad)!r}")

        board = cls()
        board.grid = np.array([Cell.from_symbol(s).value for s in state],
                              dtype=np.int8).reshape(ROWS, COLS)

        # A piece may not sit above an empty cell
        for col in range(COLS):
            for row in range(ROWS - 1):
                if board.grid[row, col] != Cell.EMPTY.value and board.grid[row + 1, col] == Cell.EMPTY.value:
                    raise InvalidState(
                        f"Floating piece at (column={col}, row={row}): cell below is empty")

        debug.trace(f"Loaded board from state {state}", "board")
        return board

    def get_state(self) -> np.ndarray:
        """
        Get the current board grid as a numpy array.

        Returns:
            2D numpy array (ROWS, COLS) of cell values
        """
        return self.grid.copy()

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid)

    def __eq__(self, other):
        if not isinstance(other, BoardState):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None

    def __repr__(self) -> str:
        return f"BoardState({self.to_serialized_state()!r})"

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()
