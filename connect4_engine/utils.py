"""
utils.py - Constants, enumerations and helpers shared by the engine

This module provides the fixed board geometry, the cell/owner enumeration with
its serialized alphabet, the game result enumeration and an ASCII renderer.
"""

from enum import Enum, auto
from typing import Optional

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a line to win
CELL_COUNT = ROWS * COLS

# Search defaults
SEARCH_DEPTH = 3  # Plies, counting the root move
COLUMN_ORDER = (3, 4, 2, 5, 1, 6, 0)  # Center first, then alternating outward
WIN_SCORE = 1_000_000

# Serialized state alphabet
EMPTY_SYMBOL = '0'
PLAYER_SYMBOLS = ('1', '2')  # Indexed by player ordinal


class Cell(Enum):
    """Enumeration representing the occupancy of a single board cell."""
    EMPTY = 0
    PLAYER_A = 1  # Player ordinal 0
    PLAYER_B = 2  # Player ordinal 1

    @classmethod
    def for_player(cls, player: int) -> 'Cell':
        """Get the cell value owned by a player ordinal (0 or 1)."""
        if player == 0:
            return cls.PLAYER_A
        if player == 1:
            return cls.PLAYER_B
        raise ValueError(f"Unknown player ordinal: {player!r}")

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Cell':
        """Decode one serialized-state symbol."""
        if symbol == EMPTY_SYMBOL:
            return cls.EMPTY
        if symbol in PLAYER_SYMBOLS:
            return cls.for_player(PLAYER_SYMBOLS.index(symbol))
        raise ValueError(f"Unknown cell symbol: {symbol!r}")

    @property
    def player(self) -> Optional[int]:
        """Owner ordinal, or None for an empty cell."""
        if self == Cell.EMPTY:
            return None
        return self.value - 1

    @property
    def symbol(self) -> str:
        """Serialized-state symbol for this cell."""
        if self == Cell.EMPTY:
            return EMPTY_SYMBOL
        return PLAYER_SYMBOLS[self.player]

    def other(self) -> 'Cell':
        """Get the opposing owner."""
        if self == Cell.PLAYER_A:
            return Cell.PLAYER_B
        elif self == Cell.PLAYER_B:
            return Cell.PLAYER_A
        return Cell.EMPTY

    def __str__(self):
        if self == Cell.EMPTY:
            return " "
        elif self == Cell.PLAYER_A:
            return "X"
        else:
            return "O"


def other_player(player: int) -> int:
    """Get the opponent's ordinal."""
    return 1 - player


def is_player(player) -> bool:
    """Check that a value is a valid player ordinal."""
    return isinstance(player, (int, np.integer)) and not isinstance(player, bool) and player in (0, 1)


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_A_WIN = auto()
    PLAYER_B_WIN = auto()
    DRAW = auto()

    @classmethod
    def win_for(cls, player: int) -> 'GameResult':
        return cls.PLAYER_A_WIN if player == 0 else cls.PLAYER_B_WIN

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


def is_valid_position(column: int, row: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        column: Column index
        row: Row index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= column < COLS and 0 <= row < ROWS


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a (ROWS, COLS) grid of cell values as ASCII art.

    Args:
        grid: The board grid

    Returns:
        ASCII representation of the board
    """
    result = []
    result.append("|" + "-" * (COLS * 2 - 1) + "|")

    for row in range(ROWS):
        cells = [str(Cell(int(grid[row, col]))) for col in range(COLS)]
        result.append("|" + " ".join(cells) + "|")

    result.append("|" + "-" * (COLS * 2 - 1) + "|")
    result.append("|" + " ".join(str(i) for i in range(COLS)) + "|")

    return "\n".join(result)
