"""
exceptions.py - Error taxonomy for the Connect Four engine
"""


class Connect4Error(ValueError):
    """Base class for engine errors."""


class OutOfBounds(Connect4Error):
    """A coordinate lies outside the 7x6 board."""

    def __init__(self, column, row):
        super().__init__(f"Position (column={column}, row={row}) is off the board")
        self.column = column
        self.row = row


class InvalidState(Connect4Error):
    """A serialized state is malformed or breaks the gravity invariant."""


class IllegalMove(Connect4Error):
    """A drop targets a full or out-of-range column."""

    def __init__(self, column, reason: str):
        super().__init__(f"Illegal move in column {column}: {reason}")
        self.column = column
        self.reason = reason
