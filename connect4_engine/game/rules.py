"""
rules.py - Game state management for Connect Four

This module provides ConnectFourGame, the boundary between the engine and
whatever drives turns (a CLI, a gymnasium environment, a host game engine).
It owns the live board, applies human and AI moves through the placement
rule, and reports the winner or draw after every move.
"""

from typing import Any, List, Optional, Protocol, Tuple

from connect4_engine.ai.negamax import NegamaxPlayer
from connect4_engine.debug import debug
from connect4_engine.game.board import BoardState
from connect4_engine.game.placement import drop, legal_columns, normalize_click
from connect4_engine.game.win import find_winner, find_winning_line, is_draw
from connect4_engine.utils import (CELL_COUNT, COLS, EMPTY_SYMBOL, GameResult, Cell,
                                   is_player, other_player)


class PlayerRegistry(Protocol):
    """Capability supplied by a host engine that owns player objects."""

    def player_for(self, ordinal: int) -> Any:
        ...


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    The game does not enforce whose turn it is; the caller passes the player
    ordinal with every move. current_player is kept as a hint for drivers
    that alternate turns.
    """

    def __init__(self, ai: Optional[NegamaxPlayer] = None,
                 players: Optional[PlayerRegistry] = None):
        """
        Initialize a new game.

        Args:
            ai: Search used by request_ai_move (a default NegamaxPlayer if None)
            players: Optional registry mapping ordinals to host player objects
        """
        debug.debug("Initializing ConnectFourGame", "game")
        self.ai = ai if ai is not None else NegamaxPlayer()
        self.players = players
        self.reset()

    @staticmethod
    def setup_initial_state() -> str:
        """The serialized state of an empty board."""
        return EMPTY_SYMBOL * CELL_COUNT

    def reset(self) -> None:
        """Reset the game to the empty board."""
        debug.debug("Resetting game", "game")
        self.board = BoardState.from_serialized_state(self.setup_initial_state())
        self.moves_made: List[Tuple[int, int, int]] = []  # (column, row, player)
        self.current_player = 0
        self.game_result = GameResult.IN_PROGRESS

    def current_state(self) -> str:
        """Snapshot of the board as a serialized state."""
        return self.board.to_serialized_state()

    def load_state(self, state: str) -> None:
        """
        Restore the board from a serialized state.

        Move history is discarded unless the state equals the current one.

        Raises:
            InvalidState: If the state is malformed; the game is left unchanged
        """
        if state == self.current_state():
            return

        board = BoardState.from_serialized_state(state)
        self.board = board
        self.moves_made = []

        grid = board.grid
        count_a = int((grid == Cell.PLAYER_A.value).sum())
        count_b = int((grid == Cell.PLAYER_B.value).sum())
        self.current_player = 0 if count_a <= count_b else 1
        self._update_result()
        debug.info(f"Loaded state {state} ({self.game_result.name})", "game")

    def attempt_human_move(self, column: int, player: int) -> bool:
        """
        Drop a piece for a player into a column.

        Args:
            column: Target column
            player: Ordinal of the moving player

        Returns:
            True if the piece was placed, False (board untouched) if the
            column is full or out of range, the player is unknown, or the
            game is already over
        """
        if not is_player(player):
            debug.debug(f"Refused move: unknown player {player!r}", "game")
            return False

        if self.game_result.is_game_over():
            debug.debug(f"Refused move: game is over ({self.game_result.name})", "game")
            return False

        row = drop(self.board, column, player)
        if row is None:
            debug.debug(f"Refused move: player {player} cannot drop into column {column!r}", "game")
            return False

        self.moves_made.append((int(column), row, int(player)))
        self.current_player = other_player(int(player))
        self._update_result()
        debug.debug(f"Player {player} played ({column}, {row}); result {self.game_result.name}", "game")
        return True

    def attempt_human_click(self, column: int, row: int, player: int) -> bool:
        """Apply a click on any cell as a drop into that cell's column."""
        target = normalize_click(self.board, column, row)
        if target is None:
            debug.debug(f"Refused click at ({column}, {row}): off the board", "game")
            return False
        return self.attempt_human_move(target, player)

    def request_ai_move(self, player: int) -> bool:
        """
        Let the search pick a column for a player and apply it.

        Returns:
            True if a move was made, False if no legal move exists (or the
            game is already over)
        """
        if not is_player(player) or self.game_result.is_game_over():
            return False

        column = self.ai.choose_move(self.board, int(player))
        if column is None:
            debug.info(f"No legal move for player {player}", "game")
            return False

        debug.info(f"AI (player {player}) plays column {column}", "game")
        return self.attempt_human_move(column, player)

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False if there is no move history
        """
        if not self.moves_made:
            debug.debug("No moves to undo", "game")
            return False

        column, row, player = self.moves_made.pop()
        self.board.clear(column, row)
        self.current_player = player
        self._update_result()
        debug.debug(f"Undid move at ({column}, {row})", "game")
        return True

    def _update_result(self) -> None:
        line = find_winning_line(self.board)
        if line is not None:
            self.game_result = GameResult.win_for(line[0])
        elif self.board.is_full():
            self.game_result = GameResult.DRAW
        else:
            self.game_result = GameResult.IN_PROGRESS

    def winner_if_any(self) -> Optional[int]:
        return find_winner(self.board)

    def winner_player(self) -> Any:
        """The host's player object for the winner, when a registry is attached."""
        winner = self.winner_if_any()
        if winner is None or self.players is None:
            return None
        return self.players.player_for(winner)

    def winning_line(self) -> List[Tuple[int, int]]:
        line = find_winning_line(self.board)
        return line[1] if line else []

    def is_draw(self) -> bool:
        return is_draw(self.board)

    def is_game_over(self) -> bool:
        return self.game_result.is_game_over()

    def get_valid_moves(self) -> List[int]:
        """Legal columns in ascending order (empty once the game is over)."""
        if self.is_game_over():
            return []
        return legal_columns(self.board, order=range(COLS))

    def render(self) -> str:
        return self.board.render()
