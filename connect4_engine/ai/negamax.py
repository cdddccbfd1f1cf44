"""
negamax.py - Depth-limited negamax search for Connect Four

This module provides a NegamaxPlayer class that picks a column for the player
to move by searching a fixed number of plies ahead.

Every node returns its value from the point of view of the player to move and
the parent negates it, so a single code path serves both sides. The search
runs on a private copy of the board rebuilt from its serialized state; each
simulated drop is applied and undone around its recursive call.
"""

import math
from typing import Dict, Optional, Sequence

from connect4_engine.ai.evaluation import Evaluator, HeuristicEvaluator
from connect4_engine.debug import debug
from connect4_engine.exceptions import InvalidState
from connect4_engine.game.board import BoardState
from connect4_engine.game.placement import dropped
from connect4_engine.game.win import wins_through
from connect4_engine.utils import SEARCH_DEPTH, COLUMN_ORDER, WIN_SCORE, other_player


class NegamaxPlayer:
    """
    A Connect Four player that uses negamax up to a fixed search depth.

    Columns are tried center-out; the first column reaching the best score
    is kept, so ties always resolve the same way.
    """

    def __init__(self, depth: int = SEARCH_DEPTH,
                 evaluator: Optional[Evaluator] = None,
                 column_order: Sequence[int] = COLUMN_ORDER):
        """
        Initialize the negamax player.

        Args:
            depth: Plies searched, counting the root move (3 means at most 7**3 leaves)
            evaluator: Static evaluation used at the depth limit
            column_order: Order in which columns are tried
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.evaluator = evaluator if evaluator is not None else HeuristicEvaluator()
        self.column_order = tuple(column_order)
        self.nodes_evaluated = 0  # For performance tracking
        self.last_scores: Dict[int, float] = {}

    def choose_move(self, board: BoardState, player: int) -> Optional[int]:
        """
        Get the best column for a player.

        The board is not modified. Callers should check for a winner or draw
        first; this method does not short-circuit decided positions.

        Args:
            board: The current board
            player: Ordinal of the player to move

        Returns:
            The chosen column, or None if no column can take a piece
        """
        self.nodes_evaluated = 0
        self.last_scores = {}

        try:
            work = BoardState.from_serialized_state(board.to_serialized_state())
        except InvalidState as e:
            debug.error(f"Cannot search an inconsistent board: {e}", "search")
            return None

        debug.start_timer("negamax")
        best_score = -math.inf
        best_column = None

        for column in self.column_order:
            with dropped(work, column, player) as row:
                if row is None:
                    continue
                score = self._move_value(work, column, row, 1, player)

            self.last_scores[column] = score
            if score > best_score:
                best_score = score
                best_column = column

        debug.end_timer("negamax", "search")
        debug.debug(f"Player {player} scores {self.last_scores} -> column {best_column} "
                    f"({self.nodes_evaluated} nodes)", "search")
        return best_column

    def _move_value(self, board: BoardState, column: int, row: int, ply: int, mover: int) -> float:
        """Value, for the mover, of the piece just dropped at (column, row)."""
        if wins_through(board, column, row):
            return WIN_SCORE - ply  # Prefer faster wins
        return -self._negamax(board, ply, other_player(mover))

    def _negamax(self, board: BoardState, ply: int, to_move: int) -> float:
        """
        Negamax recursion.

        Args:
            board: Working board (mutated and restored in place)
            ply: Number of simulated moves already on the board
            to_move: Ordinal of the player to move

        Returns:
            The value of the position for to_move
        """
        self.nodes_evaluated += 1

        if ply >= self.depth:
            return self.evaluator.evaluate(board, to_move)

        if board.is_full():
            return 0.0

        best = -math.inf
        for column in self.column_order:
            with dropped(board, column, to_move) as row:
                if row is None:
                    continue
                best = max(best, self._move_value(board, column, row, ply + 1, to_move))

        return best
