"""
evaluation.py - Static evaluation strategies for the negamax search

An evaluator scores a position from the point of view of one player: positive
is good for that player, negative is good for the opponent. The search only
depends on the Evaluator protocol, so strategies can be swapped freely.

The default HeuristicEvaluator is designed to:
1. Treat a decided board as a win or loss outright
2. Prefer pieces in and near the center column
3. Only count threats as urgent when they are actually playable
4. Weight horizontal/diagonal lines over vertical ones
5. Reward forks (two playable threats at once)
"""

from typing import List, Protocol, Tuple

from connect4_engine.game.board import BoardState
from connect4_engine.game.placement import can_place_at
from connect4_engine.game.win import canonical_lines, find_winner
from connect4_engine.utils import COLS, WIN_SCORE, Cell


class Evaluator(Protocol):
    def evaluate(self, board: BoardState, player: int) -> float:
        ...


class NullEvaluator:
    """Scores every position as level. Search then only sees forced wins."""

    def evaluate(self, board: BoardState, player: int) -> float:
        return 0.0


def _line_weight(line, horizontal_weight: float, vertical_weight: float) -> float:
    (c0, _), (c1, _) = line[0], line[1]
    return vertical_weight if c0 == c1 else horizontal_weight


class HeuristicEvaluator:
    """
    Window-counting heuristic over the 69 four-cell lines.

    Each line holding pieces of only one player contributes according to how
    many of its cells that player owns. A line with three pieces and one empty
    cell is a threat; it is "playable" if the empty cell can be filled on the
    next drop.
    """

    def __init__(self,
                 center_weight: float = 0.5,
                 three_score: float = 5.0,
                 two_score: float = 3.0,
                 blocked_two_score: float = 1.0,
                 one_score: float = 0.5,
                 playable_threat_score: float = 50.0,
                 potential_threat_score: float = 8.0,
                 fork_bonus: float = 200.0,
                 horizontal_weight: float = 1.2,
                 vertical_weight: float = 0.8):
        self.center_weight = center_weight
        self.three_score = three_score
        self.two_score = two_score
        self.blocked_two_score = blocked_two_score
        self.one_score = one_score
        self.playable_threat_score = playable_threat_score
        self.potential_threat_score = potential_threat_score
        self.fork_bonus = fork_bonus
        self.horizontal_weight = horizontal_weight
        self.vertical_weight = vertical_weight
        self._lines = [(line, _line_weight(line, horizontal_weight, vertical_weight))
                       for line in canonical_lines()]

    def evaluate(self, board: BoardState, player: int) -> float:
        """
        Heuristic evaluation of a board position.

        Args:
            board: The board to evaluate
            player: Ordinal of the player whose perspective is scored

        Returns:
            A score, positive when the position favours player
        """
        winner = find_winner(board)
        if winner is not None:
            return WIN_SCORE if winner == player else -WIN_SCORE

        grid = board.grid
        mine = Cell.for_player(player).value
        theirs = Cell.for_player(1 - player).value

        # Column weights 0,1,2,3,2,1,0
        score = 0.0
        for col in range(COLS):
            col_weight = (COLS // 2) - abs(col - COLS // 2)
            column = grid[:, col]
            score += col_weight * self.center_weight * (int((column == mine).sum()) - int((column == theirs).sum()))

        my_threats: List[Tuple[int, int]] = []
        opp_threats: List[Tuple[int, int]] = []
        for line, weight in self._lines:
            values = [grid[row, col] for col, row in line]
            my_count = values.count(mine)
            opp_count = values.count(theirs)
            if my_count and opp_count:
                continue
            empties = [cell for cell, value in zip(line, values) if value == Cell.EMPTY.value]
            if my_count:
                score += self._score_run(board, my_count, empties, weight, my_threats)
            elif opp_count:
                score -= self._score_run(board, opp_count, empties, weight, opp_threats)

        score += self._score_threats(board, my_threats)
        score -= self._score_threats(board, opp_threats)
        return score

    def _score_run(self, board, count, empties, weight, threats) -> float:
        if count == 3:
            threats.append(empties[0])
            return self.three_score * weight
        if count == 2:
            if any(can_place_at(board, col, row) for col, row in empties):
                return self.two_score * weight
            return self.blocked_two_score * weight
        return self.one_score * weight

    def _score_threats(self, board, threats) -> float:
        unique = set(threats)
        playable = sum(1 for col, row in unique if can_place_at(board, col, row))
        score = playable * self.playable_threat_score
        score += (len(unique) - playable) * self.potential_threat_score
        if playable >= 2:
            score += self.fork_bonus
        return score
