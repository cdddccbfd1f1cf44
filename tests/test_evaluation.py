import pytest

from connect4_engine.ai.evaluation import HeuristicEvaluator, NullEvaluator
from connect4_engine.game.board import BoardState
from connect4_engine.utils import ROWS, WIN_SCORE

EMPTY_ROW = "0000000"


def state(*rows: str) -> str:
    return EMPTY_ROW * (ROWS - len(rows)) + "".join(rows)


def test_null_evaluator_is_constant() -> None:
    board = BoardState.from_serialized_state(state("1110000"))
    assert NullEvaluator().evaluate(board, 0) == 0
    assert NullEvaluator().evaluate(board, 1) == 0


def test_empty_board_is_level() -> None:
    assert HeuristicEvaluator().evaluate(BoardState(), 0) == 0


def test_decided_board_scores_win_and_loss() -> None:
    board = BoardState.from_serialized_state(state("1111000"))
    evaluator = HeuristicEvaluator()
    assert evaluator.evaluate(board, 0) == WIN_SCORE
    assert evaluator.evaluate(board, 1) == -WIN_SCORE


@pytest.mark.parametrize("serialized", [
    state("0001000"),
    state("0002000", "0021100"),
    state("1000000", "1120000", "2212100"),
])
def test_scores_are_zero_sum(serialized) -> None:
    board = BoardState.from_serialized_state(serialized)
    evaluator = HeuristicEvaluator()
    assert evaluator.evaluate(board, 0) == pytest.approx(-evaluator.evaluate(board, 1))


def test_center_piece_beats_edge_piece() -> None:
    evaluator = HeuristicEvaluator()
    center = BoardState.from_serialized_state(state("0001000"))
    edge = BoardState.from_serialized_state(state("1000000"))
    assert evaluator.evaluate(center, 0) > evaluator.evaluate(edge, 0) > 0


def test_playable_threat_outweighs_buried_threat() -> None:
    evaluator = HeuristicEvaluator()
    # Three in the bottom row with the fourth cell open and playable
    open_three = BoardState.from_serialized_state(state("2200000", "1110000"))
    # Same three, but the completing cell is blocked by the opponent
    blocked = BoardState.from_serialized_state(state("2200000", "1112000"))
    assert evaluator.evaluate(open_three, 0) > evaluator.evaluate(blocked, 0)


def test_fork_bonus_applies_to_two_playable_threats() -> None:
    with_fork = HeuristicEvaluator()
    without_fork = HeuristicEvaluator(fork_bonus=0.0)
    # Player 0 holds columns 1-3 of the bottom row: both 0 and 4 complete it
    board = BoardState.from_serialized_state(state("0220000", "0111000"))
    assert with_fork.evaluate(board, 0) - without_fork.evaluate(board, 0) == pytest.approx(200.0)
