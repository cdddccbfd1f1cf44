import pytest

from connect4_engine.ai.evaluation import HeuristicEvaluator, NullEvaluator
from connect4_engine.ai.negamax import NegamaxPlayer
from connect4_engine.game.board import BoardState
from connect4_engine.utils import ROWS, COLS, WIN_SCORE

EMPTY_ROW = "0000000"
DRAW_STATE = "1212121" * 2 + "2121212" * 2 + "1212121" * 2


def state(*rows: str) -> str:
    return EMPTY_ROW * (ROWS - len(rows)) + "".join(rows)


class CountingEvaluator:
    def __init__(self):
        self.calls = 0

    def evaluate(self, board, player):
        self.calls += 1
        return 0.0


def test_depth_three_explores_343_leaves() -> None:
    evaluator = CountingEvaluator()
    player = NegamaxPlayer(depth=3, evaluator=evaluator)
    player.choose_move(BoardState(), 0)
    assert evaluator.calls == COLS ** 3
    assert player.nodes_evaluated == COLS + COLS ** 2 + COLS ** 3


def test_level_scores_pick_center_first() -> None:
    player = NegamaxPlayer(evaluator=NullEvaluator())
    assert player.choose_move(BoardState(), 0) == 3


def test_ties_follow_column_order_when_center_full() -> None:
    column_3_full = "".join(
        "".join("2" if (c == 3 and r % 2 == 0) else "1" if c == 3 else "0" for c in range(COLS))
        for r in range(ROWS)
    )
    player = NegamaxPlayer(evaluator=NullEvaluator())
    assert player.choose_move(BoardState.from_serialized_state(column_3_full), 0) == 4


def test_custom_column_order() -> None:
    player = NegamaxPlayer(evaluator=NullEvaluator(), column_order=(6, 5, 4, 3, 2, 1, 0))
    assert player.choose_move(BoardState(), 1) == 6


def test_takes_immediate_win() -> None:
    board = BoardState.from_serialized_state(state("0002200", "0001110"))
    player = NegamaxPlayer()
    # Both 2 and 6 complete the line; 2 comes first in center-out order
    assert player.choose_move(board, 0) == 2
    assert player.last_scores[2] == WIN_SCORE - 1


def test_blocks_immediate_threat() -> None:
    board = BoardState.from_serialized_state(state("2200000", "1110000"))
    assert NegamaxPlayer().choose_move(board, 1) == 3


def test_blocks_even_with_level_evaluation() -> None:
    board = BoardState.from_serialized_state(state("2200000", "1110000"))
    assert NegamaxPlayer(evaluator=NullEvaluator()).choose_move(board, 1) == 3


def test_search_leaves_board_untouched() -> None:
    board = BoardState.from_serialized_state(state("0002000", "0121100"))
    before = board.to_serialized_state()
    NegamaxPlayer().choose_move(board, 0)
    assert board.to_serialized_state() == before


def test_repeated_calls_are_deterministic() -> None:
    board = BoardState.from_serialized_state(state("0012000", "0121100"))
    player = NegamaxPlayer(evaluator=HeuristicEvaluator())
    first = player.choose_move(board, 1)
    scores = dict(player.last_scores)
    assert all(player.choose_move(board, 1) == first for _ in range(3))
    assert player.last_scores == scores
    assert NegamaxPlayer().choose_move(board, 1) == first


def test_full_board_returns_none() -> None:
    board = BoardState.from_serialized_state(DRAW_STATE)
    player = NegamaxPlayer()
    assert player.choose_move(board, 0) is None
    assert player.last_scores == {}


def test_last_empty_cell_scores_as_draw() -> None:
    board = BoardState.from_serialized_state("0" + DRAW_STATE[1:])
    player = NegamaxPlayer()
    assert player.choose_move(board, 0) == 0
    assert player.last_scores == {0: 0}


def test_only_legal_columns_scored() -> None:
    column_0_full = "".join(("1" if r % 2 else "2") + "000000" for r in range(ROWS))
    player = NegamaxPlayer(depth=1)
    player.choose_move(BoardState.from_serialized_state(column_0_full), 0)
    assert sorted(player.last_scores) == [1, 2, 3, 4, 5, 6]


@pytest.mark.parametrize("depth", [0, -1])
def test_depth_must_be_positive(depth) -> None:
    with pytest.raises(ValueError):
        NegamaxPlayer(depth=depth)


def test_inconsistent_board_yields_no_move() -> None:
    board = BoardState()
    board.place(0, 0, 0)  # floating piece placed bypassing the placement rule
    assert NegamaxPlayer().choose_move(board, 1) is None
