import builtins

import pytest

from connect4_engine.debug import debug, DebugLevel
from connect4_engine.interfaces.cli import build_parser, main

EMPTY_ROW = "0000000"
DRAW_STATE = "1212121" * 2 + "2121212" * 2 + "1212121" * 2


def state(*rows: str) -> str:
    return EMPTY_ROW * (6 - len(rows)) + "".join(rows)


def teardown_function(function):
    debug.configure(level=DebugLevel.WARNING)


def test_parser_defaults():
    args = build_parser().parse_args(["analyze", "--state", "0" * 42])
    assert args.command == "analyze"
    assert args.depth == 3
    assert args.debug_level == "warning"


def test_analyze_reports_winner(capsys):
    assert main(["analyze", "--state", state("1111000")]) == 0
    out = capsys.readouterr().out
    assert "Winner: player 0" in out


def test_analyze_reports_draw(capsys):
    assert main(["analyze", "--state", DRAW_STATE]) == 0
    assert "Draw" in capsys.readouterr().out


def test_analyze_suggests_blocking_move(capsys):
    assert main(["analyze", "--state", state("2200000", "1110000")]) == 0
    out = capsys.readouterr().out
    assert "Player 1 to move; AI suggests column 3" in out


def test_analyze_rejects_invalid_state(capsys):
    assert main(["analyze", "--state", "12"]) == 1
    assert "Invalid state" in capsys.readouterr().out


def test_play_quits_on_q(monkeypatch, capsys):
    monkeypatch.setattr(builtins, "input", lambda prompt="": "q")
    assert main(["play"]) == 0
    assert "Quitting game." in capsys.readouterr().out


def test_play_two_humans_until_win(monkeypatch, capsys):
    moves = iter(["0", "1", "0", "1", "0", "1", "0"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(moves))
    assert main(["play", "--ai", "none"]) == 0
    assert "Player X wins!" in capsys.readouterr().out


def test_benchmark_runs(capsys):
    assert main(["--depth", "1", "benchmark", "--iterations", "3"]) == 0
    out = capsys.readouterr().out
    assert "Win scan:" in out
    assert "Search:" in out


def test_missing_command_fails(capsys):
    assert main([]) == 1


@pytest.mark.parametrize("count", ["0", "-5"])
def test_benchmark_rejects_non_positive_iterations(count, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--depth", "1", "benchmark", "--iterations", count])
    assert excinfo.value.code == 2
    assert "must be a positive integer" in capsys.readouterr().err


def test_zero_depth_rejected(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--depth", "0", "analyze", "--state", "0" * 42])
    assert excinfo.value.code == 2
    assert "must be a positive integer" in capsys.readouterr().err
