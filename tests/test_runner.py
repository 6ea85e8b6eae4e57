import io

import pytest

from quantum_ttt.agents import HeuristicAgent, LookaheadAgent, RandomAgent
from quantum_ttt.config import preset_config
from quantum_ttt.runner import main, play_game, play_interactive, play_match

TIE_INPUT = [
    "0,1", "0,1", "1",
    "2,4", "2,4", "4",
    "3,5", "3,5", "5",
    "7,8", "8,6", "6,7", "7",
]


def test_play_game_finishes():
    out = io.StringIO()
    summary = play_game(RandomAgent(seed=1), HeuristicAgent(seed=2), emit_moves=True, show_board=True, out=out)
    assert summary.plies == len(summary.transcript)
    assert summary.plies >= 2
    assert summary.collapses >= 1
    text = out.getvalue()
    assert "X1:" in text
    assert "collapses" in text


def test_play_game_is_reproducible():
    first = play_game(RandomAgent(seed=5), LookaheadAgent(seed=6))
    second = play_game(RandomAgent(seed=5), LookaheadAgent(seed=6))
    assert first == second


def test_play_match_totals():
    out = io.StringIO()
    points = play_match(RandomAgent(seed=1), RandomAgent(seed=2), games=4, verbose=True, out=out)
    assert set(points) == {"first", "second", "draws"}
    assert points["first"] + points["second"] + points["draws"] <= 4
    assert out.getvalue().count("Game ") == 4
    with pytest.raises(ValueError):
        play_match(RandomAgent(), RandomAgent(), games=0)


def test_interactive_tie_game():
    stdin = io.StringIO("\n".join(["9,9", "tip"] + TIE_INPUT) + "\n")
    out = io.StringIO()
    summary = play_interactive(preset_config("hotseat"), seed=None, stdin=stdin, out=out)

    assert summary.winner is None
    assert summary.collapses == 4
    text = out.getvalue()
    assert "Invalid input" in text
    assert "Winner: None (draw)" in text


def test_interactive_against_bot_stops_at_eof():
    stdin = io.StringIO("4,8\n")
    out = io.StringIO()
    summary = play_interactive(preset_config("beginner"), seed=3, stdin=stdin, out=out)
    assert summary.plies >= 2
    assert "X move>" in out.getvalue()


def test_main_game_mode(capsys):
    main(["--mode", "game", "--x", "heuristic", "--o", "random", "--seed", "4"])
    captured = capsys.readouterr()
    assert "Game winner:" in captured.out


def test_main_rejects_bad_preset(capsys):
    with pytest.raises(SystemExit):
        main(["--mode", "play", "--preset", "nonsense"])
    assert "Invalid configuration" in capsys.readouterr().out
