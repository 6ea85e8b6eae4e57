from quantum_ttt import engine
from quantum_ttt.tips import SQUARE_NAMES, describe_move, get_player_tip
from quantum_ttt.types import Player


def test_tip_on_fresh_board():
    tip = get_player_tip(engine.create_game_state())
    assert tip is not None
    assert tip.move == (0, 1)
    assert not tip.creates_cycle
    assert tip.explanation
    assert "top-left and top-center" in tip.reasoning


def test_no_tip_when_not_players_turn():
    state = engine.add_quantum_move(engine.create_game_state(), 0, 1).state
    assert get_player_tip(state) is None
    assert get_player_tip(state, Player.O) is not None


def test_no_tip_while_cycle_pending():
    state = engine.create_game_state()
    state = engine.add_quantum_move(state, 0, 1).state
    state = engine.add_quantum_move(state, 0, 1).state
    assert state.pending_cycle is not None
    assert get_player_tip(state) is None


def test_tip_mentions_cycle_when_it_closes_one():
    state = engine.create_game_state()
    for pair in [(0, 3), (0, 3)]:
        state = engine.add_quantum_move(state, *pair).state
    state = engine.resolve_cycle(state, 3)
    for pair in [(1, 4), (1, 4)]:
        state = engine.add_quantum_move(state, *pair).state
    state = engine.resolve_cycle(state, 4)
    state = engine.add_quantum_move(state, 5, 8).state
    tip = get_player_tip(state, Player.O)
    assert tip is not None
    assert tip.move in engine.generate_legal_moves(state)
    if tip.creates_cycle:
        assert "quantum cycle" in tip.reasoning


def test_square_names():
    assert len(SQUARE_NAMES) == 9
    assert describe_move(4, 8) == "center and bottom-right"
