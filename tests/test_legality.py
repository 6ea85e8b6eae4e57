import itertools

from quantum_ttt import engine
from quantum_ttt.types import EMPTY_CLASSICAL, SQUARES, ClassicalMark, Player


def _board_from_mask(mask: int):
    return tuple(
        ClassicalMark(player=Player.X, move_index=sq + 1) if mask & (1 << sq) else None for sq in SQUARES
    )


def test_legal_iff_distinct_and_both_free():
    # Every subset of classical squares, every pair of squares.
    for mask in range(0, 1 << len(SQUARES), 7):
        classical = _board_from_mask(mask)
        for a, b in itertools.product(SQUARES, SQUARES):
            expected = a != b and classical[a] is None and classical[b] is None
            assert engine.is_legal_move(a, b, classical) == expected


def test_same_square_is_illegal():
    assert not engine.is_legal_move(4, 4, EMPTY_CLASSICAL)


def test_out_of_range_squares_are_illegal_not_errors():
    assert not engine.is_legal_move(-1, 3, EMPTY_CLASSICAL)
    assert not engine.is_legal_move(0, 9, EMPTY_CLASSICAL)


def test_quantum_marks_do_not_block_a_square():
    state = engine.create_game_state()
    state = engine.add_quantum_move(state, 0, 1).state
    state = engine.add_quantum_move(state, 0, 2).state
    assert engine.is_legal_move(0, 8, state.classical)
    assert len(engine.get_spooky_marks_in_square(0, state.moves)) == 2


def test_generate_legal_moves_counts_pairs():
    state = engine.create_game_state()
    moves = engine.generate_legal_moves(state)
    assert len(moves) == 36
    assert moves[0] == (0, 1)
    assert all(a < b for a, b in moves)
