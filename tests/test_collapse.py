import pytest

from quantum_ttt.collapse import InvalidEndpointError, apply_collapse, collapse_cycle
from quantum_ttt.types import EngineInvariantError, Player, QuantumMove


def _moves(pairs):
    moves = []
    player = Player.X
    for idx, (a, b) in enumerate(pairs, start=1):
        moves.append(QuantumMove.create(player, idx, a, b))
        player = player.opponent()
    return moves


def test_three_cycle_collapses_completely():
    moves = _moves([(0, 1), (1, 2), (2, 0)])
    collapse_map = collapse_cycle(moves[-1], 0, moves)

    assert collapse_map == {"X3": 0, "X1": 1, "O2": 2}
    assert list(collapse_map)[0] == "X3"
    assert len(set(collapse_map.values())) == len(collapse_map)


def test_disjoint_component_is_untouched():
    moves = _moves([(0, 1), (6, 7), (1, 2), (2, 0)])
    collapse_map = collapse_cycle(moves[-1], 0, moves)

    assert "O2" not in collapse_map
    assert set(collapse_map) == {"X1", "X3", "O4"}


def test_branch_hanging_off_cycle_collapses_too():
    moves = _moves([(0, 1), (1, 3), (1, 2), (2, 0)])

    via_two = collapse_cycle(moves[-1], 2, moves)
    assert via_two == {"O4": 2, "X3": 1, "X1": 0, "O2": 3}

    via_zero = collapse_cycle(moves[-1], 0, moves)
    assert via_zero == {"O4": 0, "X1": 1, "O2": 3, "X3": 2}


def test_invalid_endpoint_raises():
    moves = _moves([(0, 1), (1, 2), (2, 0)])
    with pytest.raises(InvalidEndpointError):
        collapse_cycle(moves[-1], 1, moves)
    with pytest.raises(ValueError):
        collapse_cycle(moves[-1], 7, moves)


def test_two_moves_forced_onto_one_square_is_a_defect():
    # Three parallel edges between 0 and 1 hold two cycles; legal play never builds this.
    moves = _moves([(0, 1), (0, 1), (0, 1)])
    with pytest.raises(EngineInvariantError):
        collapse_cycle(moves[-1], 0, moves)


def test_apply_collapse_updates_moves_and_builds_marks():
    moves = _moves([(0, 1), (6, 7), (1, 2), (2, 0)])
    collapse_map = collapse_cycle(moves[-1], 0, moves)

    result = apply_collapse(moves, collapse_map)

    by_id = {m.id: m for m in result.updated_moves}
    assert by_id["O4"].collapsed_to == 0
    assert by_id["X1"].collapsed_to == 1
    assert by_id["X3"].collapsed_to == 2
    assert result.updated_moves[1] is moves[1]
    assert all(m.collapsed_to is None for m in moves)

    assert result.new_classical[0].player is Player.O
    assert result.new_classical[0].move_index == 4
    assert result.new_classical[1].player is Player.X
    assert result.new_classical[1].move_index == 1
    assert result.new_classical[2].move_index == 3
    assert set(result.new_classical) == {0, 1, 2}


def test_apply_collapse_rejects_double_placement():
    moves = _moves([(0, 1), (0, 2)])
    with pytest.raises(EngineInvariantError):
        apply_collapse(moves, {"X1": 0, "O2": 0})


def test_apply_collapse_rejects_unknown_move():
    moves = _moves([(0, 1)])
    with pytest.raises(EngineInvariantError):
        apply_collapse(moves, {"O9": 3})
