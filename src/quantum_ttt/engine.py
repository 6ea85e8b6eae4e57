"""Game engine for Quantum Tic-Tac-Toe.

Rules:
- X moves first; each turn places a spooky mark on two distinct non-classical squares.
- Players alternate after every accepted move, including one that closes a cycle.
- A move that closes a cycle in the entanglement graph leaves the game pending until
  the other player picks which endpoint of that move becomes classical.
- The collapse cascades through every move it reaches; then lines are scored.
- The game ends on a winner or when all nine squares are classical.

Every function here is pure: states are frozen and a new one is returned for each
accepted action. Refused actions return the input state object unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from .collapse import apply_collapse, collapse_cycle
from .cycle import would_create_cycle
from .scoring import determine_winner
from .types import (
    EMPTY_CLASSICAL,
    SQUARES,
    ClassicalMark,
    EngineInvariantError,
    GameState,
    PendingCycle,
    Player,
    PlayerEmoji,
    QuantumMove,
    Square,
    is_valid_square,
)


@dataclass(frozen=True)
class MoveResult:
    state: GameState
    cycle_created: bool


def create_game_state(emojis: Optional[PlayerEmoji] = None) -> GameState:
    """Create a fresh game: empty board, X to move, move number 1."""

    return GameState(
        moves=(),
        classical=EMPTY_CLASSICAL,
        current_player=Player.X,
        move_number=1,
        game_over=False,
        emojis=emojis,
        emoji_selection_complete=False,
    )


def with_emojis(state: GameState, emojis: PlayerEmoji) -> GameState:
    """Attach presentation emojis; the rules ignore them."""

    return replace(state, emojis=emojis, emoji_selection_complete=True)


def is_square_available(square: Square, classical: Sequence[Optional[ClassicalMark]]) -> bool:
    return is_valid_square(square) and classical[square] is None


def is_legal_move(a: Square, b: Square, classical: Sequence[Optional[ClassicalMark]]) -> bool:
    """Whether a spooky mark on ``a`` and ``b`` is allowed. Never raises."""

    if a == b:
        return False
    return is_square_available(a, classical) and is_square_available(b, classical)


def get_uncollapsed_moves(moves: Sequence[QuantumMove]) -> List[QuantumMove]:
    return [m for m in moves if not m.is_collapsed]


def generate_legal_moves(state: GameState) -> List[Tuple[Square, Square]]:
    """All legal square pairs ``(a, b)`` with ``a < b`` for the player to move."""

    if state.game_over or state.pending_cycle is not None:
        return []
    return [
        (a, b)
        for a in SQUARES
        for b in SQUARES
        if a < b and is_legal_move(a, b, state.classical)
    ]


def add_quantum_move(state: GameState, a: Square, b: Square) -> MoveResult:
    """Place a spooky mark for the current player.

    Returns the input state with ``cycle_created=False`` when the game is over, a
    cycle is waiting to be resolved, or the squares are not a legal pair.
    """

    if state.game_over or state.pending_cycle is not None:
        return MoveResult(state=state, cycle_created=False)
    if not is_legal_move(a, b, state.classical):
        return MoveResult(state=state, cycle_created=False)

    mover = state.current_player
    new_move = QuantumMove.create(mover, state.move_number, a, b)
    cycle_created = would_create_cycle(a, b, state.uncollapsed_moves())

    next_state = replace(
        state,
        moves=state.moves + (new_move,),
        current_player=mover.opponent(),
        move_number=state.move_number + 1,
    )

    if cycle_created:
        next_state = replace(
            next_state,
            pending_cycle=PendingCycle(cycle_move_id=new_move.id, chooser=mover.opponent()),
        )
    else:
        # Only reachable from a pre-built board.
        winner = determine_winner(next_state.classical)
        if winner is not None:
            next_state = replace(next_state, winner=winner, game_over=True)

    return MoveResult(state=next_state, cycle_created=cycle_created)


def resolve_cycle(state: GameState, chosen_endpoint: Square) -> GameState:
    """Collapse the pending cycle by fixing the closing move on ``chosen_endpoint``.

    Returns the input state unchanged when nothing is pending, the pending move is
    missing, or ``chosen_endpoint`` is not one of its squares.
    """

    pending = state.pending_cycle
    if pending is None:
        return state
    last_move = state.find_move(pending.cycle_move_id)
    if last_move is None:
        return state
    if chosen_endpoint != last_move.a and chosen_endpoint != last_move.b:
        return state

    collapse_map = collapse_cycle(last_move, chosen_endpoint, get_uncollapsed_moves(state.moves))
    result = apply_collapse(state.moves, collapse_map)

    classical = list(state.classical)
    for square, mark in result.new_classical.items():
        if classical[square] is not None:
            raise EngineInvariantError(f"square {square} is already classical")
        classical[square] = mark

    winner = determine_winner(classical)
    board_full = all(mark is not None for mark in classical)
    return replace(
        state,
        moves=result.updated_moves,
        classical=tuple(classical),
        pending_cycle=None,
        winner=winner,
        game_over=winner is not None or board_full,
    )


def get_spooky_marks_in_square(square: Square, moves: Sequence[QuantumMove]) -> List[QuantumMove]:
    """Uncollapsed moves touching ``square``, in creation order."""

    return [m for m in moves if m.collapsed_to is None and m.touches(square)]


def is_stalemate(state: GameState) -> bool:
    """Whether play cannot continue although the game is not over.

    This happens when a collapse leaves exactly one square free: no pair of squares
    remains for a spooky mark.
    """

    if state.game_over or state.pending_cycle is not None:
        return False
    return not generate_legal_moves(state)


def is_terminal(state: GameState) -> bool:
    """Whether the state represents a finished game."""

    return state.game_over
