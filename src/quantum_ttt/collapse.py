"""Collapse resolution for a cycle closed by the latest move.

Fixing one endpoint of the closing move makes that square classical. Every other
uncollapsed move touching a classical square is then forced onto its opposite
endpoint, which becomes classical in turn, until nothing changes. Moves outside
the reach of that cascade stay quantum.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, replace
from typing import Deque, Dict, Mapping, Sequence, Set, Tuple

from .cycle import build_adjacency
from .types import ClassicalMark, EngineInvariantError, QuantumMove, Square


class InvalidEndpointError(ValueError):
    """Raised when the chosen collapse endpoint is not on the closing move."""


CollapseMap = Dict[str, Square]


@dataclass(frozen=True)
class CollapseResult:
    updated_moves: Tuple[QuantumMove, ...]
    new_classical: Dict[Square, ClassicalMark]


def collapse_cycle(
    last_move: QuantumMove,
    chosen_endpoint: Square,
    uncollapsed_moves: Sequence[QuantumMove],
) -> CollapseMap:
    """Return ``{move_id: square}`` for every move forced by collapsing ``last_move``.

    The seed entry (``last_move`` -> ``chosen_endpoint``) comes first; the rest follow
    in propagation order.

    Raises:
        InvalidEndpointError: if ``chosen_endpoint`` is neither ``last_move.a`` nor ``last_move.b``.
        EngineInvariantError: if two moves would be forced onto the same square.
    """

    if chosen_endpoint != last_move.a and chosen_endpoint != last_move.b:
        raise InvalidEndpointError(
            f"chosen endpoint {chosen_endpoint} must be {last_move.a} or {last_move.b} for move {last_move.id}"
        )

    collapse_map: CollapseMap = {last_move.id: chosen_endpoint}
    adj = build_adjacency(uncollapsed_moves)
    classical_squares: Set[Square] = {chosen_endpoint}
    frontier: Deque[Square] = deque([chosen_endpoint])

    while frontier:
        square = frontier.popleft()
        for move in adj[square]:
            if move.id in collapse_map:
                continue
            target = move.other_end(square)
            if target in classical_squares:
                raise EngineInvariantError(
                    f"collapse would place move {move.id} on square {target}, which is already taken"
                )
            collapse_map[move.id] = target
            classical_squares.add(target)
            frontier.append(target)

    return collapse_map


def apply_collapse(moves: Sequence[QuantumMove], collapse_map: Mapping[str, Square]) -> CollapseResult:
    """Mark collapsed moves and build the classical marks they produce.

    Moves absent from ``collapse_map`` are returned as the same objects. The caller's
    classical board is not touched.
    """

    by_id = {move.id: move for move in moves}
    updated = tuple(
        replace(move, collapsed_to=collapse_map[move.id]) if move.id in collapse_map else move
        for move in moves
    )

    new_classical: Dict[Square, ClassicalMark] = {}
    for move_id, square in collapse_map.items():
        move = by_id.get(move_id)
        if move is None:
            raise EngineInvariantError(f"collapse refers to unknown move {move_id}")
        if square in new_classical:
            raise EngineInvariantError(f"square {square} would receive two classical marks")
        new_classical[square] = ClassicalMark(player=move.player, move_index=move.move_index)

    return CollapseResult(updated_moves=updated, new_classical=new_classical)
