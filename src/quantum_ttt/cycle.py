"""Cycle detection over the entanglement graph.

Nodes are the nine squares and edges are uncollapsed quantum moves. Adding an edge
between two squares that are already connected closes a cycle. Searches are
breadth-first and walk edges in input order, so identical input always yields
identical output.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .types import SQUARES, QuantumMove, Square


def build_adjacency(moves: Iterable[QuantumMove]) -> Dict[Square, List[QuantumMove]]:
    """Map every square to the uncollapsed moves touching it, in input order."""

    adj: Dict[Square, List[QuantumMove]] = {sq: [] for sq in SQUARES}
    for move in moves:
        if move.collapsed_to is not None:
            continue
        adj[move.a].append(move)
        adj[move.b].append(move)
    return adj


def would_create_cycle(a: Square, b: Square, uncollapsed_moves: Sequence[QuantumMove]) -> bool:
    """Whether an edge a-b would close a cycle, i.e. ``a`` already reaches ``b``."""

    if a == b:
        return True

    adj = build_adjacency(uncollapsed_moves)
    visited: Set[Square] = {a}
    queue: Deque[Square] = deque([a])
    while queue:
        current = queue.popleft()
        for move in adj[current]:
            nxt = move.other_end(current)
            if nxt in visited:
                continue
            if nxt == b:
                return True
            visited.add(nxt)
            queue.append(nxt)
    return False


def _find_path(start: Square, end: Square, moves: Sequence[QuantumMove]) -> List[QuantumMove]:
    if start == end:
        return []

    adj = build_adjacency(moves)
    parent: Dict[Square, Tuple[Square, Optional[QuantumMove]]] = {start: (start, None)}
    queue: Deque[Square] = deque([start])
    while queue:
        current = queue.popleft()
        for move in adj[current]:
            nxt = move.other_end(current)
            if nxt in parent:
                continue
            parent[nxt] = (current, move)
            if nxt == end:
                path: List[QuantumMove] = []
                node = end
                while node != start:
                    prev, edge = parent[node]
                    if edge is not None:
                        path.append(edge)
                    node = prev
                path.reverse()
                return path
            queue.append(nxt)
    return []


def get_cycle_edges(last_move: QuantumMove, uncollapsed_moves: Sequence[QuantumMove]) -> List[QuantumMove]:
    """Return the cycle closed by ``last_move``: the path from a to b, then ``last_move``.

    The path never uses ``last_move`` itself. An empty list means no cycle exists.
    """

    others = [m for m in uncollapsed_moves if m.id != last_move.id]
    path = _find_path(last_move.a, last_move.b, others)
    if not path:
        return []
    return path + [last_move]


def cycle_squares(edges: Sequence[QuantumMove]) -> List[Square]:
    """Squares visited by a cycle edge list, in first-seen order."""

    seen: List[Square] = []
    for move in edges:
        for sq in (move.a, move.b):
            if sq not in seen:
                seen.append(sq)
    return seen
