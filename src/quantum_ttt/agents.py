"""Agents for playing Quantum Tic-Tac-Toe."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Tuple

from . import engine
from .scoring import count_potential_lines, determine_winner
from .types import GameState, Player, Square

MovePair = Tuple[Square, Square]


def _pending_move(state: GameState):
    if state.pending_cycle is None:
        raise ValueError("No cycle is pending")
    move = state.find_move(state.pending_cycle.cycle_move_id)
    if move is None:
        raise ValueError("Pending cycle refers to an unknown move")
    return move


class Agent:
    """Base class for agents."""

    def choose_move(self, state: GameState) -> MovePair:  # noqa: D401
        """Return the two squares for the next spooky mark."""

        raise NotImplementedError

    def choose_collapse(self, state: GameState) -> Square:
        """Return the endpoint of the pending cycle move to collapse onto."""

        raise NotImplementedError

    def _order_moves(self, state: GameState, moves: List[MovePair]) -> List[MovePair]:
        """Return moves without reordering; subclasses may override."""

        return list(moves)


class RandomAgent(Agent):
    """Agent that selects a random legal move with reproducible seeding."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def choose_move(self, state: GameState) -> MovePair:
        moves = engine.generate_legal_moves(state)
        if not moves:
            raise ValueError("No legal moves available")
        moves = self._order_moves(state, moves)
        return self._rng.choice(moves)

    def choose_collapse(self, state: GameState) -> Square:
        move = _pending_move(state)
        return self._rng.choice([move.a, move.b])


class HeuristicAgent(Agent):
    """Agent using a lightweight heuristic.

    Moves: avoid closing a cycle when possible, RNG picks among the rest.
    Collapses: simulate both endpoints and keep the one better for the chooser;
    endpoint ``b`` wins ties.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def choose_move(self, state: GameState) -> MovePair:
        moves = self._order_moves(state, engine.generate_legal_moves(state))
        if not moves:
            raise ValueError("No legal moves available")

        quiet = [mv for mv in moves if not engine.add_quantum_move(state, *mv).cycle_created]
        return self._rng.choice(quiet or moves)

    def _score_collapse(self, state: GameState, endpoint: Square, player: Player) -> float:
        resolved = engine.resolve_cycle(state, endpoint)
        winner = determine_winner(resolved.classical)
        if winner is None:
            return count_potential_lines(resolved.classical, player) - count_potential_lines(
                resolved.classical, player.opponent()
            )
        if winner.player is player:
            return 100 + winner.score * 10
        return -100 - winner.score * 10

    def choose_collapse(self, state: GameState) -> Square:
        move = _pending_move(state)
        chooser = state.pending_cycle.chooser
        score_a = self._score_collapse(state, move.a, chooser)
        score_b = self._score_collapse(state, move.b, chooser)
        return move.b if score_b >= score_a else move.a


def evaluate_state(state: GameState, player: Player) -> float:
    """Static evaluation from ``player``'s point of view; higher is better."""

    winner = determine_winner(state.classical)
    if winner is not None:
        if winner.player is player:
            return 1000 + winner.score * 100
        return -1000 - winner.score * 100
    own = count_potential_lines(state.classical, player, weighted=True)
    theirs = count_potential_lines(state.classical, player.opponent(), weighted=True)
    return own * 10 - theirs * 15


def evaluate_move(state: GameState, move: MovePair, player: Player) -> float:
    """Score ``move`` for ``player``, assuming the opponent collapses any cycle against them."""

    result = engine.add_quantum_move(state, *move)
    if result.cycle_created and result.state.pending_cycle is not None:
        return min(evaluate_state(engine.resolve_cycle(result.state, end), player) for end in move)
    return evaluate_state(result.state, player)


class LookaheadAgent(Agent):
    """One-ply search over every legal move, with a pessimistic view of collapses."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def choose_move(self, state: GameState) -> MovePair:
        moves = self._order_moves(state, engine.generate_legal_moves(state))
        if not moves:
            raise ValueError("No legal moves available")

        player = state.current_player
        scored = [(evaluate_move(state, mv, player), mv) for mv in moves]
        best_score = max(score for score, _ in scored)
        best_moves = [mv for score, mv in scored if score == best_score]
        return self._rng.choice(best_moves)

    def choose_collapse(self, state: GameState) -> Square:
        move = _pending_move(state)
        chooser = state.pending_cycle.chooser
        score_a = evaluate_state(engine.resolve_cycle(state, move.a), chooser)
        score_b = evaluate_state(engine.resolve_cycle(state, move.b), chooser)
        if score_a == score_b:
            return self._rng.choice([move.a, move.b])
        return move.a if score_a > score_b else move.b


AGENT_NAMES: Tuple[str, ...] = ("random", "heuristic", "lookahead")

DIFFICULTY_AGENTS: Dict[str, str] = {
    "beginner": "random",
    "medium": "heuristic",
    "advanced": "lookahead",
}


def build_agent(name: str, seed: Optional[int] = None) -> Agent:
    if name == "random":
        return RandomAgent(seed=seed)
    if name == "heuristic":
        return HeuristicAgent(seed=seed)
    if name == "lookahead":
        return LookaheadAgent(seed=seed)
    raise ValueError(f"Unknown agent '{name}'")
