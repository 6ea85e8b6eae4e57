"""Quantum Tic-Tac-Toe rules engine package."""

from .types import (
    ClassicalMark,
    EngineInvariantError,
    GameState,
    PendingCycle,
    Player,
    PlayerEmoji,
    QuantumMove,
    Winner,
)
from .cycle import get_cycle_edges, would_create_cycle
from .collapse import InvalidEndpointError, apply_collapse, collapse_cycle
from .scoring import WINNING_LINES, determine_winner, find_winning_lines
from .engine import (
    MoveResult,
    add_quantum_move,
    create_game_state,
    generate_legal_moves,
    get_spooky_marks_in_square,
    is_legal_move,
    is_stalemate,
    is_terminal,
    resolve_cycle,
)
from .agents import Agent, HeuristicAgent, LookaheadAgent, RandomAgent

__all__ = [
    "Agent",
    "ClassicalMark",
    "EngineInvariantError",
    "GameState",
    "HeuristicAgent",
    "InvalidEndpointError",
    "LookaheadAgent",
    "MoveResult",
    "PendingCycle",
    "Player",
    "PlayerEmoji",
    "QuantumMove",
    "RandomAgent",
    "WINNING_LINES",
    "Winner",
    "add_quantum_move",
    "apply_collapse",
    "collapse_cycle",
    "create_game_state",
    "determine_winner",
    "find_winning_lines",
    "generate_legal_moves",
    "get_cycle_edges",
    "get_spooky_marks_in_square",
    "is_legal_move",
    "is_stalemate",
    "is_terminal",
    "resolve_cycle",
    "would_create_cycle",
]
