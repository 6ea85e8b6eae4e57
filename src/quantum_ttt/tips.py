"""Move suggestions with short plain-language explanations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from . import engine
from .agents import evaluate_move
from .types import GameState, Player, Square

SQUARE_NAMES: Tuple[str, ...] = (
    "top-left",
    "top-center",
    "top-right",
    "middle-left",
    "center",
    "middle-right",
    "bottom-left",
    "bottom-center",
    "bottom-right",
)

CENTER = 4


@dataclass(frozen=True)
class Tip:
    move: Tuple[Square, Square]
    score: float
    explanation: str
    reasoning: str
    creates_cycle: bool


def describe_move(a: Square, b: Square) -> str:
    return f"{SQUARE_NAMES[a]} and {SQUARE_NAMES[b]}"


def _explain(move: Tuple[Square, Square], score: float, creates_cycle: bool) -> Tuple[str, str]:
    desc = describe_move(*move)
    if score > 500:
        short = "This move gives you a strong advantage!"
        detailed = (
            f"Playing {desc} positions you for a win. It takes key squares and "
            "leaves your opponent few ways to stop you."
        )
    elif score > 100:
        if CENTER in move:
            short = "Controlling the center is key!"
            detailed = (
                f"Playing {desc} claims the center, which sits on four winning lines: "
                "both diagonals, the middle row and the middle column."
            )
        elif creates_cycle:
            short = "This creates a cycle, giving you control!"
            detailed = (
                f"Playing {desc} closes a quantum cycle, so your opponent must choose how it "
                "collapses. Both outcomes were checked and neither hurts you."
            )
        else:
            short = "This move strengthens your position!"
            detailed = f"Playing {desc} improves your position and keeps your options open."
    elif score > 0:
        short = "This is a reasonable move!"
        detailed = f"Playing {desc} is a decent option that does not put you at a disadvantage."
    else:
        short = "This move works, but be careful!"
        detailed = f"Playing {desc} is playable, though it may give your opponent chances."

    if creates_cycle:
        detailed += " Note: this move creates a quantum cycle and your opponent will choose how to collapse it."
    return short, detailed


def get_player_tip(state: GameState, player: Player = Player.X) -> Optional[Tip]:
    """Suggest the best-scoring move for ``player``.

    Returns ``None`` when the game is over, a cycle is pending, it is not
    ``player``'s turn, or there is no legal move. Ties keep the lowest square pair.
    """

    if state.game_over or state.pending_cycle is not None or state.current_player is not player:
        return None

    moves = engine.generate_legal_moves(state)
    if not moves:
        return None

    best_move = moves[0]
    best_score = evaluate_move(state, best_move, player)
    for mv in moves[1:]:
        score = evaluate_move(state, mv, player)
        if score > best_score:
            best_move, best_score = mv, score

    creates_cycle = engine.add_quantum_move(state, *best_move).cycle_created
    short, detailed = _explain(best_move, best_score, creates_cycle)
    return Tip(
        move=best_move,
        score=best_score,
        explanation=short,
        reasoning=detailed,
        creates_cycle=creates_cycle,
    )
