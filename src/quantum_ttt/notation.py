"""Utilities for parsing user-entered moves and printing boards."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .engine import get_spooky_marks_in_square
from .tips import SQUARE_NAMES
from .types import SQUARES, GameState, Player, QuantumMove, Square

_MOVE_PATTERN = re.compile(
    r"^(?:(?P<player>[XO])(?P<index>\d+)\s*:\s*)?\(?\s*(?P<a>[A-Z0-9-]+)\s*[,\s]\s*(?P<b>[A-Z0-9-]+)\s*\)?$"
)


@dataclass
class ParsedMove:
    """Result of parsing a user-supplied move string."""

    a: Square
    b: Square
    player: Optional[Player] = None
    move_index: Optional[int] = None


def parse_square(token: str) -> Square:
    """Parse a square given as a digit 0..8 or a name like ``top-left``."""

    text = token.strip().lower()
    if text.isdigit():
        square = int(text)
        if square not in SQUARES:
            raise ValueError(f"Square must be between 0 and {len(SQUARES) - 1}")
        return square
    if text in SQUARE_NAMES:
        return SQUARE_NAMES.index(text)
    raise ValueError(f"Unknown square '{token}'")


def parse_move_text(raw: str) -> ParsedMove:
    """Parse a move string.

    Accepted examples (case-insensitive):
    - "0,4" or "0 4"
    - "(0,4)"
    - "X3:(0,4)"          # player + move index prefix
    - "top-left center"   # square names

    Raises:
        ValueError: if the text cannot be parsed or names the same square twice.
    """

    text = raw.strip().upper()
    if not text:
        raise ValueError("Move text is empty")

    match = _MOVE_PATTERN.match(text)
    if not match:
        raise ValueError("Could not parse move; use formats like '0,4' or 'X3:(0,4)'")

    a = parse_square(match.group("a"))
    b = parse_square(match.group("b"))
    if a == b:
        raise ValueError("A move must name two different squares")

    player = Player(match.group("player")) if match.group("player") else None
    index = match.group("index")
    move_index = int(index) if index is not None else None
    if move_index is not None and move_index < 1:
        raise ValueError("Move index must be positive")
    return ParsedMove(a=a, b=b, player=player, move_index=move_index)


def format_move(move: QuantumMove) -> str:
    text = f"{move.id}:({move.a},{move.b})"
    if move.collapsed_to is not None:
        text += f"->{move.collapsed_to}"
    return text


def _cell_text(state: GameState, square: Square) -> str:
    mark = state.classical[square]
    if mark is not None:
        return f"[{mark.player.value}{mark.move_index}]"
    spooky = get_spooky_marks_in_square(square, state.moves)
    if not spooky:
        return "."
    return " ".join(m.id for m in spooky)


def format_board(state: GameState) -> str:
    """Render the board: classical marks in brackets, spooky marks by id."""

    cells = [_cell_text(state, sq) for sq in SQUARES]
    width = max(len(cell) for cell in cells)
    lines: List[str] = []
    for row in range(3):
        parts = [cells[row * 3 + col].center(width) for col in range(3)]
        lines.append(" | ".join(parts))
    return "\n".join(lines)
