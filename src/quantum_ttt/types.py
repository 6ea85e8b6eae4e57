"""Core data structures for Quantum Tic-Tac-Toe.

Rule reminders:
- Board is 3x3; squares are numbered 0..8 row-major (row = sq // 3, col = sq % 3).
- Every turn places one spooky mark spanning two distinct squares.
- Uncollapsed moves are the edges of the entanglement graph; a cycle forces a collapse.
- A classical mark is permanent once placed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


Square = int

BOARD_SIDE = 3
SQUARES: Tuple[Square, ...] = tuple(range(BOARD_SIDE * BOARD_SIDE))


class EngineInvariantError(RuntimeError):
    """Raised when the engine detects internally inconsistent state."""


class Player(Enum):
    """Players in the game. X always moves first."""

    X = "X"
    O = "O"

    def opponent(self) -> "Player":
        """Return the opposing player."""

        return Player.O if self is Player.X else Player.X


def is_valid_square(square: object) -> bool:
    return isinstance(square, int) and not isinstance(square, bool) and 0 <= square < len(SQUARES)


@dataclass(frozen=True)
class QuantumMove:
    """A spooky mark spanning two squares, placed on a single turn."""

    id: str
    player: Player
    move_index: int
    a: Square
    b: Square
    collapsed_to: Optional[Square] = None

    def __post_init__(self) -> None:
        if self.a == self.b:
            raise ValueError("a quantum move must span two distinct squares")
        if self.collapsed_to is not None and self.collapsed_to not in (self.a, self.b):
            raise ValueError("collapsed_to must be one of the move endpoints")

    @classmethod
    def create(cls, player: Player, move_index: int, a: Square, b: Square) -> "QuantumMove":
        return cls(id=f"{player.value}{move_index}", player=player, move_index=move_index, a=a, b=b)

    @property
    def is_collapsed(self) -> bool:
        return self.collapsed_to is not None

    def touches(self, square: Square) -> bool:
        return square == self.a or square == self.b

    def other_end(self, square: Square) -> Square:
        """Return the endpoint opposite ``square``."""

        if square == self.a:
            return self.b
        if square == self.b:
            return self.a
        raise ValueError(f"square {square} is not an endpoint of move {self.id}")


@dataclass(frozen=True)
class ClassicalMark:
    """Permanent occupant of a square, produced by a collapse."""

    player: Player
    move_index: int


@dataclass(frozen=True)
class PendingCycle:
    cycle_move_id: str
    chooser: Player


@dataclass(frozen=True)
class Winner:
    player: Player
    score: float


@dataclass(frozen=True)
class PlayerEmoji:
    """Presentation metadata carried through the engine untouched."""

    x: str
    o: str


Classical = Tuple[Optional[ClassicalMark], ...]

EMPTY_CLASSICAL: Classical = (None,) * len(SQUARES)


@dataclass(frozen=True)
class GameState:
    """Complete game state for Quantum Tic-Tac-Toe.

    ``moves`` lists every quantum move ever made in creation order, collapsed or not.
    ``classical`` holds one optional mark per square. ``move_number`` is the index the
    next move will receive. States are never mutated; the engine builds new ones with
    :func:`dataclasses.replace`, so any earlier value can be kept as an undo snapshot.
    """

    moves: Tuple[QuantumMove, ...] = ()
    classical: Classical = EMPTY_CLASSICAL
    current_player: Player = Player.X
    move_number: int = 1
    pending_cycle: Optional[PendingCycle] = None
    winner: Optional[Winner] = None
    game_over: bool = False
    emojis: Optional[PlayerEmoji] = None
    emoji_selection_complete: bool = False
    _key_cache: Optional[Tuple] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.classical) != len(SQUARES):
            raise ValueError(f"classical board must have {len(SQUARES)} slots")

    def uncollapsed_moves(self) -> Tuple[QuantumMove, ...]:
        return tuple(m for m in self.moves if m.collapsed_to is None)

    def find_move(self, move_id: str) -> Optional[QuantumMove]:
        for move in self.moves:
            if move.id == move_id:
                return move
        return None

    def classical_count(self) -> int:
        return sum(1 for mark in self.classical if mark is not None)

    def is_board_full(self) -> bool:
        return all(mark is not None for mark in self.classical)

    def key(self) -> Tuple:
        """Return a hashable key capturing the rules-relevant parts of the state."""

        if self._key_cache is None:
            moves = tuple((m.id, m.a, m.b, m.collapsed_to) for m in self.moves)
            marks = tuple(None if m is None else (m.player, m.move_index) for m in self.classical)
            # Frozen dataclass; the cache is not part of equality.
            object.__setattr__(self, "_key_cache", (self.current_player, self.move_number, moves, marks, self.pending_cycle))
        return self._key_cache
