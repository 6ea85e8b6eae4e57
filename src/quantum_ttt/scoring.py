"""Line scanning and winner determination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .types import SQUARES, ClassicalMark, EngineInvariantError, Player, Square, Winner

Line = Tuple[Square, Square, Square]

WINNING_LINES: Tuple[Line, ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass(frozen=True)
class LineResult:
    complete: bool
    player: Optional[Player] = None
    max_move_index: Optional[int] = None


@dataclass(frozen=True)
class WinningLine:
    line: Line
    max_move_index: int


def _check_board(classical: Sequence[Optional[ClassicalMark]]) -> None:
    if len(classical) != len(SQUARES):
        raise EngineInvariantError(f"classical board has {len(classical)} slots, expected {len(SQUARES)}")


def is_complete_line(line: Line, classical: Sequence[Optional[ClassicalMark]]) -> LineResult:
    """Check whether all three squares of ``line`` hold marks of one player.

    A complete line's ``max_move_index`` is the latest move index among its marks,
    i.e. the moment the line was finished.
    """

    marks = [classical[sq] for sq in line]
    if any(mark is None for mark in marks):
        return LineResult(complete=False)

    players = {mark.player for mark in marks}
    if len(players) != 1:
        return LineResult(complete=False)
    return LineResult(
        complete=True,
        player=marks[0].player,
        max_move_index=max(mark.move_index for mark in marks),
    )


def find_winning_lines(classical: Sequence[Optional[ClassicalMark]]) -> Dict[Player, List[WinningLine]]:
    """Collect every complete line, grouped by owner."""

    _check_board(classical)
    wins: Dict[Player, List[WinningLine]] = {Player.X: [], Player.O: []}
    for line in WINNING_LINES:
        result = is_complete_line(line, classical)
        if result.complete:
            wins[result.player].append(WinningLine(line=line, max_move_index=result.max_move_index))
    return wins


def determine_winner(classical: Sequence[Optional[ClassicalMark]]) -> Optional[Winner]:
    """Return the winner and score, or ``None`` when nobody has a line.

    When both players complete lines in the same collapse, the player whose earliest
    line was finished first wins a full point. An exact tie goes to X with half a point.
    """

    wins = find_winning_lines(classical)
    x_wins = wins[Player.X]
    o_wins = wins[Player.O]

    if not x_wins and not o_wins:
        return None
    if x_wins and not o_wins:
        return Winner(player=Player.X, score=1.0)
    if o_wins and not x_wins:
        return Winner(player=Player.O, score=1.0)

    x_first = min(w.max_move_index for w in x_wins)
    o_first = min(w.max_move_index for w in o_wins)
    if x_first < o_first:
        return Winner(player=Player.X, score=1.0)
    if o_first < x_first:
        return Winner(player=Player.O, score=1.0)
    return Winner(player=Player.X, score=0.5)


def count_potential_lines(
    classical: Sequence[Optional[ClassicalMark]], player: Player, weighted: bool = False
) -> int:
    """Count lines ``player`` has a foothold in and the opponent has not touched.

    With ``weighted`` each such line counts once per mark the player holds on it.
    """

    opponent = player.opponent()
    count = 0
    for line in WINNING_LINES:
        marks = [classical[sq] for sq in line]
        own = sum(1 for m in marks if m is not None and m.player is player)
        theirs = sum(1 for m in marks if m is not None and m.player is opponent)
        if own and not theirs:
            count += own if weighted else 1
    return count
