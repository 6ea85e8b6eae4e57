"""CLI runner for Quantum Tic-Tac-Toe.

Usage examples:
- Single game: ``python -m quantum_ttt.runner --mode game --x heuristic --o random --seed 42``
- Match: ``python -m quantum_ttt.runner --mode match --x lookahead --o heuristic --games 20``
- Play against a bot: ``python -m quantum_ttt.runner --mode play --preset medium``
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .agents import AGENT_NAMES, Agent, build_agent
from .config import GameConfig, preset_config
from .game_controller import GameController
from .notation import format_board, parse_square
from .tips import get_player_tip
from .types import Player


@dataclass
class GameSummary:
    winner: Optional[Player]
    score: float
    plies: int
    collapses: int
    transcript: List[str] = field(default_factory=list)


def _summarize(controller: GameController, collapses: int) -> GameSummary:
    state = controller.state
    winner = state.winner
    return GameSummary(
        winner=None if winner is None else winner.player,
        score=0.0 if winner is None else winner.score,
        plies=len(state.moves),
        collapses=collapses,
        transcript=controller.transcript(),
    )


def play_game(
    x_agent: Agent,
    o_agent: Agent,
    emit_moves: bool = False,
    show_board: bool = False,
    out=None,
) -> GameSummary:
    """Play one bot-vs-bot game to the end."""

    out = out or sys.stdout
    controller = GameController(x_agent=x_agent, o_agent=o_agent)
    collapses = 0
    while not controller.is_finished:
        pending = controller.state.pending_cycle
        controller.step_ai()
        if pending is not None:
            collapses += 1
        if emit_moves:
            if pending is None:
                print(controller.transcript()[-1], file=out)
            else:
                target = controller.state.find_move(pending.cycle_move_id).collapsed_to
                print(f"{pending.chooser.value} collapses {pending.cycle_move_id} -> {target}", file=out)
        if show_board:
            print(format_board(controller.state), file=out)
            print(file=out)
    return _summarize(controller, collapses)


def play_match(x_agent: Agent, o_agent: Agent, games: int, verbose: bool = False, out=None) -> Dict[str, float]:
    """Play ``games`` games, swapping seats every game, and total the points per agent slot.

    Points follow the winner's score; a half-point win still credits only the winner.
    """

    out = out or sys.stdout
    if games < 1:
        raise ValueError("games must be at least 1")
    points = {"first": 0.0, "second": 0.0, "draws": 0.0}
    for idx in range(games):
        swapped = idx % 2 == 1
        x, o = (o_agent, x_agent) if swapped else (x_agent, o_agent)
        summary = play_game(x, o)
        if summary.winner is None:
            points["draws"] += 1
            label = "draw"
        else:
            first_won = (summary.winner is Player.X) != swapped
            points["first" if first_won else "second"] += summary.score
            label = f"{summary.winner.value} ({summary.score})"
        if verbose:
            print(f"Game {idx + 1}: {label} plies={summary.plies} collapses={summary.collapses}", file=out)
    print(f"Match: first={points['first']} second={points['second']} draws={int(points['draws'])}", file=out)
    return points


def play_interactive(config: GameConfig, seed: Optional[int], stdin=None, out=None) -> GameSummary:
    """Human play over stdin; bots configured by ``config`` take their own turns."""

    stdin = stdin or sys.stdin
    out = out or sys.stdout
    x_agent, o_agent = config.agents(seed=seed)
    controller = GameController(x_agent=x_agent, o_agent=o_agent)
    collapses = 0
    print(format_board(controller.state), file=out)
    while not controller.is_finished:
        actor = controller.actor()
        resolving = controller.state.pending_cycle is not None
        if controller.agent_for(actor) is not None:
            controller.step_ai()
        else:
            prompt = f"{actor.value} collapse endpoint" if resolving else f"{actor.value} move"
            print(f"{prompt}> ", end="", file=out)
            out.flush()
            line = stdin.readline()
            if not line:
                break
            text = line.strip()
            try:
                if text == "undo":
                    controller.undo()
                elif text == "tip":
                    tip = get_player_tip(controller.state, actor)
                    print(tip.explanation + " " + tip.reasoning if tip else "No tip available", file=out)
                    continue
                elif resolving:
                    controller.resolve(parse_square(text))
                else:
                    controller.apply_text_move(text)
            except ValueError as exc:
                print(f"Invalid input: {exc}", file=out)
                continue
        if resolving and controller.state.pending_cycle is None:
            collapses += 1
        print(format_board(controller.state), file=out)
    summary = _summarize(controller, collapses)
    if summary.winner is not None:
        print(f"Winner: {summary.winner.value} ({summary.score})", file=out)
    else:
        print("Winner: None (draw)", file=out)
    return summary


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quantum Tic-Tac-Toe runner")
    parser.add_argument("--mode", choices=["game", "match", "play"], required=True)
    parser.add_argument("--x", choices=list(AGENT_NAMES), default="heuristic")
    parser.add_argument("--o", choices=list(AGENT_NAMES), default="random")
    parser.add_argument("--preset", type=str, default="medium", help="Config preset for play mode")
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    x_agent = build_agent(args.x, seed=args.seed)
    o_agent = build_agent(args.o, seed=None if args.seed is None else args.seed + 1)

    try:
        if args.mode == "game":
            summary = play_game(x_agent, o_agent, emit_moves=True, show_board=args.verbose)
            if summary.winner is None:
                print("Game winner: None (draw)")
            else:
                print(f"Game winner: {summary.winner.value} ({summary.score})")
        elif args.mode == "match":
            play_match(x_agent, o_agent, games=args.games, verbose=args.verbose)
        else:
            play_interactive(preset_config(args.preset), seed=args.seed)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
