"""Game controller utilities for UI-driven or scripted play.

This module keeps UI concerns separate from the rules engine so sequencing,
undo and agent fallbacks can be tested without driving a front end. Unlike the
engine, the controller is a command surface: refused actions raise ``ValueError``.
"""
from __future__ import annotations

import sys
from typing import List, Optional, Tuple

from . import engine
from .agents import Agent, HeuristicAgent
from .notation import format_move, parse_move_text
from .types import GameState, Player, PlayerEmoji, Square


class GameController:
    """Manage a single game, including agents, snapshots for undo, and logging."""

    def __init__(
        self,
        x_agent: Optional[Agent] = None,
        o_agent: Optional[Agent] = None,
        emojis: Optional[PlayerEmoji] = None,
        quiet: bool = True,
        stderr=None,
    ) -> None:
        self.x_agent = x_agent
        self.o_agent = o_agent
        self.quiet = quiet
        self.stderr = stderr or sys.stderr
        self.state: GameState
        self.history: List[GameState]
        self.new_game(emojis=emojis)

    def _log(self, message: str, *, force: bool = False) -> None:
        if self.quiet and not force:
            return
        print(message, file=self.stderr)
        self.stderr.flush()

    def new_game(self, emojis: Optional[PlayerEmoji] = None) -> None:
        self.state = engine.create_game_state(emojis=emojis)
        self.history = []

    @property
    def is_finished(self) -> bool:
        return self.state.game_over or engine.is_stalemate(self.state)

    def legal_moves(self) -> List[Tuple[Square, Square]]:
        return engine.generate_legal_moves(self.state)

    def agent_for(self, player: Player) -> Optional[Agent]:
        return self.x_agent if player is Player.X else self.o_agent

    def actor(self) -> Optional[Player]:
        """Player who must act next: the chooser while a cycle is pending."""

        if self.is_finished:
            return None
        if self.state.pending_cycle is not None:
            return self.state.pending_cycle.chooser
        return self.state.current_player

    def _commit(self, new_state: GameState) -> GameState:
        self.history.append(self.state)
        self.state = new_state
        return new_state

    def apply_human_move(self, a: Square, b: Square) -> bool:
        """Place a spooky mark; return whether it closed a cycle."""

        if self.state.game_over:
            raise ValueError("game is over")
        if self.state.pending_cycle is not None:
            raise ValueError("a cycle must be resolved first")
        result = engine.add_quantum_move(self.state, a, b)
        if result.state is self.state:
            raise ValueError("illegal move")
        self._commit(result.state)
        new_move = result.state.moves[-1]
        self._log(f"move {format_move(new_move)}")
        if result.cycle_created:
            self._log(f"cycle closed by {new_move.id}; {result.state.pending_cycle.chooser.value} chooses")
        return result.cycle_created

    def apply_text_move(self, raw: str) -> bool:
        """Parse and apply a move string against the current state."""

        parsed = parse_move_text(raw)
        if parsed.player is not None and parsed.player is not self.state.current_player:
            raise ValueError("Wrong player to move")
        if parsed.move_index is not None and parsed.move_index != self.state.move_number:
            raise ValueError("Move index in text does not match current move number")
        return self.apply_human_move(parsed.a, parsed.b)

    def resolve(self, endpoint: Square) -> GameState:
        if self.state.pending_cycle is None:
            raise ValueError("no cycle is pending")
        resolved = engine.resolve_cycle(self.state, endpoint)
        if resolved is self.state:
            raise ValueError("endpoint is not on the cycle-closing move")
        self._commit(resolved)
        collapsed = [m for m in resolved.moves if m.collapsed_to is not None and m not in self.history[-1].moves]
        self._log("collapse " + " ".join(format_move(m) for m in collapsed))
        if resolved.winner is not None:
            self._log(f"winner {resolved.winner.player.value} score={resolved.winner.score}")
        return resolved

    def undo(self) -> GameState:
        """Restore the previous snapshot; refused once the game is over or mid-cycle."""

        if not self.history:
            raise ValueError("nothing to undo")
        if self.state.game_over:
            raise ValueError("cannot undo after the game is over")
        if self.state.pending_cycle is not None:
            raise ValueError("cannot undo while a cycle is pending")
        self.state = self.history.pop()
        return self.state

    def step_ai(self) -> GameState:
        """Let the agent on turn act: resolve the pending cycle or place a mark."""

        player = self.actor()
        if player is None:
            raise ValueError("game is finished")
        agent = self.agent_for(player)
        if agent is None:
            raise ValueError("No agent configured for current player")

        if self.state.pending_cycle is not None:
            pending = self.state.find_move(self.state.pending_cycle.cycle_move_id)
            try:
                endpoint = agent.choose_collapse(self.state)
            except Exception as exc:  # noqa: BLE001
                self._log(f"Fallback to heuristic due to exception: {exc}", force=True)
                endpoint = HeuristicAgent().choose_collapse(self.state)
            if pending is None or endpoint not in (pending.a, pending.b):
                self._log("Fallback to heuristic due to illegal collapse", force=True)
                endpoint = HeuristicAgent().choose_collapse(self.state)
            return self.resolve(endpoint)

        legal = self.legal_moves()
        try:
            move = agent.choose_move(self.state)
        except Exception as exc:  # noqa: BLE001
            self._log(f"Fallback to heuristic due to exception: {exc}", force=True)
            move = HeuristicAgent().choose_move(self.state)
        if tuple(sorted(move)) not in legal:
            self._log("Fallback to heuristic due to illegal move", force=True)
            move = HeuristicAgent().choose_move(self.state)
        self.apply_human_move(*move)
        return self.state

    def transcript(self) -> List[str]:
        """Every move in creation order, with its collapse target once known."""

        return [format_move(m) for m in self.state.moves]
