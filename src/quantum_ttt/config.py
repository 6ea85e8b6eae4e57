"""Game configuration and named presets."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .agents import DIFFICULTY_AGENTS, Agent, build_agent
from .types import Player

MODES = ("two-player", "vs-bot", "bot-vs-bot")


@dataclass
class GameConfig:
    mode: str = "two-player"
    bot_player: Optional[Player] = None
    bot_difficulty: str = "medium"
    preset: str = "custom"

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode '{self.mode}'")
        if self.bot_difficulty not in DIFFICULTY_AGENTS:
            raise ValueError(f"Unknown difficulty '{self.bot_difficulty}'")
        if self.mode == "vs-bot" and self.bot_player is None:
            self.bot_player = Player.O

    def agent_name(self) -> str:
        return DIFFICULTY_AGENTS[self.bot_difficulty]

    def agents(self, seed: Optional[int] = None) -> tuple[Optional[Agent], Optional[Agent]]:
        """Return ``(x_agent, o_agent)``; ``None`` marks a human seat."""

        if self.mode == "two-player":
            return None, None
        if self.mode == "bot-vs-bot":
            return (
                build_agent(self.agent_name(), seed=seed),
                build_agent(self.agent_name(), seed=None if seed is None else seed + 1),
            )
        bot = build_agent(self.agent_name(), seed=seed)
        return (bot, None) if self.bot_player is Player.X else (None, bot)


def preset_config(name: str) -> GameConfig:
    preset = name.lower()
    if preset == "hotseat":
        return GameConfig(mode="two-player", preset="hotseat")
    if preset == "beginner":
        return GameConfig(mode="vs-bot", bot_player=Player.O, bot_difficulty="beginner", preset="beginner")
    if preset == "medium":
        return GameConfig(mode="vs-bot", bot_player=Player.O, bot_difficulty="medium", preset="medium")
    if preset == "advanced":
        return GameConfig(mode="vs-bot", bot_player=Player.O, bot_difficulty="advanced", preset="advanced")
    if preset == "demo":
        return GameConfig(mode="bot-vs-bot", bot_difficulty="advanced", preset="demo")
    raise ValueError(f"Unknown config preset '{name}'")
