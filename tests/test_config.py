import pytest

from quantum_ttt.agents import HeuristicAgent, LookaheadAgent, RandomAgent
from quantum_ttt.config import GameConfig, preset_config
from quantum_ttt.types import Player


def test_presets():
    medium = preset_config("medium")
    assert medium.mode == "vs-bot"
    assert medium.bot_player is Player.O
    x_agent, o_agent = medium.agents(seed=1)
    assert x_agent is None
    assert isinstance(o_agent, HeuristicAgent)

    assert preset_config("hotseat").agents() == (None, None)

    demo_x, demo_o = preset_config("DEMO").agents(seed=3)
    assert isinstance(demo_x, LookaheadAgent)
    assert isinstance(demo_o, LookaheadAgent)


def test_bot_can_play_x():
    config = GameConfig(mode="vs-bot", bot_player=Player.X, bot_difficulty="beginner")
    x_agent, o_agent = config.agents()
    assert isinstance(x_agent, RandomAgent)
    assert o_agent is None


def test_vs_bot_defaults_to_bot_as_o():
    assert GameConfig(mode="vs-bot").bot_player is Player.O


def test_invalid_config():
    with pytest.raises(ValueError):
        preset_config("impossible")
    with pytest.raises(ValueError):
        GameConfig(mode="network")
    with pytest.raises(ValueError):
        GameConfig(bot_difficulty="grandmaster")
