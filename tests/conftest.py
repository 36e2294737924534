"""Shared test fixtures for the CASHFLOW engine tests."""

import pytest

from cashflow.config import GameConfig
from cashflow.game import create_game
from cashflow.player import Player
from cashflow.professions import create_player_state, get_profession


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def profession():
    """The Teacher profession: salary 3,300, expenses 2,340, cash flow 960."""
    return get_profession("Teacher")


@pytest.fixture
def two_players():
    return [Player("p1", "Alice"), Player("p2", "Bob")]


@pytest.fixture
def three_players():
    return [Player("p1", "Alice"), Player("p2", "Bob"), Player("p3", "Carol")]


@pytest.fixture
def basic_game(game_config, two_players, profession):
    """Two Teachers at the start of a seeded game."""
    return create_game(two_players, [profession, profession], game_config)


@pytest.fixture
def three_player_game(game_config, three_players, profession):
    return create_game(three_players, [profession] * 3, game_config)


@pytest.fixture
def starting_player(profession):
    """A lone Teacher player state with 400 cash."""
    return create_player_state("p1", "Alice", profession)
