"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GameConfig:
    """Configuration for a CASHFLOW game."""

    seed: Optional[int] = None

    min_players: int = 1
    max_players: int = 6

    loan_increment: int = 1000
    loan_interest_rate: float = 0.10

    charity_rate: float = 0.10
    charity_turns: int = 3

    downsized_turns: int = 2
    bankruptcy_turns: int = 2
    max_children: int = 3

    fast_track_multiplier: int = 100
    fast_track_win_cash_flow: int = 50000


DEFAULT_CONFIG = GameConfig()
