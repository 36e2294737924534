"""
Game log records.

The log is part of the immutable game state: entries are appended by
building a new tuple, never by mutating the existing one.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, TypeVar

SYSTEM_PLAYER_ID = "system"


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    INVALID_ACTION = "invalid_action"

    DICE_ROLL = "dice_roll"
    PAY_DAY = "pay_day"
    LAND = "land"

    CARD_DRAW = "card_draw"
    PURCHASE = "purchase"
    SALE = "sale"
    MARKET = "market"
    EXPENSE = "expense"
    STOCK_SPLIT = "stock_split"

    BABY = "baby"
    DOWNSIZED = "downsized"
    CHARITY = "charity"

    LOAN = "loan"
    FORCED_LOAN = "forced_loan"
    LOAN_PAYOFF = "loan_payoff"

    DEAL_OFFERED = "deal_offered"
    DEAL_ACCEPTED = "deal_accepted"
    DEAL_DECLINED = "deal_declined"

    ESCAPE = "escape"
    DREAM = "dream"
    FAST_TRACK = "fast_track"

    TURN = "turn"
    BANKRUPTCY = "bankruptcy"
    GAME_END = "game_end"


@dataclass(frozen=True)
class LogEntry:
    """A logged event in the game."""

    turn: int
    player_id: str
    message: str
    event_type: EventType = EventType.TURN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turn": self.turn,
            "player_id": self.player_id,
            "message": self.message,
            "event_type": self.event_type.value,
        }

    def __repr__(self) -> str:
        return f"[T{self.turn} {self.player_id}] {self.event_type.value}: {self.message}"


S = TypeVar("S")


def add_log(state: S, player_id: str, message: str, event_type: EventType = EventType.TURN) -> S:
    """Return a copy of ``state`` with one more log entry."""
    entry = LogEntry(state.turn_number, player_id, message, event_type)
    return replace(state, log=state.log + (entry,))


def format_money(amount: float) -> str:
    """Render an amount the way log messages show it, e.g. ``$12,500``."""
    if amount < 0:
        return f"-${abs(amount):,.0f}"
    return f"${amount:,.0f}"
