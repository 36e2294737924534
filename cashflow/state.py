"""
Immutable game state.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from cashflow.cards import ActiveCard, DealPayload, DeckState
from cashflow.config import DEFAULT_CONFIG, GameConfig
from cashflow.money import LogEntry
from cashflow.player import PlayerState


class TurnPhase(Enum):
    """Where the current turn stands."""

    ROLL_DICE = "roll_dice"
    PAY_DAY_COLLECTION = "pay_day_collection"
    RESOLVE_SPACE = "resolve_space"
    MAKE_DECISION = "make_decision"
    END_OF_TURN = "end_of_turn"
    BANKRUPTCY_DECISION = "bankruptcy_decision"
    WAITING_FOR_DEAL_RESPONSE = "waiting_for_deal_response"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class PendingPlayerDeal:
    """A deal card the current player offered to another player for a price."""

    seller_id: str
    buyer_id: str
    deal: DealPayload
    asking_price: int
    shares: int = 1


@dataclass(frozen=True)
class GameState:
    """
    Represents the complete state of a CASHFLOW game.

    States are values: the engine never changes one, it builds the next.
    """

    players: Tuple[PlayerState, ...]
    current_player_index: int = 0
    turn_phase: TurnPhase = TurnPhase.ROLL_DICE
    active_card: Optional[ActiveCard] = None
    dice_result: Optional[Tuple[int, int]] = None
    decks: DeckState = field(default_factory=DeckState)
    log: Tuple[LogEntry, ...] = ()
    turn_number: int = 1
    winner: Optional[str] = None
    pending_player_deal: Optional[PendingPlayerDeal] = None
    game_id: str = ""
    seed: Optional[int] = None
    next_asset_id: int = 1
    pay_days_pending: int = 0
    config: GameConfig = DEFAULT_CONFIG

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    @property
    def is_over(self) -> bool:
        return self.turn_phase == TurnPhase.GAME_OVER

    def get_player(self, player_id: str) -> Optional[PlayerState]:
        return next((p for p in self.players if p.player_id == player_id), None)

    def with_player(self, player: PlayerState) -> "GameState":
        """Return a copy with ``player`` replacing the entry of the same id."""
        players = tuple(player if p.player_id == player.player_id else p for p in self.players)
        return replace(self, players=players)

    def active_players(self) -> Tuple[PlayerState, ...]:
        """Players who have not been eliminated."""
        return tuple(p for p in self.players if not p.is_bankrupt)

    def __repr__(self) -> str:
        return (
            f"GameState(id={self.game_id!r}, turn={self.turn_number}, "
            f"phase={self.turn_phase.value}, current={self.current_player.player_id})"
        )
