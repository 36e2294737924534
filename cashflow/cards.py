"""
Card types and the four draw/discard decks.
"""

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from cashflow.exceptions import RuleViolation
from cashflow.player import RealEstateType


class DealSize(Enum):
    SMALL = "small"
    BIG = "big"


@dataclass(frozen=True)
class StockDeal:
    name: str
    symbol: str
    cost_per_share: float
    dividend_per_share: float = 0
    price_low: int = 1
    price_high: int = 30
    description: str = ""
    rule: str = ""


@dataclass(frozen=True)
class RealEstateDeal:
    name: str
    property_type: RealEstateType
    cost: int
    mortgage: int
    down_payment: int
    cash_flow: int
    description: str = ""
    rule: str = ""


@dataclass(frozen=True)
class BusinessDeal:
    name: str
    cost: int
    mortgage: int
    down_payment: int
    cash_flow: int
    description: str = ""
    rule: str = ""


@dataclass(frozen=True)
class StockSplit:
    """Applies to every holder of ``symbol`` as soon as it is drawn."""

    name: str
    symbol: str
    split_ratio: float
    description: str = ""
    rule: str = ""


DealPayload = Union[StockDeal, RealEstateDeal, BusinessDeal, StockSplit]


@dataclass(frozen=True)
class SmallDealCard:
    card_id: str
    title: str
    deal: DealPayload


@dataclass(frozen=True)
class BigDealCard:
    card_id: str
    title: str
    deal: DealPayload


# Market effects


@dataclass(frozen=True)
class StockPriceChange:
    symbol: str
    new_price: float
    description: str = ""


@dataclass(frozen=True)
class RealEstateOffer:
    property_types: Tuple[RealEstateType, ...]
    multiplier: float
    description: str = ""


@dataclass(frozen=True)
class RealEstateOfferFlat:
    property_types: Tuple[RealEstateType, ...]
    amount: int
    description: str = ""


@dataclass(frozen=True)
class PropertyDamage:
    property_types: Tuple[RealEstateType, ...]
    cost: int
    description: str = ""


@dataclass(frozen=True)
class AllPlayersExpense:
    amount: int
    description: str = ""


MarketEffect = Union[
    StockPriceChange, RealEstateOffer, RealEstateOfferFlat, PropertyDamage, AllPlayersExpense
]


@dataclass(frozen=True)
class MarketCard:
    card_id: str
    title: str
    description: str
    effect: MarketEffect


@dataclass(frozen=True)
class DoodadCard:
    """An unavoidable expense; ``cost`` is a percentage when ``is_percent_of_income``."""

    card_id: str
    title: str
    description: str
    cost: int
    is_percent_of_income: bool = False


Card = Union[SmallDealCard, BigDealCard, MarketCard, DoodadCard]


class CardKind(Enum):
    """Which deck a card belongs to."""

    SMALL_DEAL = "small_deal"
    BIG_DEAL = "big_deal"
    MARKET = "market"
    DOODAD = "doodad"


@dataclass(frozen=True)
class ActiveCard:
    """The card drawn this turn, held until it is resolved."""

    kind: CardKind
    card: Card

    @property
    def is_deal(self) -> bool:
        return self.kind in (CardKind.SMALL_DEAL, CardKind.BIG_DEAL)


# Pile attribute names on DeckState, per card kind
_PILES = {
    CardKind.SMALL_DEAL: ("small_deal_deck", "small_deal_discard"),
    CardKind.BIG_DEAL: ("big_deal_deck", "big_deal_discard"),
    CardKind.MARKET: ("market_deck", "market_discard"),
    CardKind.DOODAD: ("doodad_deck", "doodad_discard"),
}


@dataclass(frozen=True)
class DeckState:
    """
    Four independent draw/discard pairs.

    Drawing takes the first card of a draw pile. An empty draw pile is
    rebuilt from its shuffled discards. A drawn card lives in the game's
    active card slot until it is discarded, so no card ever leaves play.
    """

    small_deal_deck: Tuple[Optional[SmallDealCard], ...] = ()
    big_deal_deck: Tuple[Optional[BigDealCard], ...] = ()
    market_deck: Tuple[Optional[MarketCard], ...] = ()
    doodad_deck: Tuple[Optional[DoodadCard], ...] = ()
    small_deal_discard: Tuple[Optional[SmallDealCard], ...] = ()
    big_deal_discard: Tuple[Optional[BigDealCard], ...] = ()
    market_discard: Tuple[Optional[MarketCard], ...] = ()
    doodad_discard: Tuple[Optional[DoodadCard], ...] = ()

    def pile(self, kind: CardKind) -> tuple:
        return getattr(self, _PILES[kind][0])

    def discard_pile(self, kind: CardKind) -> tuple:
        return getattr(self, _PILES[kind][1])

    def draw(self, kind: CardKind, rng: random.Random) -> Tuple[Card, "DeckState"]:
        """Draw the top card of a deck, reshuffling its discards when empty."""
        deck_attr, discard_attr = _PILES[kind]
        cards = list(getattr(self, deck_attr))
        discards = getattr(self, discard_attr)

        if not cards:
            if not discards:
                raise RuleViolation(f"The {kind.value.replace('_', ' ')} deck is empty")
            cards = list(discards)
            rng.shuffle(cards)
            discards = ()

        card = cards.pop(0)
        decks = replace(self, **{deck_attr: tuple(cards), discard_attr: discards})
        return card, decks

    def discard(self, kind: CardKind, card: Card) -> "DeckState":
        discard_attr = _PILES[kind][1]
        return replace(self, **{discard_attr: getattr(self, discard_attr) + (card,)})

    def total_cards(self, kind: CardKind) -> int:
        return len(self.pile(kind)) + len(self.discard_pile(kind))
