"""Builders shared by the test modules."""

from dataclasses import replace

from cashflow.cards import (
    ActiveCard,
    BigDealCard,
    BusinessDeal,
    CardKind,
    DeckState,
    DoodadCard,
    MarketCard,
    RealEstateDeal,
    SmallDealCard,
    StockDeal,
    StockPriceChange,
    StockSplit,
)
from cashflow.player import BusinessAsset, RealEstateAsset, RealEstateType, StockAsset


def set_player(state, player_id, **changes):
    """Return ``state`` with one player's fields replaced."""
    return state.with_player(replace(state.get_player(player_id), **changes))


def set_phase(state, phase, card=None):
    """Put the game in ``phase`` with ``card`` (an ActiveCard) in play."""
    return replace(state, turn_phase=phase, active_card=card)


def with_decks(state, **piles):
    """Replace the draw piles, e.g. ``with_decks(state, doodad_deck=(card,))``."""
    return replace(state, decks=DeckState(**piles))


def stock_card(symbol="ON2U", price=5, card_id="t-stock", dividend=0):
    return SmallDealCard(
        card_id, f"Stock - {symbol}", StockDeal(f"{symbol} Stock", symbol, price, dividend_per_share=dividend)
    )


def split_card(symbol="OK4U", ratio=2, card_id="t-split"):
    return SmallDealCard(card_id, f"{symbol} Split", StockSplit(f"{symbol} Split", symbol, ratio))


def house_card(cost=50000, mortgage=45000, down=5000, cash_flow=200, card_id="t-house"):
    return SmallDealCard(
        card_id, "3Br/2Ba House", RealEstateDeal("3Br/2Ba House", RealEstateType.HOUSE, cost, mortgage, down, cash_flow)
    )


def business_card(cost=100000, mortgage=90000, down=10000, cash_flow=1500, card_id="t-business"):
    return BigDealCard(card_id, "Car Wash", BusinessDeal("Car Wash", cost, mortgage, down, cash_flow))


def doodad_card(cost=3000, card_id="t-doodad", percent=False):
    return DoodadCard(card_id, "New Boat", "Buy a boat.", cost, is_percent_of_income=percent)


def market_card(effect, card_id="t-market"):
    return MarketCard(card_id, "Market News", "Something happened.", effect)


def price_change_card(symbol="ON2U", new_price=20):
    return market_card(StockPriceChange(symbol, new_price))


def active(card):
    """Wrap a card as the active card of the matching deck."""
    if isinstance(card, SmallDealCard):
        return ActiveCard(CardKind.SMALL_DEAL, card)
    if isinstance(card, BigDealCard):
        return ActiveCard(CardKind.BIG_DEAL, card)
    if isinstance(card, MarketCard):
        return ActiveCard(CardKind.MARKET, card)
    return ActiveCard(CardKind.DOODAD, card)


def stock_asset(asset_id="asset-s", symbol="ON2U", shares=10, price=5, dividend=0):
    return StockAsset(asset_id, f"{symbol} Stock", symbol, shares, price, dividend)


def house_asset(asset_id="asset-h", cost=50000, mortgage=45000, down=5000, cash_flow=200,
                property_type=RealEstateType.HOUSE):
    return RealEstateAsset(asset_id, "House", property_type, cost, mortgage, down, cash_flow)


def business_asset(asset_id="asset-b", cash_flow=1500, down=10000):
    return BusinessAsset(asset_id, "Car Wash", 100000, 90000, down, cash_flow)


def give_assets(state, player_id, *assets):
    player = state.get_player(player_id)
    statement = replace(player.statement, assets=player.statement.assets + tuple(assets))
    return state.with_player(replace(player, statement=statement))
