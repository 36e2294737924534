"""
Card effect resolution.

Each resolver takes a game state and returns the next one. Money rules
that fail (buying without the cash, selling something the market card
does not want) raise ``RuleViolation`` and leave nothing half-applied.
Negative cash left behind by expenses is settled by the engine, not here.
"""

import math
from dataclasses import replace
from typing import Union

from cashflow.cards import (
    AllPlayersExpense,
    BigDealCard,
    BusinessDeal,
    DoodadCard,
    MarketCard,
    PropertyDamage,
    RealEstateDeal,
    RealEstateOffer,
    RealEstateOfferFlat,
    SmallDealCard,
    StockDeal,
    StockPriceChange,
    StockSplit,
)
from cashflow.exceptions import RuleViolation
from cashflow.finance import (
    add_asset,
    calculate_total_income,
    find_stock_by_symbol,
    remove_asset,
    replace_asset,
)
from cashflow.money import EventType, add_log, format_money
from cashflow.player import BusinessAsset, PlayerState, RealEstateAsset, StockAsset
from cashflow.state import GameState, TurnPhase

DealCard = Union[SmallDealCard, BigDealCard]


def _next_asset_id(state: GameState):
    return f"asset-{state.next_asset_id}", replace(state, next_asset_id=state.next_asset_id + 1)


def _require_player(state: GameState, player_id: str) -> PlayerState:
    player = state.get_player(player_id)
    if player is None:
        raise RuleViolation(f"Unknown player {player_id}")
    return player


def resolve_buy_deal(
    state: GameState,
    card: DealCard,
    player_id: str,
    shares: int = 1,
    skip_payment: bool = False,
) -> GameState:
    """
    Give ``player_id`` the asset on a deal card.

    Stocks cost ``shares x cost_per_share`` and merge into an existing lot of
    the same symbol (the lot keeps its original price). Real estate and
    businesses cost their down payment. ``skip_payment`` hands the asset
    over for free, for deals already paid for between players.
    """
    player = _require_player(state, player_id)
    deal = card.deal

    if isinstance(deal, StockSplit):
        raise RuleViolation("A stock split cannot be bought")

    if isinstance(deal, StockDeal):
        if shares < 1:
            raise RuleViolation("Must buy at least one share")
        cost = deal.cost_per_share * shares
        if not skip_payment and player.cash < cost:
            raise RuleViolation(f"Cannot afford {shares} shares of {deal.symbol} ({format_money(cost)})")

        existing = find_stock_by_symbol(player, deal.symbol)
        if existing is not None:
            player = replace_asset(player, replace(existing, shares=existing.shares + shares))
        else:
            asset_id, state = _next_asset_id(state)
            player = add_asset(
                player,
                StockAsset(
                    asset_id=asset_id,
                    name=deal.name,
                    symbol=deal.symbol,
                    shares=shares,
                    cost_per_share=deal.cost_per_share,
                    dividend_per_share=deal.dividend_per_share,
                ),
            )
        if not skip_payment:
            player = replace(player, cash=player.cash - cost)
        message = f"Bought {shares} shares of {deal.symbol} at {format_money(deal.cost_per_share)}/share"
        return add_log(state.with_player(player), player_id, message, EventType.PURCHASE)

    if not skip_payment and player.cash < deal.down_payment:
        raise RuleViolation(f"Cannot afford down payment of {format_money(deal.down_payment)} for {deal.name}")

    asset_id, state = _next_asset_id(state)
    if isinstance(deal, RealEstateDeal):
        asset = RealEstateAsset(
            asset_id=asset_id,
            name=deal.name,
            property_type=deal.property_type,
            cost=deal.cost,
            mortgage=deal.mortgage,
            down_payment=deal.down_payment,
            cash_flow=deal.cash_flow,
        )
    elif isinstance(deal, BusinessDeal):
        asset = BusinessAsset(
            asset_id=asset_id,
            name=deal.name,
            cost=deal.cost,
            mortgage=deal.mortgage,
            down_payment=deal.down_payment,
            cash_flow=deal.cash_flow,
        )
    else:
        raise RuleViolation(f"Unknown deal {deal!r}")

    player = add_asset(player, asset)
    if not skip_payment:
        player = replace(player, cash=player.cash - deal.down_payment)
    message = (
        f"Bought {deal.name} for {format_money(deal.down_payment)} down "
        f"(cash flow: {format_money(deal.cash_flow)}/mo)"
    )
    return add_log(state.with_player(player), player_id, message, EventType.PURCHASE)


def _owns_property_type(player: PlayerState, property_types) -> bool:
    return any(
        isinstance(a, RealEstateAsset) and a.property_type in property_types for a in player.statement.assets
    )


def resolve_market(state: GameState, card: MarketCard) -> GameState:
    """
    Apply a freshly drawn market card.

    Price changes and buyer offers wait for the current player's decision.
    Property damage and all-player expenses are charged at once; the card
    is then discarded and the turn moves to END_OF_TURN.
    """
    effect = card.effect
    current_id = state.current_player.player_id

    if isinstance(effect, (StockPriceChange, RealEstateOffer, RealEstateOfferFlat)):
        state = replace(state, turn_phase=TurnPhase.MAKE_DECISION)
        return add_log(state, current_id, f"Market: {card.title} - {effect.description}", EventType.MARKET)

    if isinstance(effect, PropertyDamage):
        for player in state.players:
            if player.is_bankrupt or not _owns_property_type(player, effect.property_types):
                continue
            state = state.with_player(replace(player, cash=player.cash - effect.cost))
            state = add_log(
                state,
                player.player_id,
                f"Paid {format_money(effect.cost)} for property damage: {card.title}",
                EventType.EXPENSE,
            )
    elif isinstance(effect, AllPlayersExpense):
        for player in state.players:
            if player.is_bankrupt:
                continue
            state = state.with_player(replace(player, cash=player.cash - effect.amount))
            state = add_log(
                state, player.player_id, f"Paid {format_money(effect.amount)}: {card.title}", EventType.EXPENSE
            )
    else:
        raise RuleViolation(f"Unknown market effect {effect!r}")

    active = state.active_card
    decks = state.decks.discard(active.kind, active.card) if active is not None else state.decks
    return replace(state, decks=decks, active_card=None, turn_phase=TurnPhase.END_OF_TURN)


def sell_asset_to_market(state: GameState, player_id: str, asset_id: str) -> GameState:
    """
    Sell one asset to the buyer on the active market card.

    Stocks sell for the new price times shares held. Matching real estate
    sells for ``floor(cost x multiplier)`` or the flat offer, and the
    mortgage is paid off out of the proceeds.
    """
    player = _require_player(state, player_id)
    asset = player.statement.find_asset(asset_id)
    if asset is None:
        raise RuleViolation(f"{player.name} does not own asset {asset_id}")

    active = state.active_card
    if active is None or not isinstance(active.card, MarketCard):
        raise RuleViolation("No market card in play")
    effect = active.card.effect

    if isinstance(asset, StockAsset) and isinstance(effect, StockPriceChange) and asset.symbol == effect.symbol:
        proceeds = effect.new_price * asset.shares
        player = replace(remove_asset(player, asset_id), cash=player.cash + proceeds)
        message = (
            f"Sold {asset.shares} shares of {asset.symbol} at {format_money(effect.new_price)}/share "
            f"({format_money(proceeds)})"
        )
        return add_log(state.with_player(player), player_id, message, EventType.SALE)

    if (
        isinstance(asset, RealEstateAsset)
        and isinstance(effect, (RealEstateOffer, RealEstateOfferFlat))
        and asset.property_type in effect.property_types
    ):
        if isinstance(effect, RealEstateOffer):
            sale_price = math.floor(asset.cost * effect.multiplier)
        else:
            sale_price = effect.amount
        profit = sale_price - asset.mortgage
        player = replace(remove_asset(player, asset_id), cash=player.cash + profit)
        message = f"Sold {asset.name} for {format_money(sale_price)} (profit: {format_money(profit)})"
        return add_log(state.with_player(player), player_id, message, EventType.SALE)

    raise RuleViolation(f"{asset.name} does not match this market card")


def resolve_doodad(state: GameState, card: DoodadCard, player_id: str) -> GameState:
    """Charge a doodad: a flat cost, or a percentage of total income rounded down."""
    player = _require_player(state, player_id)
    if card.is_percent_of_income:
        cost = math.floor(calculate_total_income(player.statement) * card.cost / 100)
    else:
        cost = card.cost
    player = replace(player, cash=player.cash - cost)
    return add_log(
        state.with_player(player), player_id, f"Paid {format_money(cost)} for {card.title}", EventType.EXPENSE
    )


def resolve_stock_split(state: GameState, split: StockSplit) -> GameState:
    """
    Split (or reverse split) every holding of ``split.symbol`` in one pass.

    Shares become ``floor(shares x ratio)`` and per-share cost and dividend
    are divided by the ratio. A holding reduced to zero shares is removed.
    """
    ratio = split.split_ratio
    for player in state.players:
        holding = find_stock_by_symbol(player, split.symbol)
        if holding is None:
            continue

        new_shares = math.floor(holding.shares * ratio)
        if new_shares <= 0:
            player = remove_asset(player, holding.asset_id)
        else:
            player = replace_asset(
                player,
                replace(
                    holding,
                    shares=new_shares,
                    cost_per_share=holding.cost_per_share / ratio,
                    dividend_per_share=holding.dividend_per_share / ratio,
                ),
            )

        if ratio >= 1:
            message = f"Stock split! {split.symbol}: {holding.shares} shares became {new_shares}"
        else:
            message = f"Reverse stock split! {split.symbol}: {holding.shares} shares became {new_shares}"
        state = add_log(state.with_player(player), player.player_id, message, EventType.STOCK_SPLIT)
    return state
