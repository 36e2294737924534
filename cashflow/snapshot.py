"""
Sanitized views of GameState.

``sanitize_state`` hides deck order before a state leaves the server;
``serialize_snapshot`` turns the sanitized state into a JSON-ready dict.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Dict

from cashflow.cards import (
    AllPlayersExpense,
    BusinessDeal,
    DeckState,
    PropertyDamage,
    RealEstateDeal,
    RealEstateOffer,
    RealEstateOfferFlat,
    StockDeal,
    StockPriceChange,
    StockSplit,
)
from cashflow.finance import (
    calculate_cash_flow,
    calculate_passive_income,
    calculate_total_expenses,
    calculate_total_income,
)
from cashflow.player import BusinessAsset, RealEstateAsset, StockAsset
from cashflow.state import GameState

# Members of a union, serialized with their class name under "kind"
_TAGGED = (
    StockAsset,
    RealEstateAsset,
    BusinessAsset,
    StockDeal,
    RealEstateDeal,
    BusinessDeal,
    StockSplit,
    StockPriceChange,
    RealEstateOffer,
    RealEstateOfferFlat,
    PropertyDamage,
    AllPlayersExpense,
)


def _hide(pile: tuple) -> tuple:
    return (None,) * len(pile)


def sanitize_state(state: GameState) -> GameState:
    """Replace every draw and discard pile with ``None`` placeholders of the same length."""
    decks = DeckState(**{f.name: _hide(getattr(state.decks, f.name)) for f in dataclasses.fields(DeckState)})
    return dataclasses.replace(state, decks=decks)


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data = {f.name: _to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
        if isinstance(value, _TAGGED):
            return {"kind": type(value).__name__, **data}
        return data
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def serialize_snapshot(state: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict.

    The snapshot includes:
    - game id, turn number, phase and current player
    - players with their statements and derived totals
    - the active card and any pending player deal
    - deck sizes only (never the cards or their order)
    - the game log
    """
    state = sanitize_state(state)
    config = state.config

    players = []
    for player in state.players:
        entry = _to_jsonable(player)
        entry["totals"] = {
            "passive_income": calculate_passive_income(player.statement),
            "total_income": calculate_total_income(player.statement),
            "total_expenses": calculate_total_expenses(player, config),
            "cash_flow": calculate_cash_flow(player, config),
        }
        players.append(entry)

    decks = {
        f.name: {"count": len(getattr(state.decks, f.name))} for f in dataclasses.fields(DeckState)
    }

    active = state.active_card
    return {
        "game_id": state.game_id,
        "turn_number": state.turn_number,
        "turn_phase": state.turn_phase.value,
        "current_player_id": state.current_player.player_id if state.players else None,
        "winner": state.winner,
        "dice_result": list(state.dice_result) if state.dice_result else None,
        "players": players,
        "active_card": (
            {"kind": active.kind.value, "card": _to_jsonable(active.card)} if active is not None else None
        ),
        "pending_player_deal": _to_jsonable(state.pending_player_deal),
        "decks": decks,
        "log": [entry.to_dict() for entry in state.log],
    }
