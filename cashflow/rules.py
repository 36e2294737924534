"""
High-level rules API: legal action detection and action validation.

``get_valid_actions`` is advisory (clients use it to decide which controls
to show); ``validate_action`` is what the engine enforces before any
handler runs.
"""

from dataclasses import dataclass
from typing import List, Optional

from cashflow.actions import (
    Action,
    ActionType,
    BuyAsset,
    ChooseDealType,
    ChooseDream,
    OfferDealToPlayer,
    PayOffLoan,
    RollDice,
    SellToMarket,
    TakeLoan,
)
from cashflow.board import get_fast_track_space_type, get_space_type
from cashflow.cards import CardKind, DealSize
from cashflow.finance import max_bank_loan
from cashflow.money import format_money
from cashflow.spaces import FastTrackSpaceType, SpaceType
from cashflow.state import GameState, TurnPhase

DEAL_SIZES = {size.value for size in DealSize}


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(False, error)


def is_player_turn(state: GameState, player_id: str) -> bool:
    return state.current_player.player_id == player_id


def get_valid_actions(state: GameState) -> List[ActionType]:
    """
    Get the action types the game accepts next.

    During a pending player deal these are the buyer's actions; otherwise
    they belong to the current player.
    """
    if state.is_over or not state.players:
        return []

    player = state.current_player

    # An escaped player must pick a dream before anything else
    if player.has_escaped and player.dream is None:
        return [ActionType.CHOOSE_DREAM]

    phase = state.turn_phase
    actions: List[ActionType] = []

    if phase == TurnPhase.ROLL_DICE:
        actions.append(ActionType.END_TURN if player.is_sidelined else ActionType.ROLL_DICE)

    elif phase == TurnPhase.PAY_DAY_COLLECTION:
        actions.append(ActionType.COLLECT_PAY_DAY)

    elif phase == TurnPhase.RESOLVE_SPACE:
        if player.in_fast_track:
            if get_fast_track_space_type(player.fast_track_position) == FastTrackSpaceType.CHARITY:
                actions.extend([ActionType.ACCEPT_CHARITY, ActionType.DECLINE_CHARITY])
        else:
            space_type = get_space_type(player.position)
            if space_type == SpaceType.DEAL:
                actions.extend([ActionType.CHOOSE_DEAL_TYPE, ActionType.SKIP_DEAL])
            elif space_type == SpaceType.CHARITY:
                actions.extend([ActionType.ACCEPT_CHARITY, ActionType.DECLINE_CHARITY])

    elif phase == TurnPhase.MAKE_DECISION:
        card = state.active_card
        if card is None:
            actions.append(ActionType.END_TURN)
        elif card.is_deal:
            actions.extend([ActionType.BUY_ASSET, ActionType.SKIP_DEAL])
            if len(state.active_players()) > 1:
                actions.append(ActionType.OFFER_DEAL_TO_PLAYER)
            actions.append(ActionType.END_TURN)
        elif card.kind == CardKind.DOODAD:
            actions.append(ActionType.PAY_EXPENSE)
        elif card.kind == CardKind.MARKET:
            actions.extend([ActionType.SELL_TO_MARKET, ActionType.DECLINE_MARKET, ActionType.END_TURN])

    elif phase == TurnPhase.WAITING_FOR_DEAL_RESPONSE:
        actions.extend([ActionType.ACCEPT_PLAYER_DEAL, ActionType.DECLINE_PLAYER_DEAL])

    elif phase == TurnPhase.END_OF_TURN:
        actions.append(ActionType.END_TURN)
        if not player.in_fast_track:
            actions.extend([ActionType.TAKE_LOAN, ActionType.PAY_OFF_LOAN])

    elif phase == TurnPhase.BANKRUPTCY_DECISION:
        actions.append(ActionType.DECLARE_BANKRUPTCY)

    return actions


def _is_die(value) -> bool:
    return _is_int(value) and 1 <= value <= 6


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_parameters(state: GameState, action: Action) -> Optional[str]:
    """Structural checks on an action's own fields; returns an error or None."""
    if isinstance(action, RollDice):
        dice = action.dice_values
        if not isinstance(dice, (tuple, list)) or len(dice) != 2 or not all(_is_die(d) for d in dice):
            return "Dice values must be two integers between 1 and 6"

    elif isinstance(action, ChooseDealType):
        if not isinstance(action.deal_type, str) or action.deal_type not in DEAL_SIZES:
            return f"Deal type must be 'small' or 'big', got {action.deal_type!r}"

    elif isinstance(action, BuyAsset):
        if not _is_int(action.shares) or action.shares < 1:
            return "Must buy at least one share"

    elif isinstance(action, TakeLoan):
        if not _is_int(action.amount):
            return "Loan amount must be a whole number"
        ceiling = max_bank_loan(state.get_player(action.player_id), state.config)
        if action.amount > ceiling:
            return f"Loan amount exceeds maximum of {format_money(ceiling)} (cash flow cannot go negative)"

    elif isinstance(action, PayOffLoan):
        if not isinstance(action.loan_type, str):
            return "Loan type must be a liability name"
        if not _is_int(action.amount):
            return "Payment amount must be a whole number"

    elif isinstance(action, SellToMarket):
        if not isinstance(action.asset_id, str):
            return "Asset id must be a string"

    elif isinstance(action, ChooseDream):
        if not isinstance(action.dream, str):
            return "Dream must be a string"

    elif isinstance(action, OfferDealToPlayer):
        if not isinstance(action.target_player_id, str):
            return "Target player id must be a string"
        if not _is_int(action.asking_price) or action.asking_price <= 0:
            return "Asking price must be a positive whole number"
        if not _is_int(action.shares) or action.shares < 1:
            return "Must offer at least one share"
        target = state.get_player(action.target_player_id)
        if target is None:
            return f"Player {action.target_player_id} not found"
        if target.player_id == action.player_id:
            return "Cannot offer a deal to yourself"
        if target.is_bankrupt:
            return f"{target.name} is out of the game"

    return None


def validate_action(state: GameState, action: Action) -> ValidationResult:
    """
    Check whether an action may be applied to the state.

    Args:
        state: Current game state
        action: Action being attempted

    Returns:
        ValidationResult with the reason when invalid
    """
    if state.is_over:
        return ValidationResult.fail("Game is over")

    player = state.get_player(action.player_id)
    if player is None:
        return ValidationResult.fail(f"Player {action.player_id} not found")

    if action.action_type in (ActionType.ACCEPT_PLAYER_DEAL, ActionType.DECLINE_PLAYER_DEAL):
        pending = state.pending_player_deal
        if pending is None:
            return ValidationResult.fail("There is no deal offer to answer")
        if pending.buyer_id != player.player_id:
            return ValidationResult.fail("Only the player the deal was offered to can answer it")
    elif not is_player_turn(state, player.player_id):
        return ValidationResult.fail("It is not your turn")

    if action.action_type not in get_valid_actions(state):
        return ValidationResult.fail(
            f"{action.action_type.value} is not allowed during {state.turn_phase.value}"
        )

    error = _check_parameters(state, action)
    if error:
        return ValidationResult.fail(error)

    return ValidationResult.ok()
