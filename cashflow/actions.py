"""
Player actions.

One frozen dataclass per action type; the class attribute ``action_type``
tags the variant so the engine can dispatch on it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Tuple, Type


class ActionType(Enum):
    """Types of actions a player can take."""

    ROLL_DICE = "ROLL_DICE"
    CHOOSE_DEAL_TYPE = "CHOOSE_DEAL_TYPE"
    BUY_ASSET = "BUY_ASSET"
    SKIP_DEAL = "SKIP_DEAL"
    PAY_EXPENSE = "PAY_EXPENSE"
    ACCEPT_CHARITY = "ACCEPT_CHARITY"
    DECLINE_CHARITY = "DECLINE_CHARITY"
    TAKE_LOAN = "TAKE_LOAN"
    PAY_OFF_LOAN = "PAY_OFF_LOAN"
    END_TURN = "END_TURN"
    COLLECT_PAY_DAY = "COLLECT_PAY_DAY"
    SELL_TO_MARKET = "SELL_TO_MARKET"
    DECLINE_MARKET = "DECLINE_MARKET"
    DECLARE_BANKRUPTCY = "DECLARE_BANKRUPTCY"
    OFFER_DEAL_TO_PLAYER = "OFFER_DEAL_TO_PLAYER"
    ACCEPT_PLAYER_DEAL = "ACCEPT_PLAYER_DEAL"
    DECLINE_PLAYER_DEAL = "DECLINE_PLAYER_DEAL"
    CHOOSE_DREAM = "CHOOSE_DREAM"


@dataclass(frozen=True)
class Action:
    """Base class: every action names the player taking it."""

    action_type: ClassVar[ActionType]

    player_id: str


@dataclass(frozen=True)
class RollDice(Action):
    action_type: ClassVar[ActionType] = ActionType.ROLL_DICE

    dice_values: Tuple[int, int]
    use_both_dice: bool = False


@dataclass(frozen=True)
class ChooseDealType(Action):
    action_type: ClassVar[ActionType] = ActionType.CHOOSE_DEAL_TYPE

    deal_type: str


@dataclass(frozen=True)
class BuyAsset(Action):
    action_type: ClassVar[ActionType] = ActionType.BUY_ASSET

    shares: int = 1


@dataclass(frozen=True)
class SkipDeal(Action):
    action_type: ClassVar[ActionType] = ActionType.SKIP_DEAL


@dataclass(frozen=True)
class PayExpense(Action):
    action_type: ClassVar[ActionType] = ActionType.PAY_EXPENSE


@dataclass(frozen=True)
class AcceptCharity(Action):
    action_type: ClassVar[ActionType] = ActionType.ACCEPT_CHARITY


@dataclass(frozen=True)
class DeclineCharity(Action):
    action_type: ClassVar[ActionType] = ActionType.DECLINE_CHARITY


@dataclass(frozen=True)
class TakeLoan(Action):
    action_type: ClassVar[ActionType] = ActionType.TAKE_LOAN

    amount: int


@dataclass(frozen=True)
class PayOffLoan(Action):
    """Repay the bank loan (``loan_type="Bank Loan"``) or any named liability."""

    action_type: ClassVar[ActionType] = ActionType.PAY_OFF_LOAN

    loan_type: str
    amount: int


@dataclass(frozen=True)
class EndTurn(Action):
    action_type: ClassVar[ActionType] = ActionType.END_TURN


@dataclass(frozen=True)
class CollectPayDay(Action):
    action_type: ClassVar[ActionType] = ActionType.COLLECT_PAY_DAY


@dataclass(frozen=True)
class SellToMarket(Action):
    action_type: ClassVar[ActionType] = ActionType.SELL_TO_MARKET

    asset_id: str


@dataclass(frozen=True)
class DeclineMarket(Action):
    action_type: ClassVar[ActionType] = ActionType.DECLINE_MARKET


@dataclass(frozen=True)
class DeclareBankruptcy(Action):
    action_type: ClassVar[ActionType] = ActionType.DECLARE_BANKRUPTCY


@dataclass(frozen=True)
class OfferDealToPlayer(Action):
    action_type: ClassVar[ActionType] = ActionType.OFFER_DEAL_TO_PLAYER

    target_player_id: str
    asking_price: int
    shares: int = 1


@dataclass(frozen=True)
class AcceptPlayerDeal(Action):
    action_type: ClassVar[ActionType] = ActionType.ACCEPT_PLAYER_DEAL


@dataclass(frozen=True)
class DeclinePlayerDeal(Action):
    action_type: ClassVar[ActionType] = ActionType.DECLINE_PLAYER_DEAL


@dataclass(frozen=True)
class ChooseDream(Action):
    action_type: ClassVar[ActionType] = ActionType.CHOOSE_DREAM

    dream: str


ACTION_CLASSES: Dict[ActionType, Type[Action]] = {
    cls.action_type: cls
    for cls in (
        RollDice,
        ChooseDealType,
        BuyAsset,
        SkipDeal,
        PayExpense,
        AcceptCharity,
        DeclineCharity,
        TakeLoan,
        PayOffLoan,
        EndTurn,
        CollectPayDay,
        SellToMarket,
        DeclineMarket,
        DeclareBankruptcy,
        OfferDealToPlayer,
        AcceptPlayerDeal,
        DeclinePlayerDeal,
        ChooseDream,
    )
}
