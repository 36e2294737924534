"""
Player state and financial statement model.

Everything here is a frozen dataclass; use ``dataclasses.replace`` (or the
helpers in ``cashflow.finance``) to derive updated copies.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class RealEstateType(Enum):
    """Property sub-types market cards can target."""

    HOUSE = "house"
    CONDO = "condo"
    APARTMENT = "apartment"
    DUPLEX = "duplex"
    FOURPLEX = "fourplex"
    EIGHTPLEX = "eightplex"
    LAND = "land"
    COMMERCIAL = "commercial"


@dataclass(frozen=True)
class StockAsset:
    """Shares held in one symbol."""

    asset_id: str
    name: str
    symbol: str
    shares: int
    cost_per_share: float
    dividend_per_share: float = 0


@dataclass(frozen=True)
class RealEstateAsset:
    asset_id: str
    name: str
    property_type: RealEstateType
    cost: int
    mortgage: int
    down_payment: int
    cash_flow: int


@dataclass(frozen=True)
class BusinessAsset:
    asset_id: str
    name: str
    cost: int
    mortgage: int
    down_payment: int
    cash_flow: int


Asset = Union[StockAsset, RealEstateAsset, BusinessAsset]


class LiabilityName:
    """Names of the liabilities a profession starts with."""

    HOME_MORTGAGE = "Home Mortgage"
    SCHOOL_LOAN = "School Loan"
    CAR_LOAN = "Car Loan"
    CREDIT_CARD = "Credit Card"
    BANK_LOAN = "Bank Loan"


@dataclass(frozen=True)
class Liability:
    name: str
    balance: int
    payment: int


@dataclass(frozen=True)
class Expenses:
    """Recurring monthly expenses (the bank loan payment is derived, not stored)."""

    taxes: int = 0
    home_mortgage_payment: int = 0
    school_loan_payment: int = 0
    car_loan_payment: int = 0
    credit_card_payment: int = 0
    other_expenses: int = 0
    per_child_expense: int = 0
    child_count: int = 0


@dataclass(frozen=True)
class FinancialStatement:
    salary: int
    expenses: Expenses = field(default_factory=Expenses)
    assets: Tuple[Asset, ...] = ()
    liabilities: Tuple[Liability, ...] = ()

    def find_asset(self, asset_id: str) -> Optional[Asset]:
        return next((a for a in self.assets if a.asset_id == asset_id), None)

    def find_liability(self, name: str) -> Optional[Liability]:
        return next((li for li in self.liabilities if li.name == name), None)


@dataclass(frozen=True)
class PlayerState:
    """Represents the complete state of a player in the game."""

    player_id: str
    name: str
    profession: str
    statement: FinancialStatement
    cash: int
    position: int = 0
    in_fast_track: bool = False
    fast_track_position: int = 0
    fast_track_cash_flow: int = 0
    has_escaped: bool = False
    has_won: bool = False
    dream: Optional[str] = None
    downsized_turns_left: int = 0
    charity_turns_left: int = 0
    bank_loan_amount: int = 0
    is_bankrupt: bool = False
    bankrupt_turns_left: int = 0

    @property
    def is_sidelined(self) -> bool:
        """Serving a downsized or bankruptcy-recovery penalty."""
        return self.downsized_turns_left > 0 or self.bankrupt_turns_left > 0

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', "
            f"cash={self.cash}, position={self.position}, bankrupt={self.is_bankrupt})"
        )


class Player:
    """
    Convenience wrapper for player information.
    This is primarily for the external API.
    """

    def __init__(self, player_id: str, name: str):
        self.player_id = player_id
        self.name = name

    def __repr__(self) -> str:
        return f"Player(id={self.player_id}, name='{self.name}')"
