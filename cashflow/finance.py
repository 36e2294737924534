"""
Financial statement arithmetic.

Pure functions over ``PlayerState``: each returns a new player and leaves
its input untouched. Operations that break a money rule raise
``RuleViolation``.
"""

import math
from dataclasses import replace
from typing import Optional, Tuple

from cashflow.config import DEFAULT_CONFIG, GameConfig
from cashflow.exceptions import RuleViolation
from cashflow.player import (
    Asset,
    BusinessAsset,
    Expenses,
    FinancialStatement,
    LiabilityName,
    PlayerState,
    RealEstateAsset,
    StockAsset,
)

# Expense line paired with each named liability
_EXPENSE_FIELD_FOR_LIABILITY = {
    LiabilityName.HOME_MORTGAGE: "home_mortgage_payment",
    LiabilityName.SCHOOL_LOAN: "school_loan_payment",
    LiabilityName.CAR_LOAN: "car_loan_payment",
    LiabilityName.CREDIT_CARD: "credit_card_payment",
}

# Debts halved when a player goes bankrupt
_HALVABLE_DEBTS = (LiabilityName.CAR_LOAN, LiabilityName.CREDIT_CARD)


def _with_statement(player: PlayerState, **changes) -> PlayerState:
    return replace(player, statement=replace(player.statement, **changes))


# ---------------------------------------------------------------------------
# Income and expenses
# ---------------------------------------------------------------------------


def calculate_passive_income(statement: FinancialStatement) -> float:
    """Dividends plus real estate and business cash flow."""
    passive = 0
    for asset in statement.assets:
        if isinstance(asset, StockAsset):
            passive += asset.shares * asset.dividend_per_share
        else:
            passive += asset.cash_flow
    return passive


def calculate_total_income(statement: FinancialStatement) -> float:
    return statement.salary + calculate_passive_income(statement)


def calculate_bank_loan_payment(player: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Monthly interest on the bank loan, rounded up."""
    return math.ceil(round(player.bank_loan_amount * config.loan_interest_rate / 12, 6))


def _fixed_expenses(expenses: Expenses, config: GameConfig) -> int:
    return (
        expenses.taxes
        + expenses.home_mortgage_payment
        + expenses.school_loan_payment
        + expenses.car_loan_payment
        + expenses.credit_card_payment
        + expenses.other_expenses
        + expenses.per_child_expense * min(expenses.child_count, config.max_children)
    )


def calculate_total_expenses(player: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> int:
    return _fixed_expenses(player.statement.expenses, config) + calculate_bank_loan_payment(player, config)


def calculate_cash_flow(player: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> float:
    """Monthly cash flow: total income minus total expenses."""
    return calculate_total_income(player.statement) - calculate_total_expenses(player, config)


def can_escape_rat_race(player: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> bool:
    """Passive income must strictly exceed total expenses."""
    return calculate_passive_income(player.statement) > calculate_total_expenses(player, config)


def charity_donation(player: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> int:
    """The charity rate of total income, rounded down."""
    return math.floor(round(calculate_total_income(player.statement) * config.charity_rate, 6))


def process_pay_day(player: PlayerState, count: int = 1, config: GameConfig = DEFAULT_CONFIG) -> PlayerState:
    """Add one monthly cash flow to cash per PayDay collected."""
    return replace(player, cash=player.cash + calculate_cash_flow(player, config) * count)


# ---------------------------------------------------------------------------
# Assets and family
# ---------------------------------------------------------------------------


def add_asset(player: PlayerState, asset: Asset) -> PlayerState:
    return _with_statement(player, assets=player.statement.assets + (asset,))


def remove_asset(player: PlayerState, asset_id: str) -> PlayerState:
    return _with_statement(
        player, assets=tuple(a for a in player.statement.assets if a.asset_id != asset_id)
    )


def replace_asset(player: PlayerState, asset: Asset) -> PlayerState:
    """Swap in an updated copy of an asset with the same id."""
    return _with_statement(
        player,
        assets=tuple(asset if a.asset_id == asset.asset_id else a for a in player.statement.assets),
    )


def find_stock_by_symbol(player: PlayerState, symbol: str) -> Optional[StockAsset]:
    return next(
        (a for a in player.statement.assets if isinstance(a, StockAsset) and a.symbol == symbol),
        None,
    )


def add_child(player: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> PlayerState:
    """Add a child unless the player already has the maximum."""
    expenses = player.statement.expenses
    if expenses.child_count >= config.max_children:
        return player
    return _with_statement(player, expenses=replace(expenses, child_count=expenses.child_count + 1))


# ---------------------------------------------------------------------------
# Loans
# ---------------------------------------------------------------------------


def _check_loan_increment(amount: int, config: GameConfig) -> None:
    if amount <= 0 or amount % config.loan_increment != 0:
        raise RuleViolation(f"Loan amounts must be positive multiples of {config.loan_increment}")


def take_bank_loan(player: PlayerState, amount: int, config: GameConfig = DEFAULT_CONFIG) -> PlayerState:
    """
    Borrow from the bank.

    Raises:
        RuleViolation: amount is not a positive multiple of the loan
            increment, or the new interest would push cash flow negative.
    """
    _check_loan_increment(amount, config)
    borrowed = replace(player, cash=player.cash + amount, bank_loan_amount=player.bank_loan_amount + amount)
    if calculate_cash_flow(borrowed, config) < 0:
        raise RuleViolation("Loan would make monthly cash flow negative")
    return borrowed


def max_bank_loan(player: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Largest voluntary loan that keeps monthly cash flow at or above zero."""
    headroom = calculate_total_income(player.statement) - _fixed_expenses(player.statement.expenses, config)
    if headroom <= 0:
        return 0
    # Interest on a loan L is ceil(L * rate / 12), so L may grow to headroom * 12 / rate
    ceiling = math.floor(round(headroom * 12 / config.loan_interest_rate, 6))
    amount = (ceiling - player.bank_loan_amount) // config.loan_increment * config.loan_increment
    return max(0, int(amount))


def pay_off_bank_loan(player: PlayerState, amount: int, config: GameConfig = DEFAULT_CONFIG) -> PlayerState:
    _check_loan_increment(amount, config)
    if amount > player.bank_loan_amount:
        raise RuleViolation("Cannot repay more than the outstanding bank loan")
    if amount > player.cash:
        raise RuleViolation("Not enough cash to repay the loan")
    return replace(player, cash=player.cash - amount, bank_loan_amount=player.bank_loan_amount - amount)


def pay_off_liability(player: PlayerState, name: str, amount: int) -> PlayerState:
    """
    Pay down a named liability.

    Paying the full balance removes the liability and zeroes the matching
    expense line; a partial payment only reduces the balance.
    """
    liability = player.statement.find_liability(name)
    if liability is None:
        raise RuleViolation(f"No liability named {name}")
    if amount <= 0:
        raise RuleViolation("Payment must be positive")
    if amount > player.cash:
        raise RuleViolation("Not enough cash for that payment")

    paid = min(amount, liability.balance)
    remaining = liability.balance - paid
    if remaining > 0:
        liabilities = tuple(
            replace(li, balance=remaining) if li.name == name else li for li in player.statement.liabilities
        )
        return replace(_with_statement(player, liabilities=liabilities), cash=player.cash - paid)

    liabilities = tuple(li for li in player.statement.liabilities if li.name != name)
    expenses = player.statement.expenses
    expense_field = _EXPENSE_FIELD_FOR_LIABILITY.get(name)
    if expense_field:
        expenses = replace(expenses, **{expense_field: 0})
    player = _with_statement(player, liabilities=liabilities, expenses=expenses)
    return replace(player, cash=player.cash - paid)


def auto_take_loan_if_needed(player: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> Tuple[PlayerState, int]:
    """
    Borrow the smallest loan increment multiple that brings cash back to zero or more.

    Forced loans ignore the cash flow limit that voluntary loans obey.

    Returns:
        Tuple of (player, amount_borrowed)
    """
    if player.cash >= 0:
        return player, 0
    increment = config.loan_increment
    amount = math.ceil(-player.cash / increment) * increment
    player = replace(player, cash=player.cash + amount, bank_loan_amount=player.bank_loan_amount + amount)
    return player, amount


# ---------------------------------------------------------------------------
# Bankruptcy
# ---------------------------------------------------------------------------


def execute_bankruptcy(player: PlayerState, config: GameConfig = DEFAULT_CONFIG) -> Tuple[PlayerState, bool]:
    """
    Liquidate a player who cannot meet their obligations.

    Properties and businesses sell for half their down payment, stocks are
    lost, and car loan and credit card debts are halved. A player whose cash
    flow is still negative afterwards is eliminated; anyone else sits out
    ``config.bankruptcy_turns`` turns.

    Returns:
        Tuple of (player, eliminated)
    """
    proceeds = sum(
        a.down_payment // 2
        for a in player.statement.assets
        if isinstance(a, (RealEstateAsset, BusinessAsset))
    )

    liabilities = []
    for liability in player.statement.liabilities:
        if liability.name in _HALVABLE_DEBTS:
            liability = replace(liability, balance=liability.balance // 2, payment=liability.payment // 2)
            if liability.balance <= 0:
                continue
        liabilities.append(liability)

    expenses = player.statement.expenses
    expenses = replace(
        expenses,
        car_loan_payment=expenses.car_loan_payment // 2,
        credit_card_payment=expenses.credit_card_payment // 2,
    )
    remaining = {li.name for li in liabilities}
    for name in _HALVABLE_DEBTS:
        if name not in remaining:
            expenses = replace(expenses, **{_EXPENSE_FIELD_FOR_LIABILITY[name]: 0})

    player = _with_statement(player, assets=(), liabilities=tuple(liabilities), expenses=expenses)
    player = replace(player, cash=player.cash + proceeds)

    if calculate_cash_flow(player, config) < 0:
        return replace(player, is_bankrupt=True), True
    return replace(player, bankrupt_turns_left=config.bankruptcy_turns), False
