"""
Profession cards and starting player construction.
"""

from dataclasses import dataclass
from typing import Dict, List

from cashflow.player import (
    Expenses,
    FinancialStatement,
    Liability,
    LiabilityName,
    PlayerState,
)


@dataclass(frozen=True)
class ProfessionCard:
    """Starting salary, expenses, debts and savings for one profession."""

    title: str
    salary: int
    taxes: int
    home_mortgage_payment: int
    home_mortgage_balance: int
    school_loan_payment: int
    school_loan_balance: int
    car_loan_payment: int
    car_loan_balance: int
    credit_card_payment: int
    credit_card_balance: int
    other_expenses: int
    per_child_expense: int
    savings: int


PROFESSIONS: List[ProfessionCard] = [
    ProfessionCard("Airline Pilot", 9500, 2350, 1330, 143000, 0, 0, 300, 15000, 660, 22000, 2210, 480, 400),
    ProfessionCard("Business Manager", 4600, 910, 700, 75000, 60, 12000, 120, 6000, 90, 3000, 1000, 240, 400),
    ProfessionCard("Doctor", 13200, 3420, 1900, 202000, 750, 150000, 380, 19000, 270, 9000, 2880, 640, 400),
    ProfessionCard("Engineer", 4900, 1050, 700, 75000, 60, 12000, 140, 7000, 120, 4000, 1090, 250, 400),
    ProfessionCard("Janitor", 1600, 280, 200, 20000, 0, 0, 60, 4000, 60, 2000, 300, 70, 560),
    ProfessionCard("Lawyer", 7500, 1830, 1100, 115000, 390, 78000, 220, 11000, 180, 6000, 1650, 380, 400),
    ProfessionCard("Mechanic", 2000, 360, 300, 31000, 0, 0, 60, 3000, 60, 2000, 450, 110, 670),
    ProfessionCard("Nurse", 3100, 600, 400, 47000, 30, 6000, 100, 5000, 90, 3000, 710, 170, 480),
    ProfessionCard("Police Officer", 3000, 580, 400, 46000, 0, 0, 100, 5000, 60, 2000, 690, 160, 520),
    ProfessionCard("Secretary", 2500, 460, 400, 38000, 0, 0, 80, 4000, 60, 2000, 570, 140, 710),
    ProfessionCard("Teacher", 3300, 830, 500, 50000, 60, 12000, 100, 5000, 90, 3000, 760, 180, 400),
    ProfessionCard("Truck Driver", 2500, 460, 400, 38000, 0, 0, 80, 4000, 60, 2000, 570, 140, 750),
]

PROFESSIONS_BY_TITLE: Dict[str, ProfessionCard] = {p.title: p for p in PROFESSIONS}


def get_profession(title: str) -> ProfessionCard:
    """Look up a profession by title. Raises KeyError for unknown titles."""
    return PROFESSIONS_BY_TITLE[title]


def create_player_state(player_id: str, name: str, profession: ProfessionCard) -> PlayerState:
    """Build a fresh rat race player from a profession card."""
    expenses = Expenses(
        taxes=profession.taxes,
        home_mortgage_payment=profession.home_mortgage_payment,
        school_loan_payment=profession.school_loan_payment,
        car_loan_payment=profession.car_loan_payment,
        credit_card_payment=profession.credit_card_payment,
        other_expenses=profession.other_expenses,
        per_child_expense=profession.per_child_expense,
    )

    debts = [
        (LiabilityName.HOME_MORTGAGE, profession.home_mortgage_balance, profession.home_mortgage_payment),
        (LiabilityName.SCHOOL_LOAN, profession.school_loan_balance, profession.school_loan_payment),
        (LiabilityName.CAR_LOAN, profession.car_loan_balance, profession.car_loan_payment),
        (LiabilityName.CREDIT_CARD, profession.credit_card_balance, profession.credit_card_payment),
    ]
    liabilities = tuple(
        Liability(name=name_, balance=balance, payment=payment)
        for name_, balance, payment in debts
        if balance > 0
    )

    return PlayerState(
        player_id=player_id,
        name=name,
        profession=profession.title,
        statement=FinancialStatement(
            salary=profession.salary,
            expenses=expenses,
            liabilities=liabilities,
        ),
        cash=profession.savings,
    )
