"""
Exception hierarchy for the CASHFLOW engine and its session layer.

The rules engine never lets these escape `process_action`: a rejected
action degrades to an unchanged state. They surface only from game setup
and from parsing wire payloads.
"""


class CashflowError(Exception):
    """Base exception for all game-related errors."""


class GameNotFoundError(CashflowError):
    """Game does not exist."""


class InvalidActionError(CashflowError):
    """Action is not legal in the current state."""


class RuleViolation(InvalidActionError):
    """A legal action that breaks a domain rule (funds, loan limits, ...)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ValidationError(CashflowError):
    """Input validation failed."""
