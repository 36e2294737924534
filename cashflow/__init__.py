"""
CASHFLOW Rules Engine

A deterministic, immutable implementation of the CASHFLOW board game rules.
"""

from .actions import ACTION_CLASSES, Action, ActionType
from .config import GameConfig
from .exceptions import CashflowError, GameNotFoundError, InvalidActionError, RuleViolation, ValidationError
from .game import ActionResult, apply_action, create_game, process_action
from .player import Player, PlayerState
from .professions import PROFESSIONS, get_profession
from .rules import get_valid_actions, validate_action
from .session import GameSession, SessionRegistry
from .snapshot import sanitize_state, serialize_snapshot
from .state import GameState, TurnPhase

__all__ = [
    "ACTION_CLASSES",
    "Action",
    "ActionType",
    "ActionResult",
    "GameConfig",
    "CashflowError",
    "GameNotFoundError",
    "InvalidActionError",
    "RuleViolation",
    "ValidationError",
    "apply_action",
    "create_game",
    "process_action",
    "Player",
    "PlayerState",
    "PROFESSIONS",
    "get_profession",
    "get_valid_actions",
    "validate_action",
    "GameSession",
    "SessionRegistry",
    "sanitize_state",
    "serialize_snapshot",
    "GameState",
    "TurnPhase",
]
