"""
Authoritative game sessions.

A ``GameSession`` is the single writer for one match: it serializes
actions behind a lock, rolls the dice itself, and only ever hands the
outside world a sanitized state.
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from cashflow.actions import Action, ActionType, RollDice
from cashflow.config import GameConfig
from cashflow.exceptions import GameNotFoundError, ValidationError
from cashflow.game import ActionResult, apply_action, create_game
from cashflow.player import Player
from cashflow.professions import PROFESSIONS, ProfessionCard
from cashflow.rules import get_valid_actions
from cashflow.schemas import parse_action
from cashflow.settings import EngineSettings, get_settings
from cashflow.snapshot import sanitize_state, serialize_snapshot
from cashflow.state import GameState, TurnPhase

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the state of one match and applies actions to it one at a time."""

    def __init__(
        self,
        players: Sequence[Player],
        professions: Optional[Sequence[ProfessionCard]] = None,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self._lock = threading.Lock()
        self._rng = rng or random.Random()
        if professions is None:
            professions = self._rng.sample(PROFESSIONS, min(len(players), len(PROFESSIONS)))
        self._state = create_game(players, professions, config)
        logger.info(f"Session started for game {self._state.game_id}")

    @classmethod
    def from_settings(
        cls,
        players: Sequence[Player],
        settings: Optional[EngineSettings] = None,
        rng: Optional[random.Random] = None,
    ) -> "GameSession":
        """Create a session whose player limits and seed come from engine settings."""
        settings = settings or get_settings()
        if len(players) < settings.min_players:
            raise ValidationError(f"At least {settings.min_players} players required, got {len(players)}")
        return cls(players, config=settings.game_config(), rng=rng)

    @property
    def game_id(self) -> str:
        return self._state.game_id

    @property
    def state(self) -> GameState:
        """Full server-side state, deck order included. Never send this to clients."""
        return self._state

    @property
    def is_over(self) -> bool:
        return self._state.turn_phase == TurnPhase.GAME_OVER

    def roll_dice(self) -> tuple:
        return (self._rng.randint(1, 6), self._rng.randint(1, 6))

    def submit(self, action: Union[Action, Mapping[str, Any]]) -> ActionResult:
        """
        Apply one action from a client.

        Raw dicts are parsed with the wire schema first. Dice in a roll are
        always replaced by the session's own roll.

        Raises:
            ValidationError: the payload could not be parsed
        """
        if not isinstance(action, Action):
            action = parse_action(dict(action))

        with self._lock:
            if isinstance(action, RollDice):
                action = replace(action, dice_values=self.roll_dice())
            result = apply_action(self._state, action)
            self._state = result.state

        status = "accepted" if result.accepted else "rejected"
        logger.debug(f"Game {self.game_id}: {status} {action.action_type.value} by {action.player_id}")
        return result

    def get_sanitized_state(self) -> GameState:
        with self._lock:
            return sanitize_state(self._state)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return serialize_snapshot(self._state)

    def valid_actions(self, player_id: Optional[str] = None) -> List[ActionType]:
        """
        Actions the game accepts next.

        With ``player_id``, only the actions that player may take right now:
        the current player's, or the buyer's while a deal offer is pending.
        """
        with self._lock:
            state = self._state
        actions = get_valid_actions(state)
        if player_id is None or not actions:
            return actions

        pending = state.pending_player_deal
        if state.turn_phase == TurnPhase.WAITING_FOR_DEAL_RESPONSE and pending is not None:
            return actions if pending.buyer_id == player_id else []
        return actions if state.current_player.player_id == player_id else []


class SessionRegistry:
    """In-memory registry of running sessions."""

    def __init__(self):
        self._sessions: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create(self, players: Sequence[Player], **kwargs: Any) -> GameSession:
        session = GameSession(players, **kwargs)
        with self._lock:
            self._sessions[session.game_id] = session
        return session

    def get(self, game_id: str) -> GameSession:
        session = self._sessions.get(game_id)
        if session is None:
            raise GameNotFoundError(f"Game {game_id} not found")
        return session

    def remove(self, game_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(game_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
