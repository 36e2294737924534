"""
Engine settings using pydantic-settings.

Environment variables (prefix: CASHFLOW_):
    CASHFLOW_LOG_LEVEL    - logging level for engine and session loggers (default: INFO)
    CASHFLOW_SEED         - optional fixed shuffle seed for new games
    CASHFLOW_MIN_PLAYERS  - minimum players a session accepts (default: 2)
    CASHFLOW_MAX_PLAYERS  - maximum players a session accepts (default: 6)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cashflow.config import GameConfig


class EngineSettings(BaseSettings):
    """Runtime configuration for sessions hosting the rules engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="CASHFLOW_",
    )

    log_level: str = Field(default="INFO", description="Logging level name.")
    seed: Optional[int] = Field(
        default=None,
        description="Fixed shuffle seed. Leave unset for a fresh seed per game.",
    )
    min_players: int = Field(default=2, ge=1, le=6)
    max_players: int = Field(default=6, ge=1, le=6)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        """Accept any case and reject names the logging module does not know."""
        if not value:
            return "INFO"
        name = str(value).upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {value}")
        return name

    @field_validator("max_players")
    @classmethod
    def check_player_range(cls, value: int, info) -> int:
        min_players = info.data.get("min_players", 1)
        if value < min_players:
            raise ValueError("max_players must be >= min_players")
        return value

    def game_config(self) -> GameConfig:
        """Build the per-game configuration these settings imply."""
        return GameConfig(seed=self.seed, max_players=self.max_players)


@lru_cache
def get_settings() -> EngineSettings:
    """Return cached engine settings instance."""
    return EngineSettings()


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    """Apply the configured level to the package logger."""
    settings = settings or get_settings()
    logging.getLogger("cashflow").setLevel(settings.log_level)
