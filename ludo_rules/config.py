"""
Runtime settings for autoplay, read from arguments or the environment.
"""

from dataclasses import dataclass
import os
from typing import Optional

from .constants import GameConstants
from .exceptions import ConfigurationError

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class GameConfig:
    """Settings for running games outside of tests."""

    player_count: int = GameConstants.MAX_PLAYERS
    seed: Optional[int] = None
    max_turns: int = 1000  # safety cap for autoplay
    log_level: str = "INFO"

    def __post_init__(self):
        if not GameConstants.MIN_PLAYERS <= self.player_count <= GameConstants.MAX_PLAYERS:
            raise ConfigurationError(
                f"player_count must be between {GameConstants.MIN_PLAYERS} and "
                f"{GameConstants.MAX_PLAYERS}, got {self.player_count}"
            )
        if self.max_turns <= 0:
            raise ConfigurationError(f"max_turns must be positive, got {self.max_turns}")
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(f"unknown log level '{self.log_level}'")

    @classmethod
    def from_env(cls) -> "GameConfig":
        """Create config from environment variables with proper type conversion."""
        seed = os.getenv("LUDO_SEED")
        return cls(
            player_count=int(os.getenv("LUDO_PLAYERS", str(GameConstants.MAX_PLAYERS))),
            seed=int(seed) if seed not in (None, "") else None,
            max_turns=int(os.getenv("LUDO_MAX_TURNS", "1000")),
            log_level=os.getenv("LUDO_LOG_LEVEL", "INFO"),
        )
