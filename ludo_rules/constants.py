"""
Constants and configuration values for the Ludo rules engine.
Centralized location for the standard game rules and board layout.
"""

from typing import Dict, Set


class GameConstants:
    """Core game constants and rules."""

    # Board dimensions
    TRACK_LENGTH = 52
    HOME_COLUMN_LENGTH = 5  # slots 0..4, slot 5 means finished
    PIECES_PER_PLAYER = 4
    MIN_PLAYERS = 2
    MAX_PLAYERS = 4

    # Dice
    DICE_MIN = 1
    DICE_MAX = 6
    EXIT_BASE_ROLL = 6
    EXTRA_ROLL_VALUE = 6

    # Two own pieces on a square stop a third one from landing there
    BLOCKADE_SIZE = 2


class BoardConstants:
    """Board layout and position constants."""

    # Star squares (safe for all players)
    STAR_SQUARES: Set[int] = {8, 21, 34, 47}

    # Square each color enters on when leaving base
    START_POSITIONS: Dict[str, int] = {
        "red": 0,
        "yellow": 13,
        "green": 26,
        "blue": 39,
    }

    # A color leaves the track after the square two behind its start
    HOME_ENTRY_OFFSET = 2

    @classmethod
    def home_entry(cls, start: int, track_length: int = GameConstants.TRACK_LENGTH) -> int:
        """Last track square before a color diverts into its home column."""
        return (start - cls.HOME_ENTRY_OFFSET) % track_length

    @classmethod
    def get_all_safe_squares(cls) -> Set[int]:
        """Get all safe squares on the board."""
        all_safe = cls.STAR_SQUARES.copy()
        all_safe.update(cls.START_POSITIONS.values())
        return all_safe
