"""
Player representation for Ludo game.
Each player has a color and controls a fixed set of pieces.
"""

from enum import Enum
from typing import Dict, List

from .constants import GameConstants
from .piece import Piece


class PlayerColor(Enum):
    """Available player colors, in clockwise turn order."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"


ALL_COLORS: List[PlayerColor] = list(PlayerColor)


class Player:
    """
    Represents a player in the Ludo game.
    """

    def __init__(
        self, color: PlayerColor, pieces_per_player: int = GameConstants.PIECES_PER_PLAYER
    ):
        """
        Initialize a player with their color and pieces at base.

        Args:
            color: Player's color
            pieces_per_player: Number of pieces to create
        """
        self.color = color
        self.pieces: List[Piece] = [
            Piece(color=color, ordinal=i) for i in range(pieces_per_player)
        ]

    @property
    def finished_count(self) -> int:
        """Number of pieces that have reached the center."""
        return sum(1 for piece in self.pieces if piece.is_finished())

    def has_won(self) -> bool:
        """Check if every piece of this player has finished."""
        return self.finished_count == len(self.pieces)

    def has_pieces_at_base(self) -> bool:
        return any(piece.is_at_base() for piece in self.pieces)

    def pieces_on_track_at(self, position: int) -> List[Piece]:
        return [
            piece
            for piece in self.pieces
            if piece.is_on_track() and piece.track_position == position
        ]

    def to_dict(self) -> Dict:
        """
        Get the current state of this player as a plain dictionary.

        Returns:
            Dict: Player's color, counts and every piece's status/position
        """
        return {
            "color": self.color.value,
            "pieces": [piece.to_dict() for piece in self.pieces],
            "pieces_at_base": sum(1 for p in self.pieces if p.is_at_base()),
            "pieces_on_track": sum(1 for p in self.pieces if p.is_on_track()),
            "pieces_in_home_column": sum(
                1 for p in self.pieces if p.is_in_home_column()
            ),
            "finished_count": self.finished_count,
            "has_won": self.has_won(),
        }

    def __str__(self) -> str:
        return f"Player({self.color.value}, pieces: {[str(p) for p in self.pieces]})"
