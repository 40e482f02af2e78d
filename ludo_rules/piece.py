"""
Piece representation for Ludo game.
Each player owns a fixed set of pieces that travel from base to the finish.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .exceptions import InvariantViolation

if TYPE_CHECKING:
    from .player import PlayerColor


class PieceStatus(Enum):
    """Possible states of a piece."""

    AT_BASE = "at_base"  # Waiting in the color's base
    ON_TRACK = "on_track"  # On the shared 52-square track
    IN_HOME_COLUMN = "in_home_column"  # In the color's private home column
    FINISHED = "finished"  # Reached the center


@dataclass
class Piece:
    """
    A single piece, identified by its color and ordinal.

    Exactly one of ``track_position``/``home_slot`` is set while the piece is
    on the board; both are ``None`` at base and once finished.
    """

    color: "PlayerColor"
    ordinal: int
    status: PieceStatus = PieceStatus.AT_BASE
    track_position: Optional[int] = None
    home_slot: Optional[int] = None

    @property
    def piece_id(self) -> str:
        return f"{self.color.value}-{self.ordinal}"

    def is_at_base(self) -> bool:
        return self.status == PieceStatus.AT_BASE

    def is_on_track(self) -> bool:
        return self.status == PieceStatus.ON_TRACK

    def is_in_home_column(self) -> bool:
        return self.status == PieceStatus.IN_HOME_COLUMN

    def is_finished(self) -> bool:
        return self.status == PieceStatus.FINISHED

    # --- Transitions ---
    def place_on_track(self, position: int) -> None:
        self.status = PieceStatus.ON_TRACK
        self.track_position = position
        self.home_slot = None

    def enter_home_column(self, slot: int) -> None:
        self.status = PieceStatus.IN_HOME_COLUMN
        self.track_position = None
        self.home_slot = slot

    def finish(self) -> None:
        self.status = PieceStatus.FINISHED
        self.track_position = None
        self.home_slot = None

    def send_to_base(self) -> None:
        self.status = PieceStatus.AT_BASE
        self.track_position = None
        self.home_slot = None

    def check_consistency(self) -> None:
        """Raise InvariantViolation if status and position fields disagree."""
        has_track = self.track_position is not None
        has_slot = self.home_slot is not None
        expected = {
            PieceStatus.AT_BASE: (False, False),
            PieceStatus.ON_TRACK: (True, False),
            PieceStatus.IN_HOME_COLUMN: (False, True),
            PieceStatus.FINISHED: (False, False),
        }[self.status]
        if (has_track, has_slot) != expected:
            raise InvariantViolation(
                f"{self.piece_id} is {self.status.value} with "
                f"track_position={self.track_position}, home_slot={self.home_slot}"
            )

    def to_dict(self) -> dict:
        """Convert piece to a plain dictionary for the presentation layer."""
        return {
            "piece_id": self.piece_id,
            "color": self.color.value,
            "ordinal": self.ordinal,
            "status": self.status.value,
            "track_position": self.track_position,
            "home_slot": self.home_slot,
        }

    def __str__(self) -> str:
        if self.is_on_track():
            where = f"track {self.track_position}"
        elif self.is_in_home_column():
            where = f"home slot {self.home_slot}"
        else:
            where = self.status.value
        return f"Piece({self.piece_id}: {where})"
