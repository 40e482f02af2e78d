"""
Move types produced by the rule engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .player import PlayerColor


class MoveKind(Enum):
    """
    Enumeration of possible move kinds.

    Attributes:
        ENTER: Leave base onto the color's start square (needs a 6).
        MOVE: Advance along the shared track.
        TO_HOME_COLUMN: Leave the track for the color's home column.
        HOME_STEP: Advance inside the home column.
        FINISH: Reach the center with an exact count.
    """

    ENTER = "enter"
    MOVE = "move"
    TO_HOME_COLUMN = "to_home_column"
    HOME_STEP = "home_step"
    FINISH = "finish"


_TRACK_KINDS = (MoveKind.ENTER, MoveKind.MOVE)
_HOME_KINDS = (MoveKind.TO_HOME_COLUMN, MoveKind.HOME_STEP)


@dataclass(frozen=True)
class Move:
    """
    A single candidate move for one piece.

    Attributes:
        piece_id (str): Id of the moving piece, e.g. ``"red-0"``.
        color (PlayerColor): Owner of the piece.
        kind (MoveKind): What the move does.
        destination (int): Track index for ENTER/MOVE, home slot for
            TO_HOME_COLUMN/HOME_STEP, the finish slot for FINISH.
        die (int): Die value consumed by the move.
    """

    piece_id: str
    color: PlayerColor
    kind: MoveKind
    destination: int
    die: int

    @property
    def lands_on_track(self) -> bool:
        return self.kind in _TRACK_KINDS

    def destination_descriptor(self) -> Dict:
        if self.kind in _TRACK_KINDS:
            area = "track"
        elif self.kind in _HOME_KINDS:
            area = "home_column"
        else:
            area = "finished"
        return {"area": area, "index": self.destination}

    def to_dict(self) -> Dict:
        return {
            "piece_id": self.piece_id,
            "move_kind": self.kind.value,
            "destination": self.destination_descriptor(),
        }

    def __str__(self) -> str:
        return f"{self.piece_id} {self.kind.value} -> {self.destination} ({self.die})"


@dataclass
class MoveResult:
    """Outcome of applying a move."""

    move: Move
    captured: List[str] = field(default_factory=list)
    finished: bool = False
    winner: Optional[PlayerColor] = None
    extra_roll: bool = False

    def to_dict(self) -> Dict:
        return {
            "move": self.move.to_dict(),
            "captured": list(self.captured),
            "finished": self.finished,
            "winner": self.winner.value if self.winner else None,
            "extra_roll": self.extra_roll,
        }
