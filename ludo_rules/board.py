"""
Board topology for Ludo game.
Immutable description of the track, start squares, safe squares and home columns.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterable, List, Mapping, Optional

from .constants import BoardConstants, GameConstants
from .exceptions import ConfigurationError
from .player import ALL_COLORS, PlayerColor


@dataclass(frozen=True)
class BoardTopology:
    """
    Read-only layout shared by every component of a game.

    Safe squares are every color's start square plus the star squares.
    Home entries default to two squares behind each start.
    """

    start_indexes: Mapping[PlayerColor, int]
    star_indexes: FrozenSet[int] = frozenset(BoardConstants.STAR_SQUARES)
    track_length: int = GameConstants.TRACK_LENGTH
    home_column_length: int = GameConstants.HOME_COLUMN_LENGTH
    pieces_per_player: int = GameConstants.PIECES_PER_PLAYER
    blockade_size: int = GameConstants.BLOCKADE_SIZE
    entry_indexes: Optional[Mapping[PlayerColor, int]] = None
    safe_indexes: FrozenSet[int] = field(init=False)

    def __post_init__(self):
        if self.track_length <= 0:
            raise ConfigurationError(f"track_length must be positive, got {self.track_length}")
        if self.home_column_length <= 0:
            raise ConfigurationError(
                f"home_column_length must be positive, got {self.home_column_length}"
            )
        if self.pieces_per_player <= 0:
            raise ConfigurationError(
                f"pieces_per_player must be positive, got {self.pieces_per_player}"
            )
        if self.blockade_size <= 0:
            raise ConfigurationError(
                f"blockade_size must be positive, got {self.blockade_size}"
            )
        starts = dict(self.start_indexes)
        self._check_indexes("start", starts.values())
        self._check_indexes("star", self.star_indexes)
        if self.entry_indexes is None:
            entries = {
                color: BoardConstants.home_entry(start, self.track_length)
                for color, start in starts.items()
            }
        else:
            entries = dict(self.entry_indexes)
            if set(entries) != set(starts):
                raise ConfigurationError("entry_indexes must cover the same colors as start_indexes")
            self._check_indexes("entry", entries.values())

        # Frozen dataclass: assign derived fields through object.__setattr__
        object.__setattr__(self, "start_indexes", MappingProxyType(starts))
        object.__setattr__(self, "entry_indexes", MappingProxyType(entries))
        object.__setattr__(self, "star_indexes", frozenset(self.star_indexes))
        object.__setattr__(
            self, "safe_indexes", frozenset(self.star_indexes) | frozenset(starts.values())
        )

    def _check_indexes(self, label: str, indexes: Iterable[int]) -> None:
        for index in indexes:
            if not 0 <= index < self.track_length:
                raise ConfigurationError(
                    f"{label} index {index} outside track [0, {self.track_length})"
                )

    @classmethod
    def standard(cls) -> "BoardTopology":
        """The classic four-color board."""
        return cls(
            start_indexes={
                color: BoardConstants.START_POSITIONS[color.value] for color in ALL_COLORS
            }
        )

    @property
    def colors(self) -> List[PlayerColor]:
        return list(self.start_indexes)

    @property
    def finish_slot(self) -> int:
        """Virtual home slot meaning the piece has finished."""
        return self.home_column_length

    def start_index(self, color: PlayerColor) -> int:
        return self.start_indexes[color]

    def entry_index(self, color: PlayerColor) -> int:
        return self.entry_indexes[color]

    def distance(self, start: int, target: int) -> int:
        """Forward distance along the circular track."""
        return (target - start + self.track_length) % self.track_length

    def advance(self, position: int, steps: int) -> int:
        return (position + steps) % self.track_length

    def is_safe(self, position: int) -> bool:
        """Check if a track square is immune to capture."""
        return position in self.safe_indexes
