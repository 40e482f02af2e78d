"""
Mutable game state: players, turn pointer, pending die and event log.
"""

from typing import Dict, List, Optional

from .board import BoardTopology
from .constants import GameConstants
from .events import EventLog, GameEvent
from .exceptions import ConfigurationError, InvariantViolation
from .piece import Piece
from .player import Player, PlayerColor


class GameState:
    """
    Entities of a single game.

    Players are kept in turn order; the rule engine and turn controller are
    the only code expected to mutate them.
    """

    def __init__(self, topology: BoardTopology, player_count: int):
        if not GameConstants.MIN_PLAYERS <= player_count <= len(topology.colors):
            raise ConfigurationError(
                f"player_count must be between {GameConstants.MIN_PLAYERS} and "
                f"{len(topology.colors)}, got {player_count}"
            )
        self.topology = topology
        self.players: List[Player] = [
            Player(color, topology.pieces_per_player)
            for color in topology.colors[:player_count]
        ]
        self.current_player_index: int = 0
        self.pending_die: Optional[int] = None
        self.is_over: bool = False
        self.winner: Optional[PlayerColor] = None
        self.events = EventLog()
        self._pieces: Dict[str, Piece] = {
            piece.piece_id: piece for player in self.players for piece in player.pieces
        }

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def record(self, event: GameEvent) -> None:
        self.events.append(event)

    def get_piece(self, piece_id: str) -> Optional[Piece]:
        return self._pieces.get(piece_id)

    def player_for(self, color: PlayerColor) -> Player:
        for player in self.players:
            if player.color == color:
                return player
        raise KeyError(color)

    def pieces_at(self, position: int) -> List[Piece]:
        """All pieces currently on the given track square."""
        return [
            piece
            for piece in self._pieces.values()
            if piece.is_on_track() and piece.track_position == position
        ]

    def advance_turn(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % len(self.players)

    def check_invariants(self, where: str = "") -> None:
        """
        Verify every piece and player is internally consistent.

        Raises:
            InvariantViolation: If a piece's status and position disagree or the
                over/winner flags do not match the finished counts.
        """
        track_length = self.topology.track_length
        for piece in self._pieces.values():
            piece.check_consistency()
            if piece.is_on_track() and not 0 <= piece.track_position < track_length:
                raise InvariantViolation(
                    f"[{where}] {piece.piece_id} off track at {piece.track_position}"
                )
            if piece.is_in_home_column() and not (
                0 <= piece.home_slot < self.topology.home_column_length
            ):
                raise InvariantViolation(
                    f"[{where}] {piece.piece_id} outside home column at {piece.home_slot}"
                )
        winners = [player.color for player in self.players if player.has_won()]
        if self.is_over != bool(winners):
            raise InvariantViolation(
                f"[{where}] is_over={self.is_over} but winners={winners}"
            )
        if self.winner is not None and self.winner not in winners:
            raise InvariantViolation(
                f"[{where}] recorded winner {self.winner} has not finished"
            )

    def snapshot(self) -> Dict:
        """Plain-dictionary copy of the state for read-only consumers."""
        return {
            "players": [player.to_dict() for player in self.players],
            "current_player_index": self.current_player_index,
            "current_color": self.current_player.color.value,
            "pending_die": self.pending_die,
            "is_over": self.is_over,
            "winner": self.winner.value if self.winner else None,
        }
