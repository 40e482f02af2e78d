"""
Ludo rules engine.
Topology, legal-move generation, move execution and turn control for 2-4 players.
"""

from ludo_rules.board import BoardTopology
from ludo_rules.config import GameConfig
from ludo_rules.constants import BoardConstants, GameConstants
from ludo_rules.events import (
    Captured,
    DieRolled,
    EventLog,
    ExtraRollGranted,
    GameEvent,
    GameStarted,
    Moved,
    MoveRejected,
    PieceFinished,
    PlayerWon,
    RollRejected,
    TurnPassed,
)
from ludo_rules.exceptions import (
    ConfigurationError,
    IllegalMoveError,
    InvariantViolation,
    LudoError,
)
from ludo_rules.game import TurnController, TurnPhase
from ludo_rules.moves import Move, MoveKind, MoveResult
from ludo_rules.piece import Piece, PieceStatus
from ludo_rules.player import ALL_COLORS, Player, PlayerColor
from ludo_rules.rules import RuleEngine
from ludo_rules.state import GameState

__all__ = [
    "TurnController",
    "TurnPhase",
    "RuleEngine",
    "GameState",
    "BoardTopology",
    "Player",
    "PlayerColor",
    "ALL_COLORS",
    "Piece",
    "PieceStatus",
    "Move",
    "MoveKind",
    "MoveResult",
    "GameEvent",
    "EventLog",
    "GameStarted",
    "DieRolled",
    "TurnPassed",
    "Moved",
    "Captured",
    "PieceFinished",
    "PlayerWon",
    "ExtraRollGranted",
    "RollRejected",
    "MoveRejected",
    "LudoError",
    "IllegalMoveError",
    "InvariantViolation",
    "ConfigurationError",
    "GameConfig",
    "GameConstants",
    "BoardConstants",
]
