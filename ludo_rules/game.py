"""
Turn controller for Ludo.
Drives a game through rolls and move choices, granting extra rolls on a 6,
auto-passing when nothing can move and stopping once a player has won.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional

from loguru import logger

from .board import BoardTopology
from .constants import GameConstants
from .events import (
    DieRolled,
    EventHandler,
    ExtraRollGranted,
    GameStarted,
    MoveRejected,
    RollRejected,
    TurnPassed,
)
from .moves import Move, MoveResult
from .rules import RuleEngine
from .state import GameState


class TurnPhase(Enum):
    """States of the turn state machine."""

    AWAITING_ROLL = "awaiting_roll"
    AWAITING_MOVE_CHOICE = "awaiting_move_choice"
    GAME_OVER = "game_over"


class TurnController:
    """
    Owns a single ``GameState`` and accepts the only legal call sequence:
    ``roll`` then ``choose`` (unless the roll auto-passes).

    Die values are supplied by the caller.
    """

    def __init__(
        self,
        player_count: int = GameConstants.MAX_PLAYERS,
        topology: Optional[BoardTopology] = None,
    ):
        self.topology = topology or BoardTopology.standard()
        self.engine = RuleEngine()
        self._handlers: List[EventHandler] = []
        self.new_game(player_count)

    # --- Inbound calls ---
    def new_game(self, player_count: int = GameConstants.MAX_PLAYERS) -> GameState:
        """Discard the current game and start a fresh one; subscriptions survive."""
        self.state = GameState(self.topology, player_count)
        for handler in self._handlers:
            self.state.events.subscribe(handler)
        self.phase = TurnPhase.AWAITING_ROLL
        self._legal_moves: List[Move] = []
        logger.info(f"New game with {player_count} players")
        self.state.record(GameStarted(player_count))
        self.state.events.flush()
        return self.state

    def roll(self, value: int) -> List[Move]:
        """
        Feed a die value to the current player.

        Subscribers are notified only after the roll has been fully handled.

        Args:
            value: Die value in [1, 6], produced by the caller

        Returns:
            List[Move]: Moves now available to the player; empty if the turn
                passed or the roll was ignored
        """
        if self.phase == TurnPhase.GAME_OVER:
            logger.warning(f"roll({value}) ignored: game is over")
            return []
        if not GameConstants.DICE_MIN <= value <= GameConstants.DICE_MAX:
            raise ValueError(
                f"die value must be in [{GameConstants.DICE_MIN}, "
                f"{GameConstants.DICE_MAX}], got {value}"
            )
        events = self.state.events
        try:
            return self._roll(value)
        finally:
            events.flush()

    def _roll(self, value: int) -> List[Move]:
        state = self.state
        color = state.current_player.color.value

        if self.phase == TurnPhase.AWAITING_MOVE_CHOICE:
            logger.warning(f"{color} tried to roll again before moving")
            state.record(RollRejected(color, "You already rolled. Move a piece."))
            return list(self._legal_moves)

        state.pending_die = value
        state.record(DieRolled(color, value))
        moves = self.engine.legal_moves(state, value)
        if not moves:
            logger.info(f"{color} has no legal move for {value}, turn passes")
            state.pending_die = None
            state.advance_turn()
            state.record(TurnPassed(color, value))
            return []

        self._legal_moves = moves
        self.phase = TurnPhase.AWAITING_MOVE_CHOICE
        return list(moves)

    def choose(self, piece_id: str) -> Optional[MoveResult]:
        """
        Move the given piece with the pending die.

        Subscribers are notified only after the move and the turn change
        are complete.

        Returns:
            Optional[MoveResult]: ``None`` if the choice was rejected
        """
        if self.phase == TurnPhase.GAME_OVER:
            logger.warning(f"choose({piece_id}) ignored: game is over")
            return None
        events = self.state.events
        try:
            return self._choose(piece_id)
        finally:
            events.flush()

    def _choose(self, piece_id: str) -> Optional[MoveResult]:
        state = self.state
        if self.phase == TurnPhase.AWAITING_ROLL:
            logger.warning(f"choose({piece_id}) before rolling")
            state.record(MoveRejected(piece_id, "Roll the die first."))
            return None

        move = next((m for m in self._legal_moves if m.piece_id == piece_id), None)
        if move is None:
            logger.warning(f"{piece_id} is not a legal move for die {state.pending_die}")
            state.record(MoveRejected(piece_id, "That piece can't move."))
            return None

        result = self.engine.apply_move(state, move)
        state.pending_die = None
        self._legal_moves = []

        if state.is_over:
            self.phase = TurnPhase.GAME_OVER
        elif move.die == GameConstants.EXTRA_ROLL_VALUE:
            result.extra_roll = True
            self.phase = TurnPhase.AWAITING_ROLL
            state.record(ExtraRollGranted(move.color.value))
        else:
            state.advance_turn()
            self.phase = TurnPhase.AWAITING_ROLL
        return result

    # --- Queries ---
    def get_legal_moves(self) -> List[Dict]:
        """Legal moves for the pending die, as dictionaries."""
        return [move.to_dict() for move in self._legal_moves]

    def get_state(self) -> Dict:
        """Read-only snapshot of the game, including the turn phase."""
        snapshot = self.state.snapshot()
        snapshot["phase"] = self.phase.value
        return snapshot

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """
        Receive every event of this and any later game.

        Returns:
            Callable[[], None]: Removes the handler again
        """
        self._handlers.append(handler)
        self.state.events.subscribe(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)
            self.state.events.unsubscribe(handler)

        return unsubscribe

    @property
    def is_over(self) -> bool:
        return self.phase == TurnPhase.GAME_OVER
