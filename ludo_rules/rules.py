"""
Rule engine for Ludo.
Generates the legal moves for a die value and applies a chosen move,
resolving captures and finishing.
"""

from typing import List, Optional

from loguru import logger

from .constants import GameConstants
from .events import Captured, Moved, PieceFinished, PlayerWon
from .exceptions import IllegalMoveError
from .moves import Move, MoveKind, MoveResult
from .piece import Piece
from .player import Player, PlayerColor
from .state import GameState


class RuleEngine:
    """Stateless rules over a ``GameState``; the layout comes from ``state.topology``."""

    # --- Legal move generation ---
    def legal_moves(self, state: GameState, die: Optional[int]) -> List[Move]:
        """
        All moves available to the current player for a die value.

        Args:
            state: Game to inspect
            die: Value rolled (1-6); ``None`` yields no moves

        Returns:
            List[Move]: One entry per movable piece, in piece order
        """
        if die is None or state.is_over:
            return []
        player = state.current_player
        moves = []
        for piece in player.pieces:
            move = self._candidate_move(state, player, piece, die)
            if move is not None:
                moves.append(move)
        logger.debug(
            f"{player.color.value} has {len(moves)} legal move(s) for die {die}"
        )
        return moves

    def _candidate_move(
        self, state: GameState, player: Player, piece: Piece, die: int
    ) -> Optional[Move]:
        topology = state.topology
        color = player.color

        if piece.is_at_base():
            if die != GameConstants.EXIT_BASE_ROLL:
                return None
            start = topology.start_index(color)
            if self._blocked_by_own_stack(state, start, color):
                return None
            return Move(piece.piece_id, color, MoveKind.ENTER, start, die)

        if piece.is_on_track():
            to_entry = topology.distance(piece.track_position, topology.entry_index(color))
            if die > to_entry:
                slot = die - to_entry - 1
                if slot >= topology.home_column_length:
                    return None
                # Home column slots are never blocked, even by own pieces
                return Move(piece.piece_id, color, MoveKind.TO_HOME_COLUMN, slot, die)
            target = topology.advance(piece.track_position, die)
            if self._blocked_by_own_stack(state, target, color):
                return None
            return Move(piece.piece_id, color, MoveKind.MOVE, target, die)

        if piece.is_in_home_column():
            target = piece.home_slot + die
            if target == topology.finish_slot:
                return Move(piece.piece_id, color, MoveKind.FINISH, target, die)
            if target < topology.finish_slot:
                return Move(piece.piece_id, color, MoveKind.HOME_STEP, target, die)
            return None

        return None

    def _blocked_by_own_stack(
        self, state: GameState, position: int, color: PlayerColor
    ) -> bool:
        own = [piece for piece in state.pieces_at(position) if piece.color == color]
        return len(own) >= state.topology.blockade_size

    # --- Move execution ---
    def apply_move(self, state: GameState, move: Move) -> MoveResult:
        """
        Execute a legal move and update the state.

        Args:
            state: Game to mutate
            move: A member of ``legal_moves(state, state.pending_die)``

        Returns:
            MoveResult: Captured piece ids, finish and winner information

        Raises:
            IllegalMoveError: If the move is not currently legal
            InvariantViolation: If the resulting state is inconsistent
        """
        if move not in self.legal_moves(state, state.pending_die):
            raise IllegalMoveError(
                f"{move} is not legal for die {state.pending_die} "
                f"(current player {state.current_player.color.value})"
            )

        piece = state.get_piece(move.piece_id)
        player = state.player_for(move.color)
        result = MoveResult(move=move)

        if move.kind in (MoveKind.ENTER, MoveKind.MOVE):
            piece.place_on_track(move.destination)
            state.record(Moved(piece.piece_id, move.kind.value, move.destination))
            result.captured = [
                p.piece_id
                for p in self.resolve_capture(state, move.destination, move.color)
            ]
        elif move.kind in (MoveKind.TO_HOME_COLUMN, MoveKind.HOME_STEP):
            piece.enter_home_column(move.destination)
            state.record(Moved(piece.piece_id, move.kind.value, move.destination))
        elif move.kind == MoveKind.FINISH:
            piece.finish()
            state.record(Moved(piece.piece_id, move.kind.value, move.destination))
            result.finished = True
            logger.info(
                f"{player.color.value} finished {piece.piece_id} "
                f"({player.finished_count}/{len(player.pieces)})"
            )
            state.record(PieceFinished(piece.piece_id, player.finished_count))
            if player.has_won():
                state.is_over = True
                state.winner = player.color
                result.winner = player.color
                logger.info(f"{player.color.value} wins")
                state.record(PlayerWon(player.color.value))

        state.check_invariants(where=f"apply_move {move}")
        return result

    def resolve_capture(
        self, state: GameState, position: int, mover_color: PlayerColor
    ) -> List[Piece]:
        """
        Send every opposing piece on a non-safe square back to base.

        Returns:
            List[Piece]: The captured pieces (empty on safe squares)
        """
        if state.topology.is_safe(position):
            return []
        captured = [
            piece for piece in state.pieces_at(position) if piece.color != mover_color
        ]
        if not captured:
            return []
        for piece in captured:
            piece.send_to_base()
        logger.debug(
            f"{mover_color.value} captured {[p.piece_id for p in captured]} at {position}"
        )
        state.record(Captured(mover_color.value, len(captured), position))
        return captured
