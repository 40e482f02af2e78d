import unittest

from ludo_rules.events import (
    DieRolled,
    ExtraRollGranted,
    GameStarted,
    MoveRejected,
    Moved,
    PlayerWon,
    RollRejected,
    TurnPassed,
)
from ludo_rules.exceptions import ConfigurationError
from ludo_rules.game import TurnController, TurnPhase
from ludo_rules.player import PlayerColor


class TestTurnController(unittest.TestCase):
    def setUp(self):
        self.game = TurnController(4)
        self.state = self.game.state

    def force_track(self, player_idx, piece_idx, position):
        piece = self.state.players[player_idx].pieces[piece_idx]
        piece.place_on_track(position)
        return piece

    def test_initial_state(self):
        self.assertEqual(self.game.phase, TurnPhase.AWAITING_ROLL)
        self.assertEqual(self.state.current_player_index, 0)
        self.assertIsNone(self.state.pending_die)
        self.assertFalse(self.state.is_over)
        self.assertIsInstance(self.state.events[0], GameStarted)

    def test_player_count_bounds(self):
        for count in (2, 3, 4):
            self.assertEqual(len(TurnController(count).state.players), count)
        with self.assertRaises(ConfigurationError):
            TurnController(1)
        with self.assertRaises(ConfigurationError):
            TurnController(5)

    def test_die_value_range(self):
        with self.assertRaises(ValueError):
            self.game.roll(0)
        with self.assertRaises(ValueError):
            self.game.roll(7)

    def test_roll_sets_pending_die(self):
        moves = self.game.roll(6)
        self.assertEqual(len(moves), 4)
        self.assertEqual(self.state.pending_die, 6)
        self.assertEqual(self.game.phase, TurnPhase.AWAITING_MOVE_CHOICE)
        self.assertIsInstance(self.state.events[-1], DieRolled)
        self.assertEqual(len(self.game.get_legal_moves()), 4)

    def test_no_legal_move_passes_turn(self):
        moves = self.game.roll(3)
        self.assertEqual(moves, [])
        self.assertEqual(self.state.current_player_index, 1)
        self.assertIsNone(self.state.pending_die)
        self.assertEqual(self.game.phase, TurnPhase.AWAITING_ROLL)
        self.assertIsInstance(self.state.events[-1], TurnPassed)

    def test_pass_on_six_still_advances(self):
        # every red piece finished except one stuck deep in the home column
        red = self.state.players[0]
        for piece in red.pieces[:3]:
            piece.finish()
        red.pieces[3].enter_home_column(2)
        self.game.roll(6)
        self.assertEqual(self.state.current_player_index, 1)

    def test_second_roll_is_rejected(self):
        self.game.roll(6)
        before = self.state.snapshot()
        self.game.roll(4)
        self.assertEqual(self.state.pending_die, 6)
        self.assertEqual(self.state.snapshot(), before)
        self.assertIsInstance(self.state.events[-1], RollRejected)
        self.assertEqual(self.game.phase, TurnPhase.AWAITING_MOVE_CHOICE)

    def test_choose_before_roll_is_rejected(self):
        self.assertIsNone(self.game.choose("red-0"))
        self.assertIsInstance(self.state.events[-1], MoveRejected)
        self.assertTrue(self.state.get_piece("red-0").is_at_base())

    def test_choose_illegal_piece_is_rejected(self):
        self.game.roll(6)
        self.assertIsNone(self.game.choose("yellow-0"))
        self.assertIsNone(self.game.choose("red-9"))
        self.assertEqual(self.game.phase, TurnPhase.AWAITING_MOVE_CHOICE)
        self.assertEqual(self.state.pending_die, 6)
        self.assertIsInstance(self.state.events[-1], MoveRejected)
        # a legal choice still works afterwards
        self.assertIsNotNone(self.game.choose("red-0"))

    def test_six_grants_extra_roll(self):
        self.game.roll(6)
        result = self.game.choose("red-0")
        self.assertTrue(result.extra_roll)
        self.assertEqual(self.state.current_player_index, 0)
        self.assertEqual(self.game.phase, TurnPhase.AWAITING_ROLL)
        self.assertIsInstance(self.state.events[-1], ExtraRollGranted)

    def test_other_values_advance_turn(self):
        self.force_track(0, 0, 10)
        self.game.roll(3)
        result = self.game.choose("red-0")
        self.assertFalse(result.extra_roll)
        self.assertEqual(self.state.current_player_index, 1)
        self.assertIsNone(self.state.pending_die)

    def test_turn_wraps_around(self):
        for _ in range(4):
            self.game.roll(1)
        self.assertEqual(self.state.current_player_index, 0)

    def test_win_ends_game(self):
        red = self.state.players[0]
        for piece in red.pieces[:3]:
            piece.finish()
        red.pieces[3].enter_home_column(4)
        self.game.roll(1)
        result = self.game.choose("red-3")
        self.assertEqual(result.winner, PlayerColor.RED)
        self.assertEqual(self.game.phase, TurnPhase.GAME_OVER)
        self.assertTrue(self.game.is_over)
        self.assertIsInstance(self.state.events[-1], PlayerWon)

        frozen = self.state.snapshot()
        events = len(self.state.events)
        self.assertEqual(self.game.roll(6), [])
        self.assertIsNone(self.game.choose("yellow-0"))
        self.assertEqual(self.state.snapshot(), frozen)
        self.assertEqual(len(self.state.events), events)
        self.assertEqual(self.game.get_state()["phase"], "game_over")
        self.assertEqual(self.game.get_state()["winner"], "red")

    def test_get_state_snapshot(self):
        self.game.roll(6)
        self.game.choose("red-2")
        snapshot = self.game.get_state()
        self.assertEqual(snapshot["current_color"], "red")
        self.assertIsNone(snapshot["pending_die"])
        red = snapshot["players"][0]
        self.assertEqual(red["pieces"][2]["status"], "on_track")
        self.assertEqual(red["pieces"][2]["track_position"], 0)
        # mutating the snapshot does not touch the game
        red["pieces"][2]["track_position"] = 30
        self.assertEqual(self.state.get_piece("red-2").track_position, 0)

    def test_subscribe_receives_events(self):
        received = []
        unsubscribe = self.game.subscribe(received.append)
        self.game.roll(6)
        self.game.choose("red-0")
        names = [event.name for event in received]
        self.assertEqual(names, ["DieRolled", "Moved", "ExtraRollGranted"])
        unsubscribe()
        self.game.roll(2)
        self.assertEqual(len(received), 3)

    def test_subscription_survives_new_game(self):
        received = []
        self.game.subscribe(received.append)
        self.game.new_game(2)
        self.assertIsInstance(received[-1], GameStarted)
        self.assertEqual(received[-1].player_count, 2)
        self.assertEqual(len(self.game.state.players), 2)

    def test_new_game_resets(self):
        self.game.roll(6)
        self.game.choose("red-0")
        state = self.game.new_game(3)
        self.assertIsNot(state, self.state)
        self.assertEqual(self.game.phase, TurnPhase.AWAITING_ROLL)
        self.assertTrue(all(p.is_at_base() for pl in state.players for p in pl.pieces))
        self.assertEqual(self.game.get_legal_moves(), [])


class TestSubscriberDelivery(unittest.TestCase):
    """Handlers only run once the operation that produced the event is done."""

    def setUp(self):
        self.game = TurnController(4)
        self.state = self.game.state

    def test_failing_handler_leaves_capture_complete(self):
        def broken(event):
            if isinstance(event, Moved):
                raise RuntimeError("renderer crashed")

        self.game.subscribe(broken)
        self.state.get_piece("yellow-0").place_on_track(5)
        self.state.get_piece("red-0").place_on_track(2)
        self.game.roll(3)
        result = self.game.choose("red-0")

        self.assertEqual(result.captured, ["yellow-0"])
        self.assertEqual(
            [p.piece_id for p in self.state.pieces_at(5)], ["red-0"]
        )
        self.assertTrue(self.state.get_piece("yellow-0").is_at_base())
        self.assertIsNone(self.state.pending_die)
        self.assertEqual(self.game.phase, TurnPhase.AWAITING_ROLL)
        self.assertEqual(self.state.current_player_index, 1)
        # play carries on normally
        self.assertEqual(len(self.game.roll(6)), 4)

    def test_moved_handler_sees_captured_piece_at_base(self):
        statuses = []

        def on_event(event):
            if isinstance(event, Moved):
                statuses.append(self.state.get_piece("yellow-0").status.value)

        self.game.subscribe(on_event)
        self.state.get_piece("yellow-0").place_on_track(5)
        self.state.get_piece("red-0").place_on_track(2)
        self.game.roll(3)
        self.game.choose("red-0")
        self.assertEqual(statuses, ["at_base"])

    def test_handler_can_roll_on_extra_roll(self):
        rolled = []

        def on_event(event):
            if isinstance(event, ExtraRollGranted):
                rolled.append(self.game.roll(6))

        self.game.subscribe(on_event)
        self.game.roll(6)
        self.game.choose("red-0")

        self.assertEqual(len(rolled), 1)
        self.assertTrue(rolled[0])
        self.assertEqual(self.game.phase, TurnPhase.AWAITING_MOVE_CHOICE)
        self.assertEqual(self.state.events.of_type(RollRejected), [])
        names = [event.name for event in self.state.events][-3:]
        self.assertEqual(names, ["Moved", "ExtraRollGranted", "DieRolled"])

    def test_pass_handler_sees_next_player(self):
        seen = []

        def on_event(event):
            if isinstance(event, TurnPassed):
                seen.append(self.state.current_player_index)

        self.game.subscribe(on_event)
        self.game.roll(2)
        self.assertEqual(seen, [1])

    def test_out_of_range_roll_after_win_is_ignored(self):
        red = self.state.players[0]
        for piece in red.pieces[:3]:
            piece.finish()
        red.pieces[3].enter_home_column(4)
        self.game.roll(1)
        self.game.choose("red-3")
        self.assertEqual(self.game.phase, TurnPhase.GAME_OVER)
        self.assertEqual(self.game.roll(7), [])
        self.assertEqual(self.game.roll(0), [])



if __name__ == "__main__":
    unittest.main()
