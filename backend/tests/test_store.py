import asyncio
import unittest

from extensible_board.config import BoardConfig
from extensible_board.core import AddUnit, Idx, EMPTY_SQUARE, BoardAdopted, AnimationStarted, AnimationCancelled
from extensible_board.fen import STARTPOS_FEN, board_to_fen, parse_extended_fen
from extensible_board.core import piece_map
from extensible_board.scheduling import AsyncioScheduler, ManualScheduler
from extensible_board.store import AnimationState, BoardStateStore, Listener

AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
AFTER_E4_E5 = "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2"


class Recorder(Listener):
    def __init__(self):
        self.events = []

    def on_event(self, store, event):
        self.events.append(event)


def _store(**cfg):
    sched = ManualScheduler()
    return BoardStateStore(BoardConfig(**cfg), scheduler=sched), sched


def _settled(fen=STARTPOS_FEN, **cfg):
    store, sched = _store(**cfg)
    store.update(fen)
    sched.advance(store.config.animation_duration_s)
    return store, sched


class TestStoreStateMachine(unittest.TestCase):
    def test_empty_store_queries_degrade(self):
        store, _ = _store()
        self.assertEqual(store.num_rows(), 0)
        self.assertEqual(store.num_cols(), 0)
        self.assertIsNone(store.square_at(0, 0))
        self.assertEqual(store.piece_at("a1"), "")
        self.assertFalse(store.is_non_existent("a1"))
        self.assertEqual(store.unit_members("a9"), [])
        self.assertIsNone(store.location_idx("a1"))
        self.assertTrue(store.current_diff().is_empty())
        self.assertFalse(store.is_animating())

    def test_update_animates_then_adopts(self):
        store, sched = _store()
        store.update(STARTPOS_FEN)
        self.assertTrue(store.is_animating())
        self.assertIs(store.state, AnimationState.ANIMATION_PENDING)
        self.assertEqual(store.num_rows(), 0)
        self.assertEqual(len(store.current_diff().added), 64)
        self.assertEqual(store.current_diff().added["e1"], "wK")

        sched.advance(0.1)
        self.assertTrue(store.is_animating())

        sched.advance(0.2)
        self.assertFalse(store.is_animating())
        self.assertEqual((store.num_rows(), store.num_cols()), (8, 8))
        self.assertEqual(store.piece_at("e1"), "wK")
        self.assertEqual(store.piece_at("e4"), "")

    def test_newer_update_cancels_pending_animation(self):
        store, sched = _settled()
        store.update(AFTER_E4)
        self.assertTrue(store.is_animating())
        self.assertEqual(store.current_diff().removed["e2"], "wP")
        self.assertEqual(store.current_diff().added["e4"], "wP")

        store.update(AFTER_E4_E5)
        self.assertFalse(store.is_animating())
        self.assertEqual(sched.pending(), 0)
        self.assertEqual(store.piece_at("e5"), "bP")

        # the cancelled timer never fires
        self.assertEqual(sched.advance(1.0), 0)
        self.assertEqual(store.piece_at("e5"), "bP")

    def test_idle_again_after_cancel(self):
        store, sched = _settled()
        store.update(AFTER_E4)
        store.update(AFTER_E4_E5)
        store.update(STARTPOS_FEN)
        self.assertTrue(store.is_animating())
        self.assertEqual(sched.pending(), 1)

    def test_events(self):
        store, sched = _store()
        rec = Recorder()
        store.listeners.append(rec)
        store.update(STARTPOS_FEN)
        sched.advance(0.3)
        store.update(AFTER_E4)
        store.update(AFTER_E4_E5)
        kinds = [type(e) for e in rec.events]
        self.assertEqual(kinds, [AnimationStarted, BoardAdopted, AnimationStarted, AnimationCancelled, BoardAdopted])
        self.assertEqual([e.reason for e in rec.events if isinstance(e, BoardAdopted)], ["animation_done", "superseded"])

    def test_reconfigure_reruns_last_position(self):
        store, sched = _settled()
        store.reconfigure(BoardConfig(horizontal_extend_limit=1, vertical_extend_limit=1))
        self.assertTrue(store.is_animating())
        self.assertEqual(store.current_diff().added["A9"], "E")
        sched.advance(0.3)
        self.assertEqual((store.num_rows(), store.num_cols()), (10, 10))

    def test_invalid_config_rejected(self):
        with self.assertRaises(ValueError):
            BoardStateStore(BoardConfig(horizontal_add_unit=AddUnit(0, 1)))


class TestLocalMove(unittest.TestCase):
    def test_move_then_echo_is_not_animated(self):
        store, sched = _settled()
        self.assertTrue(store.move_piece("e2", "e4", "wP"))
        self.assertEqual(store.piece_at("e2"), "")
        self.assertEqual(store.square_at(6, 4).piece, EMPTY_SQUARE)
        self.assertEqual(store.piece_at("e4"), "wP")
        self.assertTrue(store.manual_move)

        store.update(AFTER_E4)
        self.assertFalse(store.is_animating())
        self.assertTrue(store.current_diff().is_empty())
        self.assertFalse(store.manual_move)
        self.assertEqual(sched.pending(), 0)
        self.assertEqual(store.piece_at("e4"), "wP")

        # the flag is one-shot
        store.update(AFTER_E4_E5)
        self.assertTrue(store.is_animating())

    def test_echo_during_animation_cancels_stale_timer(self):
        store, sched = _settled()
        store.update(AFTER_E4)
        self.assertTrue(store.is_animating())

        self.assertTrue(store.move_piece("e7", "e5", "bP"))
        store.update(AFTER_E4_E5)
        self.assertFalse(store.is_animating())
        self.assertEqual(sched.pending(), 0)
        self.assertEqual(store.piece_at("e5"), "bP")
        self.assertEqual(store.piece_at("e4"), "wP")

        # the earlier animation must not bring back its older position
        self.assertEqual(sched.advance(1.0), 0)
        self.assertEqual(store.piece_at("e5"), "bP")
        self.assertEqual(store.piece_at("e7"), "")

    def test_explicit_manual_flag_during_animation(self):
        store, sched = _settled()
        rec = Recorder()
        store.listeners.append(rec)
        store.update(AFTER_E4)
        store.set_manual_move(True)
        store.update(AFTER_E4_E5)
        self.assertIs(store.state, AnimationState.IDLE)
        self.assertTrue(store.current_diff().is_empty())
        self.assertEqual(sched.advance(1.0), 0)
        self.assertEqual(store.piece_at("e5"), "bP")
        self.assertEqual(
            [type(e) for e in rec.events], [AnimationStarted, AnimationCancelled, BoardAdopted]
        )
        self.assertEqual(rec.events[-1].reason, "manual_move")

    def test_move_does_not_touch_previous_board(self):
        store, _ = _settled()
        before = store.board()
        store.move_piece("e2", "e4", "wP")
        self.assertEqual(before.piece_at("e2"), "wP")

    def test_ignored_moves(self):
        store, _ = _settled(horizontal_extend_limit=1, vertical_extend_limit=1)
        self.assertFalse(store.move_piece("e3", "e4", "wP"))   # empty source
        self.assertFalse(store.move_piece("A9", "e4", "wP"))   # non-existent source
        self.assertFalse(store.move_piece("e2", "e9", "wP"))   # non-existent target
        self.assertFalse(store.move_piece("e2", "z99", "wP"))  # unknown target
        self.assertFalse(store.manual_move)
        self.assertEqual(store.piece_at("e2"), "wP")

    def test_capture_allowed(self):
        store, _ = _settled()
        self.assertTrue(store.move_piece("d1", "d7", "wQ"))
        self.assertEqual(store.piece_at("d7"), "wQ")

    def test_explicit_manual_flag(self):
        store, _ = _settled()
        store.set_manual_move(True)
        store.update(AFTER_E4)
        self.assertFalse(store.is_animating())
        self.assertEqual(store.piece_at("e4"), "wP")


class TestMaterialize(unittest.TestCase):
    def test_single_square(self):
        store, _ = _settled(horizontal_extend_limit=1, vertical_extend_limit=1)
        self.assertTrue(store.is_non_existent("e9"))
        self.assertEqual(store.unit_members("e9"), [Idx(0, 5)])
        before = store.board().piece_map()

        self.assertTrue(store.materialize_unit("e9"))
        self.assertFalse(store.is_non_existent("e9"))
        self.assertEqual(store.piece_at("e9"), "")
        # limit already reached on top: no extra row
        self.assertEqual((store.num_rows(), store.num_cols()), (10, 10))
        after = store.board().piece_map()
        self.assertEqual({k for k in before if before[k] != after[k]}, {"e9"})

    def test_materialized_square_changes_padding(self):
        store, _ = _settled(horizontal_extend_limit=2, vertical_extend_limit=2)
        self.assertEqual(store.num_rows(), 10)
        store.materialize_unit("e9")
        self.assertEqual(store.num_rows(), 11)
        self.assertTrue(store.is_non_existent("e10"))
        self.assertFalse(store.is_non_existent("e9"))

    def test_block_unit_and_redecode(self):
        store, _ = _settled(vertical_add_unit=AddUnit(2, 2), vertical_extend_limit=2)
        self.assertEqual((store.num_rows(), store.num_cols()), (12, 8))
        members = store.unit_members("a10")
        self.assertEqual(len(members), 4)
        before = store.board().piece_map()

        self.assertTrue(store.materialize_unit("a10"))
        redecoded = piece_map(parse_extended_fen(board_to_fen(store.board().rows)))
        for loc in ("a10", "b10", "a9", "b9"):
            self.assertEqual(redecoded[loc], EMPTY_SQUARE)
        for loc, piece in before.items():
            if loc not in ("a10", "b10", "a9", "b9"):
                self.assertEqual(redecoded[loc], piece, loc)

    def test_ignored(self):
        store, _ = _settled(horizontal_extend_limit=1, vertical_extend_limit=1)
        rec = Recorder()
        store.listeners.append(rec)
        self.assertFalse(store.materialize_unit("e4"))
        self.assertFalse(store.materialize_unit("q42"))
        self.assertEqual(rec.events, [])


class TestAsyncioScheduler(unittest.TestCase):
    def test_animation_completes_on_running_loop(self):
        async def run():
            store = BoardStateStore(BoardConfig(animation_duration_s=0.01), scheduler=AsyncioScheduler())
            store.update(STARTPOS_FEN)
            self.assertTrue(store.is_animating())
            await asyncio.sleep(0.1)
            return store

        store = asyncio.run(run())
        self.assertFalse(store.is_animating())
        self.assertEqual(store.piece_at("a8"), "bR")


if __name__ == "__main__":
    unittest.main()
