import random
import unittest

from cubelet_sim.core import InvalidMove, Move, apply_moves, initial_state
from cubelet_sim.logic.sequencer import MoveSequencer, SequencerStatus


class TestSequencer(unittest.TestCase):
    def setUp(self):
        self.completed = 0
        self.moves = []
        self.seq = MoveSequencer(
            rng=random.Random(1234),
            on_move=lambda m, s: self.moves.append((m, s)),
            on_complete=self._on_complete,
        )

    def _on_complete(self):
        self.completed += 1

    def _tick_n(self, n):
        return [self.seq.tick() for _ in range(n)]

    def test_starts_idle_and_solved(self):
        self.assertFalse(self.seq.is_scrambling())
        self.assertIs(self.seq.status, SequencerStatus.IDLE)
        self.assertEqual(self.seq.get_state(), initial_state())
        self.assertEqual(self.seq.moves_remaining, 0)

    def test_tick_while_idle_does_nothing(self):
        self.assertIsNone(self.seq.tick())
        self.assertEqual(self.seq.get_state(), initial_state())
        self.assertEqual(self.moves, [])

    def test_second_scramble_is_noop(self):
        self.seq.scramble()
        self.assertEqual(self.seq.moves_remaining, 20)
        self.seq.tick()
        self.seq.scramble()
        self.assertEqual(self.seq.moves_remaining, 19)
        self.assertTrue(self.seq.is_scrambling())

    def test_twenty_ticks_complete_once(self):
        self.seq.scramble()
        for i in range(20):
            self.assertTrue(self.seq.is_scrambling())
            self.assertEqual(self.completed, 0)
            self.assertIsNotNone(self.seq.tick())
        self.assertFalse(self.seq.is_scrambling())
        self.assertEqual(self.completed, 1)
        self.assertEqual(self.seq.moves_remaining, 0)

        final = self.seq.get_state()
        self.assertEqual(self._tick_n(5), [None] * 5)
        self.assertEqual(self.seq.get_state(), final)
        self.assertEqual(self.completed, 1)

    def test_ticks_apply_sequentially(self):
        self.seq.scramble()
        self._tick_n(20)
        history = self.seq.history
        self.assertEqual(len(history), 20)
        self.assertEqual(self.seq.get_state(), apply_moves(initial_state(), history))

        # Cada listener ve el estado producido por su movimiento
        state = initial_state()
        for move, published in self.moves:
            state = apply_moves(state, [move])
            self.assertEqual(published, state)

    def test_reset_during_scramble(self):
        self.seq.scramble()
        self._tick_n(5)
        self.seq.reset()
        self.assertFalse(self.seq.is_scrambling())
        self.assertEqual(self.seq.get_state(), initial_state())
        self.assertEqual(self.seq.history, ())

        self.assertEqual(self._tick_n(30), [None] * 30)
        self.assertEqual(self.seq.get_state(), initial_state())
        self.assertEqual(len(self.moves), 5)
        self.assertEqual(self.completed, 0)

    def test_reset_while_idle(self):
        self.seq.reset()
        self.assertEqual(self.seq.get_state(), initial_state())
        self.assertFalse(self.seq.is_scrambling())

    def test_cancel_keeps_state(self):
        self.seq.scramble()
        self._tick_n(7)
        state = self.seq.get_state()
        self.seq.cancel()
        self.assertFalse(self.seq.is_scrambling())
        self.assertEqual(self._tick_n(3), [None] * 3)
        self.assertEqual(self.seq.get_state(), state)
        self.assertEqual(self.completed, 0)

    def test_cancel_from_listener_stops_further_ticks(self):
        seen = []

        def stop_after_three(move, state):
            seen.append(state)
            if len(seen) == 3:
                self.seq.cancel()

        self.seq.add_move_listener(stop_after_three)
        self.seq.scramble()
        self._tick_n(20)
        self.assertEqual(len(seen), 3)
        self.assertEqual(self.seq.get_state(), seen[-1])
        self.assertEqual(self.completed, 0)

    def test_scramble_started_by_listener_on_last_move(self):
        seen = []
        self.seq.add_complete_listener(lambda: seen.append(self.seq.is_scrambling()))

        def restart(move, state):
            if len(self.seq.history) == 20 and not self.seq.is_scrambling():
                self.seq.scramble()

        self.seq.add_move_listener(restart)
        self.seq.scramble()
        self._tick_n(20)
        self.assertEqual(self.completed, 1)
        self.assertEqual(seen, [False])
        self.assertTrue(self.seq.is_scrambling())
        self.assertEqual(self.seq.moves_remaining, 20)

    def test_scramble_again_after_completion(self):
        self.seq.scramble()
        self._tick_n(20)
        self.seq.scramble()
        self.assertTrue(self.seq.is_scrambling())
        self._tick_n(20)
        self.assertEqual(self.completed, 2)
        self.assertEqual(len(self.seq.history), 40)

    def test_seeded_runs_are_reproducible(self):
        a = MoveSequencer(rng=random.Random(99))
        b = MoveSequencer(rng=random.Random(99))
        for s in (a, b):
            s.scramble()
            for _ in range(20):
                s.tick()
        self.assertEqual(a.get_state(), b.get_state())

    def test_invalid_scramble_length(self):
        with self.assertRaises(ValueError):
            MoveSequencer(scramble_length=0)


class TestManualMoves(unittest.TestCase):
    def setUp(self):
        self.seq = MoveSequencer(rng=random.Random(5))

    def test_apply_and_undo(self):
        m = Move("z", 1, False)
        self.assertTrue(self.seq.apply(m))
        self.assertEqual(self.seq.get_state(), apply_moves(initial_state(), [m]))
        self.assertEqual(self.seq.undo(), m.inverse())
        self.assertEqual(self.seq.get_state(), initial_state())
        self.assertIsNone(self.seq.undo())

    def test_apply_rejected_while_scrambling(self):
        self.seq.scramble()
        self.seq.tick()
        state = self.seq.get_state()
        self.assertFalse(self.seq.apply(Move("x", 1, True)))
        self.assertIsNone(self.seq.undo())
        self.assertEqual(self.seq.get_state(), state)

    def test_invalid_move_leaves_state(self):
        self.seq.apply(Move("y", -1, True))
        state = self.seq.get_state()
        with self.assertRaises(InvalidMove):
            self.seq.apply(Move("y", 0, True))
        self.assertEqual(self.seq.get_state(), state)
        self.assertEqual(len(self.seq.history), 1)


if __name__ == "__main__":
    unittest.main()
