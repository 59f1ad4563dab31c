import random
import unittest
from collections import Counter

from cubelet_sim.core import apply_moves, initial_state, validate_state
from cubelet_sim.logic.scramble import ALL_MOVES, generate_scramble, random_move


class TestScramble(unittest.TestCase):
    def test_twelve_distinct_moves(self):
        self.assertEqual(len(ALL_MOVES), 12)
        self.assertEqual(len(set(ALL_MOVES)), 12)

    def test_length_and_domain(self):
        seq = generate_scramble(20, seed=1)
        self.assertEqual(len(seq), 20)
        for m in seq:
            self.assertIn(m, ALL_MOVES)

    def test_seed_is_reproducible(self):
        self.assertEqual(generate_scramble(20, seed=42), generate_scramble(20, seed=42))

    def test_non_positive_length_rejected(self):
        with self.assertRaises(ValueError):
            generate_scramble(0)

    def test_random_move_covers_all_moves(self):
        rng = random.Random(0)
        counts = Counter(random_move(rng) for _ in range(6000))
        self.assertEqual(set(counts), set(ALL_MOVES))
        # ~500 por movimiento; cota amplia
        for m in ALL_MOVES:
            self.assertGreater(counts[m], 350)

    def test_scrambled_state_is_valid(self):
        s = apply_moves(initial_state(), generate_scramble(50, seed=9))
        validate_state(s)


if __name__ == "__main__":
    unittest.main()
