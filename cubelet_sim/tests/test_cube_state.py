import unittest
from collections import Counter

from cubelet_sim.core import (
    NEUTRAL,
    SIDE_COLORS,
    CubeState,
    InvalidState,
    Piece,
    all_positions,
    initial_state,
    validate_state,
)


def _replace(state, position, piece):
    return CubeState(piece if p.position == position else p for p in state)


class TestInitialState(unittest.TestCase):
    def test_is_deterministic(self):
        self.assertEqual(initial_state(), initial_state())
        self.assertEqual(hash(initial_state()), hash(initial_state()))

    def test_has_26_distinct_positions(self):
        s = initial_state()
        self.assertEqual(len(s), 26)
        self.assertEqual(sorted(s.positions()), sorted(all_positions()))
        self.assertNotIn((0, 0, 0), s.positions())

    def test_face_center_colors(self):
        s = initial_state()
        self.assertEqual(s.piece_at((1, 0, 0)).colors, ("R", "K", "K", "K", "K", "K"))
        self.assertEqual(s.piece_at((0, -1, 0)).colors, ("K", "K", "K", "W", "K", "K"))
        self.assertEqual(s.piece_at((0, 0, -1)).color_on((0, 0, -1)), "B")

    def test_corner_colors(self):
        s = initial_state()
        self.assertEqual(s.piece_at((1, 1, 1)).colors, ("R", "K", "Y", "K", "G", "K"))
        self.assertEqual(s.piece_at((-1, -1, -1)).colors, ("K", "O", "K", "W", "K", "B"))

    def test_each_side_color_appears_nine_times(self):
        flat = Counter(c for p in initial_state() for c in p.colors)
        for color in SIDE_COLORS:
            self.assertEqual(flat[color], 9)
        self.assertEqual(flat[NEUTRAL], 26 * 6 - 54)

    def test_starts_solved_and_valid(self):
        s = initial_state()
        self.assertTrue(s.is_solved())
        validate_state(s)

    def test_equality_ignores_piece_order(self):
        s = initial_state()
        self.assertEqual(CubeState(reversed(s.pieces)), s)

    def test_piece_at_center_raises(self):
        with self.assertRaises(KeyError):
            initial_state().piece_at((0, 0, 0))


class TestValidateState(unittest.TestCase):
    def test_missing_piece(self):
        s = initial_state()
        broken = CubeState(p for p in s if p.position != (1, 1, 1))
        with self.assertRaises(InvalidState):
            validate_state(broken)

    def test_duplicate_position(self):
        s = initial_state()
        dup = Piece((1, 1, 1), s.piece_at((1, 1, 1)).colors)
        broken = _replace(s, (1, 1, -1), dup)
        with self.assertRaises(InvalidState):
            validate_state(broken)

    def test_unknown_color(self):
        s = initial_state()
        broken = _replace(s, (1, 0, 0), Piece((1, 0, 0), ("P", "K", "K", "K", "K", "K")))
        with self.assertRaises(InvalidState):
            validate_state(broken)

    def test_colored_face_pointing_inside(self):
        s = initial_state()
        broken = _replace(s, (1, 0, 0), Piece((1, 0, 0), ("K", "R", "K", "K", "K", "K")))
        with self.assertRaises(InvalidState):
            validate_state(broken)

    def test_duplicated_color_within_piece(self):
        # Dos caras rojas en una esquina: bordes correctos, multiconjunto no
        s = initial_state()
        broken = _replace(s, (1, 1, 1), Piece((1, 1, 1), ("R", "K", "R", "K", "G", "K")))
        with self.assertRaises(InvalidState):
            validate_state(broken)

    def test_wrong_colors_length(self):
        s = initial_state()
        broken = _replace(s, (1, 0, 0), Piece((1, 0, 0), ("R", "K", "K", "K", "K")))
        with self.assertRaises(InvalidState):
            validate_state(broken)

    def test_list_position_rejected(self):
        s = initial_state()
        bad = Piece([1, 0, 0], s.piece_at((1, 0, 0)).colors)
        broken = CubeState(bad if p.position == (1, 0, 0) else p for p in s)
        with self.assertRaises(InvalidState):
            validate_state(broken)

    def test_not_a_state(self):
        with self.assertRaises(InvalidState):
            validate_state(list(initial_state()))


if __name__ == "__main__":
    unittest.main()
