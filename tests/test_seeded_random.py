import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from griddlers.seeded_random import SeededRandom


# First three draws per seed. Any implementation of the generator, in any
# language, must reproduce these exactly.
GOLDEN_STREAMS = {
    0: [0.26642920868471265, 0.0003297457005828619, 0.2232720274478197],
    1: [0.6270739405881613, 0.002735721180215478, 0.5274470399599522],
    42: [0.6011037519201636, 0.44829055899754167, 0.8524657934904099],
    -7: [0.43306733411736786, 0.32539576734416187, 0.5442695003002882],
    2147483647: [0.4290980885270983, 0.12713524978607893, 0.3852774982806295],
    -2147483648: [0.8205775609239936, 0.4481089550536126, 0.7836112855002284],
    20261019: [0.8011838176753372, 0.9645610307343304, 0.6071008702274412],
}


class TestSeededRandomStream(unittest.TestCase):

    def test_golden_streams(self):
        for seed, expected in GOLDEN_STREAMS.items():
            with self.subTest(seed=seed):
                rng = SeededRandom(seed)
                self.assertEqual([rng.next() for _ in range(3)], expected)

    def test_same_seed_same_stream(self):
        a = SeededRandom(987654)
        b = SeededRandom(987654)
        self.assertEqual(a.sample_floats(500), b.sample_floats(500))

    def test_different_seeds_diverge(self):
        self.assertNotEqual(SeededRandom(1).sample_floats(10), SeededRandom(2).sample_floats(10))

    def test_seed_wraps_like_signed_32_bit(self):
        """-1 and 2**32 - 1 are the same 32-bit seed."""
        self.assertEqual(SeededRandom(-1).sample_floats(20), SeededRandom(2**32 - 1).sample_floats(20))
        self.assertEqual(SeededRandom(2**32 + 5).sample_floats(20), SeededRandom(5).sample_floats(20))

    def test_values_in_unit_interval(self):
        rng = SeededRandom(31337)
        for value in rng.sample_floats(5000):
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_draw_counter(self):
        rng = SeededRandom(3)
        rng.next()
        rng.boolean()
        rng.range_int(1, 6)
        self.assertEqual(rng.draws, 3)


class TestSeededRandomHelpers(unittest.TestCase):

    def test_boolean_uses_one_draw_against_probability(self):
        # Seed 42 draws 0.601..., 0.448..., 0.852...
        rng = SeededRandom(42)
        self.assertFalse(rng.boolean(0.5))
        self.assertTrue(rng.boolean(0.5))
        self.assertTrue(rng.boolean(0.9))

    def test_boolean_extremes(self):
        rng = SeededRandom(11)
        self.assertFalse(any(rng.boolean(0.0) for _ in range(200)))
        self.assertTrue(all(rng.boolean(1.0) for _ in range(200)))

    def test_range_int_inclusive_bounds(self):
        rng = SeededRandom(8)
        seen = {rng.range_int(1, 4) for _ in range(400)}
        self.assertEqual(seen, {1, 2, 3, 4})

    def test_range_int_matches_floor_formula(self):
        # floor(0.6011 * 10) + 0 = 6
        self.assertEqual(SeededRandom(42).range_int(0, 9), 6)

    def test_shuffle_is_a_permutation_and_deterministic(self):
        items = list(range(30))
        a = SeededRandom(99).shuffle(list(items))
        b = SeededRandom(99).shuffle(list(items))
        self.assertEqual(a, b)
        self.assertEqual(sorted(a), items)
        self.assertNotEqual(a, items)

    def test_shuffle_draw_count(self):
        rng = SeededRandom(5)
        rng.shuffle(list(range(25)))
        self.assertEqual(rng.draws, 24)

    def test_shuffle_short_lists(self):
        rng = SeededRandom(5)
        self.assertEqual(rng.shuffle([]), [])
        self.assertEqual(rng.shuffle([7]), [7])
        self.assertEqual(rng.draws, 0)


if __name__ == '__main__':
    unittest.main()
