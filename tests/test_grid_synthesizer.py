import unittest
import sys
import os
import math

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from griddlers.difficulty import DIFFICULTY_CONFIG, DifficultyRange
from griddlers.generators.grid_synthesizer import GridSynthesizer, generate_grid, synthesize
from griddlers.seeded_random import SeededRandom


MEDIUM_BAND = DifficultyRange(0.53, 0.58)

# seed=42, size=10, band 0.53..0.58
GOLDEN_42_10_MEDIUM = [
    [1, 0, 0, 1, 1, 1, 0, 0, 1, 1],
    [0, 0, 1, 1, 1, 0, 0, 1, 1, 0],
    [1, 0, 1, 1, 1, 1, 0, 1, 1, 1],
    [0, 1, 0, 1, 0, 1, 1, 1, 0, 1],
    [0, 1, 1, 0, 0, 1, 1, 1, 1, 1],
    [0, 0, 0, 0, 1, 0, 1, 0, 1, 1],
    [1, 1, 1, 0, 0, 1, 0, 0, 1, 0],
    [1, 1, 0, 1, 0, 0, 0, 1, 0, 1],
    [0, 1, 0, 1, 1, 0, 0, 0, 0, 1],
    [1, 1, 1, 0, 1, 0, 0, 1, 1, 0],
]

# seed=12345, size=5, band 0.40..0.48 (noise layer filled 9, corrected up to 11)
GOLDEN_12345_5_VERY_HARD = [
    [1, 0, 0, 0, 1],
    [1, 0, 0, 0, 1],
    [0, 0, 0, 1, 1],
    [1, 1, 0, 0, 1],
    [0, 0, 0, 1, 1],
]

# The daily puzzle for 2026-10-19: seed 20261019, size 15, DAILY band
GOLDEN_DAILY_20261019_15 = [
    [0, 0, 1, 0, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 1],
    [0, 0, 1, 1, 1, 0, 0, 1, 1, 1, 1, 1, 1, 0, 1],
    [1, 0, 0, 1, 0, 1, 0, 1, 1, 0, 1, 1, 1, 0, 1],
    [0, 1, 1, 0, 1, 0, 0, 1, 0, 1, 1, 1, 1, 0, 0],
    [1, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1, 1, 1, 0, 1],
    [1, 1, 1, 0, 1, 1, 1, 1, 0, 0, 1, 0, 0, 1, 1],
    [1, 0, 1, 1, 0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1],
    [1, 0, 0, 0, 1, 1, 0, 0, 0, 0, 0, 0, 0, 1, 1],
    [1, 0, 1, 0, 1, 1, 0, 0, 1, 0, 1, 0, 1, 1, 1],
    [1, 0, 0, 0, 0, 0, 0, 1, 0, 0, 1, 0, 0, 1, 1],
    [1, 1, 0, 1, 0, 1, 1, 0, 0, 1, 1, 1, 1, 0, 0],
    [0, 1, 0, 0, 1, 1, 1, 0, 1, 1, 1, 1, 1, 0, 1],
    [1, 0, 1, 1, 0, 1, 1, 1, 0, 0, 0, 1, 1, 0, 0],
    [0, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0, 1, 0, 1, 0],
    [1, 1, 1, 1, 1, 0, 1, 1, 1, 0, 1, 1, 0, 0, 0],
]


class TestGoldenGrids(unittest.TestCase):
    """Cross-implementation fixtures: every call site must produce these."""

    def test_seed_42_size_10_medium(self):
        puzzle = synthesize(42, 10, MEDIUM_BAND)
        self.assertEqual(puzzle.grid, GOLDEN_42_10_MEDIUM)
        self.assertEqual(puzzle.target_density, 0.5600551875960081)
        self.assertEqual(puzzle.target_fill_count, 56)
        self.assertEqual(puzzle.fill_count, 56)

    def test_seed_12345_size_5_very_hard(self):
        puzzle = synthesize(12345, 5, DIFFICULTY_CONFIG["VERY_HARD"])
        self.assertEqual(puzzle.grid, GOLDEN_12345_5_VERY_HARD)
        self.assertEqual(puzzle.target_fill_count, 11)

    def test_daily_grid(self):
        grid = generate_grid(20261019, 15, DIFFICULTY_CONFIG["DAILY"])
        self.assertEqual(grid, GOLDEN_DAILY_20261019_15)
        self.assertEqual(sum(map(sum, grid)), 127)


class TestDeterminism(unittest.TestCase):

    def test_repeated_invocations_identical(self):
        for seed in (0, 1, 7, 123456789, -99):
            for size in (5, 12, 25):
                with self.subTest(seed=seed, size=size):
                    first = generate_grid(seed, size, MEDIUM_BAND)
                    second = GridSynthesizer().synthesize(seed, size, MEDIUM_BAND).grid
                    self.assertEqual(first, second)

    def test_different_seeds_differ(self):
        self.assertNotEqual(generate_grid(1, 10, MEDIUM_BAND), generate_grid(2, 10, MEDIUM_BAND))

    def test_grid_shape_and_values(self):
        grid = generate_grid(77, 8, MEDIUM_BAND)
        self.assertEqual(len(grid), 8)
        for row in grid:
            self.assertEqual(len(row), 8)
            self.assertTrue(set(row) <= {0, 1})


class TestDensityConformance(unittest.TestCase):

    def test_fill_count_matches_redrawn_target(self):
        """The first draw alone fixes the target; the count must hit it exactly."""
        for key, band in DIFFICULTY_CONFIG.items():
            for seed in range(1, 30):
                for size in (5, 10, 15):
                    with self.subTest(key=key, seed=seed, size=size):
                        first_draw = SeededRandom(seed).next()
                        density = band.min_density + first_draw * (band.max_density - band.min_density)
                        expected = math.floor(size * size * density)
                        grid = generate_grid(seed, size, band)
                        self.assertEqual(sum(map(sum, grid)), expected)

    def test_target_density_inside_band(self):
        for seed in range(50):
            puzzle = synthesize(seed, 10, DIFFICULTY_CONFIG["HARD"])
            self.assertGreaterEqual(puzzle.target_density, 0.48)
            self.assertLessEqual(puzzle.target_density, 0.52)

    def test_stream_consumption_is_fixed(self):
        """1 density draw + size^2 noise draws + (size^2 - 1) shuffle draws."""
        size = 6
        rng = SeededRandom(2024)
        rng.next()
        for _ in range(size * size):
            rng.next()
        rng.shuffle(list(range(size * size)))
        self.assertEqual(rng.draws, 2 * size * size)


class TestEdgeCases(unittest.TestCase):

    def test_zero_density_gives_empty_grid(self):
        grid = generate_grid(7, 5, DifficultyRange(0.0, 0.0))
        self.assertEqual(grid, [[0] * 5 for _ in range(5)])

    def test_full_density_gives_full_grid(self):
        grid = generate_grid(7, 3, DifficultyRange(1.0, 1.0))
        self.assertEqual(grid, [[1] * 3 for _ in range(3)])

    def test_single_cell_grid(self):
        puzzle = synthesize(7, 1, DifficultyRange(0.6, 0.6))
        self.assertEqual(puzzle.grid, [[0]])
        self.assertEqual(puzzle.target_fill_count, 0)

    def test_non_positive_size_rejected(self):
        with self.assertRaises(ValueError):
            synthesize(1, 0, MEDIUM_BAND)

    def test_title(self):
        self.assertEqual(synthesize(42, 5, MEDIUM_BAND).title, "Pattern #42")


if __name__ == '__main__':
    unittest.main()
