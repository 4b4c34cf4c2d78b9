import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from griddlers.clues import clue_count, column_clues, extract_clues, puzzle_clues, row_clues, runs

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

GOLDEN_12345_5_VERY_HARD = [
    [1, 0, 0, 0, 1],
    [1, 0, 0, 0, 1],
    [0, 0, 0, 1, 1],
    [1, 1, 0, 0, 1],
    [0, 0, 0, 1, 1],
]


class TestExtractClues(unittest.TestCase):

    def test_runs_left_to_right(self):
        self.assertEqual(extract_clues([1, 1, 0, 1, 0, 0, 1, 1, 1]), [2, 1, 3])

    def test_empty_line_yields_zero(self):
        self.assertEqual(extract_clues([0, 0, 0, 0]), [0])
        self.assertEqual(extract_clues([]), [0])

    def test_full_line(self):
        self.assertEqual(extract_clues([1] * 7), [7])

    def test_runs_touching_edges(self):
        self.assertEqual(extract_clues([1, 0, 0, 1]), [1, 1])

    def test_clue_count(self):
        self.assertEqual(clue_count([0, 0]), 1)
        self.assertEqual(clue_count([1, 0, 1, 0, 1]), 3)

    def test_runs_drops_empty_marker(self):
        self.assertEqual(runs([0]), [])
        self.assertEqual(runs([3, 1]), [3, 1])


class TestGridClues(unittest.TestCase):

    def test_golden_42_10(self):
        rows, cols = puzzle_clues(GOLDEN_42_10_MEDIUM)
        self.assertEqual(rows, [[1, 3, 2], [3, 2], [1, 4, 3], [1, 1, 3, 1], [2, 5],
                                [1, 1, 2], [3, 1, 1], [2, 1, 1, 1], [1, 2, 1], [3, 1, 2]])
        self.assertEqual(cols, [[1, 1, 2, 1], [2, 4], [2, 1, 1, 1], [4, 2], [3, 1, 2],
                                [1, 3, 1], [3], [4, 1, 1], [3, 3, 1], [1, 4, 2]])

    def test_golden_12345_5_has_empty_column(self):
        self.assertEqual(row_clues(GOLDEN_12345_5_VERY_HARD), [[1, 1], [1, 1], [2], [2, 1], [2]])
        self.assertEqual(column_clues(GOLDEN_12345_5_VERY_HARD), [[2, 1], [1], [0], [1, 1], [5]])

    def test_empty_grid(self):
        self.assertEqual(column_clues([]), [])

    def test_clue_sums_match_fill_count(self):
        rows, cols = puzzle_clues(GOLDEN_42_10_MEDIUM)
        filled = sum(map(sum, GOLDEN_42_10_MEDIUM))
        self.assertEqual(sum(map(sum, rows)), filled)
        self.assertEqual(sum(map(sum, cols)), filled)


if __name__ == '__main__':
    unittest.main()
