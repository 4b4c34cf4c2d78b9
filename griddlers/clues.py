"""
Clue Extraction
===============
Run-length clues for the rows and columns of a solution grid.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

Clue = List[int]
Grid = List[List[int]]


def extract_clues(line: Sequence[int]) -> Clue:
    """
    Lengths of the consecutive runs of 1s in *line*, left to right.

    A line with no filled cells yields [0], the conventional empty clue.
    """
    clue: Clue = []
    run = 0
    for cell in line:
        if cell == 1:
            run += 1
        elif run > 0:
            clue.append(run)
            run = 0
    if run > 0:
        clue.append(run)
    if not clue:
        clue.append(0)
    return clue


def row_clues(grid: Sequence[Sequence[int]]) -> List[Clue]:
    return [extract_clues(row) for row in grid]


def column_clues(grid: Sequence[Sequence[int]]) -> List[Clue]:
    if not grid:
        return []
    return [extract_clues([row[c] for row in grid]) for c in range(len(grid[0]))]


def puzzle_clues(grid: Sequence[Sequence[int]]) -> Tuple[List[Clue], List[Clue]]:
    return row_clues(grid), column_clues(grid)


def clue_count(line: Sequence[int]) -> int:
    """How many numbers the clue for *line* displays (an empty line shows one 0)."""
    return len(extract_clues(line))


def runs(clue: Sequence[int]) -> List[int]:
    """The clue without the empty-line marker: [0] -> [], [2, 1] -> [2, 1]."""
    return [n for n in clue if n > 0]
