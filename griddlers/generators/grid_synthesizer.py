"""
Grid Synthesizer
================
Seeded, density-targeted solution grids.

Every draw from the SeededRandom stream lands on a fixed step of the
algorithm below, so the number and order of draws are part of the
puzzle protocol:

1. one draw picks the target density inside the difficulty band,
2. one draw per cell (row-major) paints the noise layer,
3. len(cells) - 1 draws shuffle the row-major coordinate list,
4. the shuffled list is walked to remove or add cells until the fill
   count is exactly floor(size * size * target_density).

A grid must come out identical on the client, on the server and in the
seed-pool tooling. Do not reorder anything here without bumping
seeded_random.ALGORITHM_VERSION.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from griddlers.difficulty import DifficultyRange
from griddlers.seeded_random import SeededRandom

Grid = List[List[int]]


@dataclass
class Puzzle:
    seed: int
    size: int
    grid: Grid
    target_density: float
    target_fill_count: int
    title: str = field(default="")

    def __post_init__(self):
        if not self.title:
            self.title = f"Pattern #{self.seed}"

    @property
    def fill_count(self) -> int:
        return sum(sum(row) for row in self.grid)


class GridSynthesizer:
    """
    Builds the solution grid for (seed, size, density range).

    Stateless between calls; each call owns its own SeededRandom.
    """

    def synthesize(self, seed: int, size: int, density_range: DifficultyRange) -> Puzzle:
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")

        rng = SeededRandom(seed)

        # 1. Target density for this seed within the band
        target_density = density_range.min_density + rng.next() * (
            density_range.max_density - density_range.min_density
        )
        total_cells = size * size
        target_fill_count = math.floor(total_cells * target_density)

        # 2. Noise layer, row-major
        grid = [[1 if rng.boolean(target_density) else 0 for _ in range(size)] for _ in range(size)]

        # 3. Density correction over a shuffled coordinate list
        self._correct_density(grid, rng, target_fill_count)

        # 4. Never hand out an all-empty or all-filled board
        self._guard_degenerate(grid, target_fill_count)

        return Puzzle(
            seed=seed,
            size=size,
            grid=grid,
            target_density=target_density,
            target_fill_count=target_fill_count,
        )

    def _correct_density(self, grid: Grid, rng: SeededRandom, target_fill_count: int) -> None:
        size = len(grid)
        diff = sum(sum(row) for row in grid) - target_fill_count

        coords: List[Tuple[int, int]] = [(r, c) for r in range(size) for c in range(size)]
        rng.shuffle(coords)

        if diff > 0:
            # Too many filled cells: clear the first `diff` filled ones met
            for r, c in coords:
                if diff == 0:
                    break
                if grid[r][c] == 1:
                    grid[r][c] = 0
                    diff -= 1
        elif diff < 0:
            for r, c in coords:
                if diff == 0:
                    break
                if grid[r][c] == 0:
                    grid[r][c] = 1
                    diff += 1

    def _guard_degenerate(self, grid: Grid, target_fill_count: int) -> None:
        size = len(grid)
        total_cells = size * size
        filled = sum(sum(row) for row in grid)
        if filled == 0 and target_fill_count > 0:
            grid[size // 2][size // 2] = 1
        if filled == total_cells and target_fill_count < total_cells:
            grid[0][0] = 0


_default_synthesizer = GridSynthesizer()


def synthesize(seed: int, size: int, density_range: DifficultyRange) -> Puzzle:
    return _default_synthesizer.synthesize(seed, size, density_range)


def generate_grid(seed: int, size: int, density_range: DifficultyRange) -> Grid:
    """Just the 0/1 solution grid for (seed, size, density_range)."""
    return _default_synthesizer.synthesize(seed, size, density_range).grid
