"""
Constraint Propagation Solver
=============================
Row/column line solving iterated to a fixed point.

Each pass solves every row (top to bottom) then every column (left to
right). Passes repeat until one makes no change. The puzzle is
"logically solvable" when that fixed point leaves no UNKNOWN cell.

Writes are monotonic: a resolved cell is never reverted or flipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from griddlers.cell_state import FILLED, UNKNOWN, is_cell_state, render_grid
from griddlers.clues import column_clues, row_clues
from griddlers.solvers.line_solver import LineSolver
from griddlers.solvers.solver_errors import ControlledStateExplosionError, SolverInvariantError

logger = logging.getLogger(__name__)

STATUS_SOLVED = "solved"
STATUS_STUCK = "stuck"
STATUS_CONTRADICTION = "contradiction"
STATUS_LIMIT = "limit"

StateGrid = List[List[int]]


@dataclass
class SolveResult:
    solved: bool
    status: str
    passes: int
    line_solves: int
    grid: StateGrid = field(repr=False)
    contradictions: List[str] = field(default_factory=list)

    @property
    def unknown_count(self) -> int:
        return sum(row.count(UNKNOWN) for row in self.grid)

    def as_binary(self) -> List[List[int]]:
        """Terminal grid as 0/1 (UNKNOWN and EXCLUDED both read as 0)."""
        return [[1 if v == FILLED else 0 for v in row] for row in self.grid]


class ConstraintPropagationSolver:
    """
    Solves a nonogram from its clues by line propagation alone.

    Usage:
        solver = ConstraintPropagationSolver(row_clues, col_clues)
        result = solver.solve()
        if result.solved: ...

    *initial* may seed known cells (FILLED / EXCLUDED); it is copied.
    A shared LineSolver can be passed in to reuse its memo across puzzles.
    """

    def __init__(
        self,
        row_clues: Sequence[Sequence[int]],
        col_clues: Sequence[Sequence[int]],
        initial: Optional[Sequence[Sequence[int]]] = None,
        line_solver: Optional[LineSolver] = None,
    ):
        self.rows = len(row_clues)
        self.cols = len(col_clues)
        self.row_clues = [list(c) for c in row_clues]
        self.col_clues = [list(c) for c in col_clues]
        self.line_solver = line_solver or LineSolver()
        self.grid = self._initial_grid(initial)
        self._contradictions = set()

    @classmethod
    def from_grid(cls, solution: Sequence[Sequence[int]], **kwargs) -> "ConstraintPropagationSolver":
        return cls(row_clues(solution), column_clues(solution), **kwargs)

    def _initial_grid(self, initial: Optional[Sequence[Sequence[int]]]) -> StateGrid:
        if initial is None:
            return [[UNKNOWN] * self.cols for _ in range(self.rows)]

        if len(initial) != self.rows or any(len(row) != self.cols for row in initial):
            raise ValueError(f"Initial grid must be {self.rows}x{self.cols}")
        for r, row in enumerate(initial):
            for c, value in enumerate(row):
                if not is_cell_state(value):
                    raise ValueError(f"Invalid cell state {value!r} at ({r}, {c})")
        return [list(row) for row in initial]

    # ── Grid access ────────────────────────────────────────────

    def _row(self, r: int) -> List[int]:
        return self.grid[r]

    def _col(self, c: int) -> List[int]:
        return [self.grid[r][c] for r in range(self.rows)]

    def _write(self, r: int, c: int, value: int) -> None:
        old = self.grid[r][c]
        if old == value:
            return
        if old != UNKNOWN:
            raise SolverInvariantError(r, c, old, value)
        self.grid[r][c] = value

    # ── Solving ────────────────────────────────────────────────

    def solve_line(self, kind: str, index: int) -> bool:
        """Apply the line solver to one row ("row") or column ("col")."""
        if kind == "row":
            line, clue = self._row(index), self.row_clues[index]
        else:
            line, clue = self._col(index), self.col_clues[index]

        result = self.line_solver.solve(line, clue)
        if result.contradiction:
            self._contradictions.add(f"{kind} {index}")
            return False
        if not result.changed:
            return False

        for i, value in enumerate(result.line):
            if line[i] == UNKNOWN and value != UNKNOWN:
                if kind == "row":
                    self._write(index, i, value)
                else:
                    self._write(i, index, value)
        return True

    def solve(self) -> SolveResult:
        self._contradictions = set()
        passes = 0
        line_solves = 0
        status = None

        try:
            changed = True
            while changed:
                changed = False
                passes += 1
                for r in range(self.rows):
                    line_solves += 1
                    if self.solve_line("row", r):
                        changed = True
                for c in range(self.cols):
                    line_solves += 1
                    if self.solve_line("col", c):
                        changed = True
        except ControlledStateExplosionError as e:
            logger.debug("Line enumeration limit hit (%s): %s", e.context, e)
            status = STATUS_LIMIT

        if status is None:
            if self._contradictions:
                status = STATUS_CONTRADICTION
            elif self.is_solved():
                status = STATUS_SOLVED
            else:
                status = STATUS_STUCK
                logger.debug("Stuck after %d passes:\n%s", passes, render_grid(self.grid))
        solved = status == STATUS_SOLVED

        return SolveResult(
            solved=solved,
            status=status,
            passes=passes,
            line_solves=line_solves,
            grid=[list(row) for row in self.grid],
            contradictions=sorted(self._contradictions),
        )

    def is_solved(self) -> bool:
        return all(UNKNOWN not in row for row in self.grid)


def is_logically_solvable(solution: Sequence[Sequence[int]], line_solver: Optional[LineSolver] = None) -> bool:
    """
    True when propagation from an all-UNKNOWN grid resolves every cell
    and the resolved picture is exactly *solution*.
    """
    result = ConstraintPropagationSolver.from_grid(solution, line_solver=line_solver).solve()
    if not result.solved:
        return False
    return result.as_binary() == [[1 if v == 1 else 0 for v in row] for row in solution]

