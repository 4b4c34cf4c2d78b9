"""
Line Solver
===========
Exhaustive placement enumeration for a single row or column.

Every way of laying the clue's runs into the line that agrees with the
cells already known is enumerated by backtracking. A cell that is filled
in every placement is forced FILLED, a cell filled in none is forced
EXCLUDED, everything else stays UNKNOWN.

Pruning:
- a run never starts past the last position that still leaves room for
  the remaining runs and their separating gaps,
- a run never covers an EXCLUDED cell or ends right before a FILLED one,
- a FILLED cell skipped over before a run's start ends that run's loop,
  since every later start skips it too.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from griddlers.cell_state import EXCLUDED, FILLED, UNKNOWN
from griddlers.clues import runs as clue_runs
from griddlers.solvers.solver_errors import ControlledStateExplosionError, resolve_safe_limit

LineKey = Tuple[Tuple[int, ...], Tuple[int, ...]]


@dataclass(frozen=True)
class LineResult:
    line: Tuple[int, ...]
    changed: bool
    configurations: int

    @property
    def contradiction(self) -> bool:
        """No placement fits: the line state and the clue cannot both hold."""
        return self.configurations == 0


class LineSolver:
    """
    Solves one line at a time; keeps a memo of (line state, clue) results.

    The memo is what makes repeated solving during seed-pool curation
    cheap: most lines of a fresh grid start all-UNKNOWN and repeat across
    attempts.
    """

    DEFAULT_CACHE_SIZE = 50_000

    def __init__(self, safe_limit: Optional[int] = None, cache_size: int = DEFAULT_CACHE_SIZE):
        self.safe_limit = resolve_safe_limit(safe_limit)
        self.cache_size = cache_size
        self._cache: Dict[LineKey, LineResult] = {}
        self.cache_hits = 0
        self.cache_misses = 0

    def clear_cache(self) -> None:
        self._cache.clear()

    def solve(self, line: Sequence[int], clue: Sequence[int]) -> LineResult:
        state = tuple(line)
        runs = tuple(clue_runs(clue))
        key = (state, runs)

        cached = self._cache.get(key)
        if cached is not None:
            self.cache_hits += 1
            return cached
        self.cache_misses += 1

        result = self._solve_uncached(state, runs)
        if self.cache_size > 0:
            if len(self._cache) >= self.cache_size:
                self._cache.clear()
            self._cache[key] = result
        return result

    def _solve_uncached(self, line: Tuple[int, ...], runs: Tuple[int, ...]) -> LineResult:
        n = len(line)
        ever_filled = [False] * n
        ever_empty = [False] * n
        count = self._enumerate(line, runs, ever_filled, ever_empty)

        if count == 0:
            # Contradictory state: report no progress rather than raising.
            return LineResult(line=line, changed=False, configurations=0)

        new_line = list(line)
        changed = False
        for i in range(n):
            if line[i] != UNKNOWN:
                continue
            if not ever_empty[i]:
                new_line[i] = FILLED
                changed = True
            elif not ever_filled[i]:
                new_line[i] = EXCLUDED
                changed = True

        return LineResult(line=tuple(new_line), changed=changed, configurations=count)

    def _enumerate(
        self,
        line: Tuple[int, ...],
        runs: Tuple[int, ...],
        ever_filled: List[bool],
        ever_empty: List[bool],
    ) -> int:
        n = len(line)
        k_total = len(runs)

        # room_after[k]: cells the runs after k need, gaps included
        room_after = [0] * k_total
        acc = 0
        for k in range(k_total - 1, -1, -1):
            room_after[k] = acc
            acc += runs[k] + 1

        placement = [False] * n
        count = 0
        limit = self.safe_limit

        def record() -> None:
            nonlocal count
            for i in range(n):
                if line[i] == FILLED and not placement[i]:
                    return
                if line[i] == EXCLUDED and placement[i]:
                    return
            count += 1
            if count > limit:
                raise ControlledStateExplosionError(
                    safe_limit=limit,
                    observed=count,
                    context=f"runs={list(runs)} length={n}",
                )
            for i in range(n):
                if placement[i]:
                    ever_filled[i] = True
                else:
                    ever_empty[i] = True

        def place(k: int, start: int) -> None:
            if k == k_total:
                record()
                return

            run = runs[k]
            last_start = n - room_after[k] - run
            for i in range(start, last_start + 1):
                if i > start and line[i - 1] == FILLED:
                    # A known filled cell would be left outside every run.
                    break
                if EXCLUDED in line[i:i + run]:
                    continue
                if i + run < n and line[i + run] == FILLED:
                    continue

                for j in range(i, i + run):
                    placement[j] = True
                place(k + 1, i + run + 1)
                for j in range(i, i + run):
                    placement[j] = False

        place(0, 0)
        return count


def solve_line(line: Sequence[int], clue: Sequence[int]) -> Tuple[List[int], bool]:
    """One-shot helper: (updated line, whether any UNKNOWN cell was resolved)."""
    result = LineSolver(cache_size=0).solve(line, clue)
    return list(result.line), result.changed
