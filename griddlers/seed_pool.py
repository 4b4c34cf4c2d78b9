"""
Seed Pool Curation
==================
Offline search for seeds whose puzzles are logically solvable.

For every (size, difficulty) configuration, random seeds are drawn,
their grids synthesized and solved from clues alone. Seeds that resolve
completely, to exactly the synthesized picture, go into the pool. The
pool is written as JSON ({"<size>:<KEY>": [seed, ...]}) and read at
gameplay time, so live play never has to reject-and-retry a puzzle.

Running out of attempts is not an error: the configuration just keeps a
shorter list and a warning is logged.
"""

from __future__ import annotations

import concurrent.futures
import json
import logging
import os
import random
import tempfile
import time
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from griddlers.difficulty import (
    DIFFICULTY_CONFIG,
    DIFFICULTY_LEVELS,
    POOL_GRID_SIZES,
    DifficultyRange,
    get_difficulty,
)
from griddlers.generators.grid_synthesizer import Puzzle, synthesize
from griddlers.puzzle_id import config_key
from griddlers.solvers.line_solver import LineSolver
from griddlers.solvers.propagation_solver import STATUS_LIMIT, ConstraintPropagationSolver

logger = logging.getLogger(__name__)

SEED_UPPER_BOUND = 2_000_000_000
DEFAULT_SEEDS_PER_CONFIG = 10
DEFAULT_MAX_ATTEMPTS = 5000
DEFAULT_POOL_FILENAME = "valid_seeds.json"

SeedPool = Dict[str, List[int]]


@dataclass
class CurationStats:
    """Bookkeeping for one configuration's search."""
    config_key: str
    target: int
    attempts: int = 0
    accepted: int = 0
    rejected_stuck: int = 0
    rejected_limit: int = 0
    elapsed: float = 0.0
    accepted_densities: List[float] = field(default_factory=list)
    rejected_densities: List[float] = field(default_factory=list)

    @property
    def exhausted(self) -> bool:
        return self.accepted < self.target

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.attempts if self.attempts else 0.0

    def to_row(self) -> Dict[str, object]:
        """Flat dict for CSV export (density lists dropped)."""
        row = asdict(self)
        row.pop("accepted_densities")
        row.pop("rejected_densities")
        row["acceptance_rate"] = round(self.acceptance_rate, 4)
        return row


@dataclass
class CurationReport:
    pool: SeedPool
    stats: Dict[str, CurationStats]

    @property
    def total_seeds(self) -> int:
        return sum(len(seeds) for seeds in self.pool.values())

    @property
    def short_configs(self) -> List[str]:
        return [key for key, s in self.stats.items() if s.exhausted]


def vet_seed(
    seed: int,
    size: int,
    density_range: DifficultyRange,
    line_solver: Optional[LineSolver] = None,
) -> Tuple[bool, str, Puzzle]:
    """
    Synthesize the puzzle for *seed* and solve it from an all-UNKNOWN grid.
    Returns (accepted, solver status, puzzle).
    """
    puzzle = synthesize(seed, size, density_range)
    result = ConstraintPropagationSolver.from_grid(puzzle.grid, line_solver=line_solver).solve()
    accepted = result.solved and result.as_binary() == puzzle.grid
    return accepted, result.status, puzzle


def curate_config(
    size: int,
    difficulty: str,
    density_range: DifficultyRange,
    seeds_per_config: int = DEFAULT_SEEDS_PER_CONFIG,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: Optional[random.Random] = None,
    line_solver: Optional[LineSolver] = None,
) -> Tuple[List[int], CurationStats]:
    rng = rng or random.Random()
    line_solver = line_solver or LineSolver()
    key = config_key(size, difficulty)
    stats = CurationStats(config_key=key, target=seeds_per_config)
    seeds: List[int] = []
    tried = set()
    start = time.perf_counter()

    while len(seeds) < seeds_per_config and stats.attempts < max_attempts:
        seed = rng.randrange(SEED_UPPER_BOUND)
        if seed in tried:
            continue
        tried.add(seed)
        stats.attempts += 1

        accepted, status, puzzle = vet_seed(seed, size, density_range, line_solver)
        if accepted:
            seeds.append(seed)
            stats.accepted += 1
            stats.accepted_densities.append(puzzle.target_density)
            if stats.accepted % 10 == 0:
                logger.debug("  %s progress: %d/%d", key, stats.accepted, seeds_per_config)
        else:
            if status == STATUS_LIMIT:
                stats.rejected_limit += 1
            else:
                stats.rejected_stuck += 1
            stats.rejected_densities.append(puzzle.target_density)

    stats.elapsed = time.perf_counter() - start
    if stats.exhausted:
        logger.warning(
            "Attempt budget exhausted for %s: %d/%d seeds after %d attempts",
            key, stats.accepted, seeds_per_config, stats.attempts,
        )
    else:
        logger.info("%s: %d seeds in %d attempts (%.2fs)", key, stats.accepted, stats.attempts, stats.elapsed)
    return seeds, stats


def _curate_config_job(job) -> Tuple[List[int], CurationStats]:
    size, difficulty, density_range, seeds_per_config, max_attempts, rng_seed, safe_limit = job
    return curate_config(
        size,
        difficulty,
        density_range,
        seeds_per_config=seeds_per_config,
        max_attempts=max_attempts,
        rng=random.Random(rng_seed),
        line_solver=LineSolver(safe_limit=safe_limit),
    )


class SeedPoolCurator:
    """
    Drives curation across every configuration of interest.

    entropy_seed makes a run reproducible; leave it None to draw seeds
    from system entropy. Each configuration gets its own generator
    derived from the master one, so results do not depend on *workers*.
    """

    def __init__(
        self,
        sizes: Sequence[int] = POOL_GRID_SIZES,
        difficulties: Sequence[str] = DIFFICULTY_LEVELS,
        seeds_per_config: int = DEFAULT_SEEDS_PER_CONFIG,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        entropy_seed: Optional[int] = None,
        workers: int = 1,
        difficulty_table: Optional[Mapping[str, DifficultyRange]] = None,
        safe_limit: Optional[int] = None,
    ):
        if seeds_per_config < 0 or max_attempts < 0:
            raise ValueError("seeds_per_config and max_attempts must be non-negative")
        self.sizes = list(sizes)
        self.difficulties = list(difficulties)
        self.seeds_per_config = seeds_per_config
        self.max_attempts = max_attempts
        self.entropy_seed = entropy_seed
        self.workers = max(1, workers)
        self.difficulty_table = dict(DIFFICULTY_CONFIG if difficulty_table is None else difficulty_table)
        self.safe_limit = safe_limit

    def _jobs(self) -> List[tuple]:
        master = random.Random(self.entropy_seed)
        jobs = []
        for size in self.sizes:
            for difficulty in self.difficulties:
                density_range = get_difficulty(difficulty, self.difficulty_table)
                jobs.append((
                    size,
                    difficulty,
                    density_range,
                    self.seeds_per_config,
                    self.max_attempts,
                    master.getrandbits(64),
                    self.safe_limit,
                ))
        return jobs

    def curate(self) -> CurationReport:
        jobs = self._jobs()
        logger.info("Curating %d configurations with %d worker(s)", len(jobs), self.workers)

        if self.workers == 1:
            outcomes = [_curate_config_job(job) for job in jobs]
        else:
            with concurrent.futures.ProcessPoolExecutor(max_workers=self.workers) as executor:
                outcomes = list(executor.map(_curate_config_job, jobs))

        pool: SeedPool = {}
        stats: Dict[str, CurationStats] = {}
        for seeds, config_stats in outcomes:
            pool[config_stats.config_key] = seeds
            stats[config_stats.config_key] = config_stats
        return CurationReport(pool=pool, stats=stats)


# ── Persistence ────────────────────────────────────────────────

def resolve_pool_path(path: Optional[str] = None) -> str:
    """explicit path -> env GRIDDLERS_SEED_POOL -> ./valid_seeds.json"""
    if path:
        return path
    return os.getenv("GRIDDLERS_SEED_POOL") or DEFAULT_POOL_FILENAME


def save_pool(pool: Mapping[str, Iterable[int]], path: Optional[str] = None) -> str:
    """
    Write the pool as indented JSON, replacing any existing file atomically
    so readers never observe a half-written pool.
    """
    path = resolve_pool_path(path)
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    payload = {key: list(seeds) for key, seeds in pool.items()}
    fd, tmp_path = tempfile.mkstemp(prefix=".seeds-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    return path


def load_pool(path: Optional[str] = None) -> SeedPool:
    path = resolve_pool_path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Seed pool {path} must be a JSON object")
    return {str(key): [int(s) for s in seeds] for key, seeds in data.items()}


def pick_seed(
    pool: Mapping[str, Sequence[int]],
    size: int,
    difficulty: str,
    rng: Optional[random.Random] = None,
) -> Tuple[int, bool]:
    """
    A gameplay seed for (size, difficulty): (seed, from_pool).

    Falls back to an unvetted random seed when the pool has nothing for
    the configuration; such a puzzle may need guessing.
    """
    rng = rng or random.Random()
    seeds = pool.get(config_key(size, difficulty)) or []
    if seeds:
        return seeds[rng.randrange(len(seeds))], True
    return rng.randrange(SEED_UPPER_BOUND), False

