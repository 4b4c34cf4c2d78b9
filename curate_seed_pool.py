"""
Seed Pool Curation Script
=========================
Builds valid_seeds.json: for every (size, difficulty) configuration, a
list of seeds whose puzzles solve by line logic alone.

Run:  python curate_seed_pool.py --seeds 10 --attempts 5000 --workers 4
"""

import sys
import os
import csv
import argparse
import logging
from typing import List

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from griddlers.difficulty import DIFFICULTY_LEVELS, GRID_SIZES, POOL_GRID_SIZES, normalize_difficulty_key
from griddlers.seed_pool import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_SEEDS_PER_CONFIG,
    CurationReport,
    SeedPoolCurator,
    resolve_pool_path,
    save_pool,
)


def parse_int_list(text: str) -> List[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {text!r}")


def parse_difficulties(text: str) -> List[str]:
    return [normalize_difficulty_key(part) for part in text.split(",") if part.strip()]


def write_stats_csv(report: CurationReport, path: str) -> None:
    rows = [s.to_row() for s in report.stats.values()]
    if not rows:
        return
    with open(path, "w", newline="") as f:
        dict_writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        dict_writer.writeheader()
        dict_writer.writerows(rows)
    print(f"Stats saved to {path}")


def print_summary(report: CurationReport) -> None:
    print("\nSummary:")
    print(f"{'Config':<16} | {'Seeds':>7} | {'Attempts':>8} | {'Accept %':>8} | {'Limit':>5} | {'Time (s)':>8}")
    print("-" * 68)
    for key, s in report.stats.items():
        seeds = f"{s.accepted}/{s.target}"
        print(
            f"{key:<16} | {seeds:>7} | {s.attempts:>8} | "
            f"{s.acceptance_rate * 100:>7.1f}% | {s.rejected_limit:>5} | {s.elapsed:>8.2f}"
        )

    short = report.short_configs
    print(f"\nTotal seeds: {report.total_seeds}")
    if short:
        print(f"Configs below target ({len(short)}): {', '.join(short)}")


def main():
    parser = argparse.ArgumentParser(description="Curate logically solvable puzzle seeds")
    parser.add_argument("--sizes", type=parse_int_list, default=POOL_GRID_SIZES,
                        help="Comma-separated grid sizes (default: %(default)s)")
    parser.add_argument("--difficulties", type=parse_difficulties, default=DIFFICULTY_LEVELS,
                        help="Comma-separated difficulty keys")
    parser.add_argument("--seeds", type=int, default=DEFAULT_SEEDS_PER_CONFIG, help="Seeds per config")
    parser.add_argument("--attempts", type=int, default=DEFAULT_MAX_ATTEMPTS, help="Attempt budget per config")
    parser.add_argument("--workers", type=int, default=1, help="Parallel worker processes")
    parser.add_argument("--entropy-seed", type=int, default=None,
                        help="Seed the seed search for a reproducible run")
    parser.add_argument("--safe-limit", type=int, default=None,
                        help="Max line placements enumerated per line solve")
    parser.add_argument("--output", type=str, default=None,
                        help="Pool JSON path (default: $GRIDDLERS_SEED_POOL or valid_seeds.json)")
    parser.add_argument("--stats-csv", type=str, default=None, help="Optional per-config stats CSV")
    parser.add_argument("--verbose", action="store_true", help="Log per-config progress")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    output = resolve_pool_path(args.output)
    configs = len(args.sizes) * len(args.difficulties)
    print(f"Curating {configs} configs: sizes={args.sizes} difficulties={args.difficulties}")
    print(f"Target {args.seeds} seeds/config, budget {args.attempts} attempts, {args.workers} worker(s)")
    unplayable = [s for s in args.sizes if s not in GRID_SIZES]
    if unplayable:
        print(f"Note: sizes {unplayable} are not offered in play ({GRID_SIZES})")

    curator = SeedPoolCurator(
        sizes=args.sizes,
        difficulties=args.difficulties,
        seeds_per_config=args.seeds,
        max_attempts=args.attempts,
        entropy_seed=args.entropy_seed,
        workers=args.workers,
        safe_limit=args.safe_limit,
    )
    report = curator.curate()

    path = save_pool(report.pool, output)
    print(f"\nSeed pool saved to {path}")

    if args.stats_csv:
        write_stats_csv(report, args.stats_csv)

    print_summary(report)


if __name__ == "__main__":
    main()
