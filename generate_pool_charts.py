"""
Seed Pool Chart Generator
=========================
Runs a seed-pool curation pass and charts how often each configuration
yields logically solvable puzzles.

Run:  python generate_pool_charts.py --seeds 10 --attempts 500
Output: pool_charts/ folder with 4 PNG files.
"""

import sys
import os
import argparse
import numpy as np
from typing import Dict, List

# Ensure project root is on the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for file output
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

from griddlers.clues import puzzle_clues
from griddlers.difficulty import DIFFICULTY_CONFIG, DIFFICULTY_LEVELS, POOL_GRID_SIZES
from griddlers.generators.grid_synthesizer import synthesize
from griddlers.puzzle_id import config_key
from griddlers.seed_pool import CurationReport, CurationStats, SeedPoolCurator

# ─────────────────────────────────────────────────────────────
# Color Palette & Styling
# ─────────────────────────────────────────────────────────────
TIER_COLORS = {
    "VERY_EASY": "#51CF66",
    "EASY":      "#94D82D",
    "MEDIUM":    "#FCC419",
    "HARD":      "#FF922B",
    "VERY_HARD": "#FF6B6B",
}
BG_COLOR = "#1A1B26"
CARD_COLOR = "#24283B"
TEXT_COLOR = "#C0CAF5"
GRID_COLOR = "#414868"
ACCENT_GOLD = "#E0AF68"


def setup_style():
    """Apply a dark, presentation-friendly matplotlib style."""
    plt.rcParams.update({
        "figure.facecolor": BG_COLOR,
        "axes.facecolor": CARD_COLOR,
        "axes.edgecolor": GRID_COLOR,
        "axes.labelcolor": TEXT_COLOR,
        "axes.titleweight": "bold",
        "text.color": TEXT_COLOR,
        "xtick.color": TEXT_COLOR,
        "ytick.color": TEXT_COLOR,
        "grid.color": GRID_COLOR,
        "grid.alpha": 0.3,
        "font.size": 13,
        "axes.titlesize": 16,
        "axes.labelsize": 13,
        "legend.facecolor": CARD_COLOR,
        "legend.edgecolor": GRID_COLOR,
        "legend.fontsize": 11,
        "figure.dpi": 180,
        "savefig.dpi": 180,
        "savefig.bbox": "tight",
        "savefig.facecolor": BG_COLOR,
    })


def _style_axes(ax):
    ax.grid(axis="y", zorder=0)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)


def _stats_for(report: CurationReport, size: int, tier: str) -> CurationStats:
    return report.stats.get(config_key(size, tier))


# ─────────────────────────────────────────────────────────────
# Chart Generators
# ─────────────────────────────────────────────────────────────
def add_value_labels(ax, bars, fmt="{:.0f}%", offset=1.5):
    """Add value labels on top of bars."""
    for bar in bars:
        h = bar.get_height()
        if h > 0:
            ax.text(bar.get_x() + bar.get_width() / 2, h + offset,
                    fmt.format(h), ha="center", va="bottom",
                    fontsize=8, fontweight="bold", color=TEXT_COLOR)


def _grouped_bars(report, sizes, tiers, value_fn, ax, fmt, offset):
    x = np.arange(len(sizes))
    width = 0.8 / max(len(tiers), 1)
    for i, tier in enumerate(tiers):
        values = []
        for size in sizes:
            stats = _stats_for(report, size, tier)
            values.append(value_fn(stats) if stats else 0)
        bars = ax.bar(x + i * width, values, width, label=tier.replace("_", " ").title(),
                      color=TIER_COLORS.get(tier, ACCENT_GOLD), edgecolor="none",
                      alpha=0.9, zorder=3)
        add_value_labels(ax, bars, fmt=fmt, offset=offset)
    ax.set_xticks(x + width * (len(tiers) - 1) / 2)
    ax.set_xticklabels([f"{s}x{s}" for s in sizes])
    ax.set_xlabel("Grid Size")


def chart_1_acceptance_rate(report, sizes, tiers, out_dir):
    """Grouped bars: share of attempted seeds that were logically solvable."""
    fig, ax = plt.subplots(figsize=(11, 6))
    _grouped_bars(report, sizes, tiers, lambda s: 100 * s.acceptance_rate, ax, "{:.0f}%", 1.5)
    ax.set_ylabel("Solvable Seeds (%)")
    ax.set_title("Logically Solvable Share by Configuration", fontsize=18, pad=15)
    ax.set_ylim(0, 115)
    ax.legend(loc="upper right", ncol=len(tiers), fontsize=9)
    _style_axes(ax)

    fig.savefig(os.path.join(out_dir, "1_acceptance_rate.png"))
    plt.close(fig)
    print("  ✓ Chart 1: Acceptance Rate")


def chart_2_attempts(report, sizes, tiers, out_dir):
    """Grouped bars: attempts spent to fill each configuration (log scale)."""
    fig, ax = plt.subplots(figsize=(11, 6))
    _grouped_bars(report, sizes, tiers, lambda s: s.attempts, ax, "{:.0f}", 0)
    ax.set_yscale("log")
    ax.set_ylabel("Attempts (log)")
    ax.set_title("Attempts Needed per Configuration", fontsize=18, pad=15)
    ax.legend(loc="upper left", ncol=len(tiers), fontsize=9)
    _style_axes(ax)

    fig.savefig(os.path.join(out_dir, "2_attempts.png"))
    plt.close(fig)
    print("  ✓ Chart 2: Attempts")


def chart_3_density(report, tiers, out_dir):
    """Histograms of target density, accepted vs rejected, one panel per tier."""
    fig, axes = plt.subplots(1, len(tiers), figsize=(4 * len(tiers), 4.5), sharey=True, squeeze=False)
    axes = axes[0]

    for ax, tier in zip(axes, tiers):
        accepted: List[float] = []
        rejected: List[float] = []
        for key, stats in report.stats.items():
            if key.split(":", 1)[1] == tier:
                accepted.extend(stats.accepted_densities)
                rejected.extend(stats.rejected_densities)

        band = DIFFICULTY_CONFIG[tier]
        bins = np.linspace(band.min_density, band.max_density, 11) if band.span > 0 else 10
        if rejected:
            ax.hist(rejected, bins=bins, color=GRID_COLOR, alpha=0.9, label="rejected", zorder=2)
        if accepted:
            ax.hist(accepted, bins=bins, color=TIER_COLORS.get(tier, ACCENT_GOLD),
                    alpha=0.8, label="accepted", zorder=3)
        ax.set_title(tier.replace("_", " ").title(), fontsize=13)
        ax.set_xlabel("Target Density")
        _style_axes(ax)

    axes[0].set_ylabel("Seeds")
    axes[-1].legend(loc="upper right", fontsize=9)
    fig.suptitle("Target Density: Accepted vs Rejected", fontsize=16, fontweight="bold")

    fig.savefig(os.path.join(out_dir, "3_density_histograms.png"))
    plt.close(fig)
    print("  ✓ Chart 3: Density Histograms")


def chart_4_sample_puzzle(report, out_dir):
    """Render the first pooled puzzle with its clues, as a sanity check of the pool."""
    sample = next(((key, seeds[0]) for key, seeds in report.pool.items() if seeds), None)
    if sample is None:
        print("  - Chart 4 skipped: pool is empty")
        return

    key, seed = sample
    size_text, tier = key.split(":", 1)
    puzzle = synthesize(seed, int(size_text), DIFFICULTY_CONFIG[tier])
    rows, cols = puzzle_clues(puzzle.grid)
    board = np.array(puzzle.grid)

    fig, ax = plt.subplots(figsize=(7, 7))
    ax.imshow(board, cmap=ListedColormap([CARD_COLOR, ACCENT_GOLD]), vmin=0, vmax=1)
    ax.set_xticks(np.arange(puzzle.size))
    ax.set_yticks(np.arange(puzzle.size))
    ax.set_xticklabels(["\n".join(str(n) for n in clue) for clue in cols], fontsize=8)
    ax.set_yticklabels([" ".join(str(n) for n in clue) for clue in rows], fontsize=8)
    ax.xaxis.tick_top()
    ax.set_xticks(np.arange(-0.5, puzzle.size, 1), minor=True)
    ax.set_yticks(np.arange(-0.5, puzzle.size, 1), minor=True)
    ax.grid(which="minor", color=GRID_COLOR, linewidth=1)
    ax.tick_params(which="minor", length=0)
    ax.set_title(f"{puzzle.title}  ({key}, density {puzzle.target_density:.2f})", fontsize=12, pad=40)

    fig.savefig(os.path.join(out_dir, "4_sample_puzzle.png"))
    plt.close(fig)
    print("  ✓ Chart 4: Sample Puzzle")


# ─────────────────────────────────────────────────────────────
# Summary Table
# ─────────────────────────────────────────────────────────────
def print_summary(report: CurationReport, tiers: List[str]):
    """Print per-tier acceptance to console."""
    print("\n" + "=" * 60)
    print("  CURATION SUMMARY")
    print("=" * 60)
    print(f"  {'Tier':<12} {'Attempts':>10} {'Accepted':>10} {'Rate':>8} {'Mean density':>14}")
    print("-" * 60)
    by_tier: Dict[str, List[CurationStats]] = {t: [] for t in tiers}
    for key, stats in report.stats.items():
        by_tier.setdefault(key.split(":", 1)[1], []).append(stats)
    for tier, entries in by_tier.items():
        attempts = sum(s.attempts for s in entries)
        accepted = sum(s.accepted for s in entries)
        densities = [d for s in entries for d in s.accepted_densities]
        rate = 100 * accepted / attempts if attempts else 0
        mean_density = np.mean(densities) if densities else float("nan")
        print(f"  {tier:<12} {attempts:>10} {accepted:>10} {rate:>7.1f}% {mean_density:>14.3f}")
    print("=" * 60)


# ─────────────────────────────────────────────────────────────
# Main
# ─────────────────────────────────────────────────────────────
def main():
    parser = argparse.ArgumentParser(description="Generate Seed Pool Charts")
    parser.add_argument("--seeds", type=int, default=10, help="Seeds per configuration (default: 10)")
    parser.add_argument("--attempts", type=int, default=500, help="Attempt budget per configuration")
    parser.add_argument("--workers", type=int, default=1, help="Parallel worker processes")
    parser.add_argument("--entropy-seed", type=int, default=None, help="Reproducible seed search")
    parser.add_argument("--quick", action="store_true", help="Quick mode: 5x5 and 10x10 only")
    args = parser.parse_args()

    out_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "pool_charts")
    os.makedirs(out_dir, exist_ok=True)

    setup_style()

    sizes = [5, 10] if args.quick else list(POOL_GRID_SIZES)
    tiers = list(DIFFICULTY_LEVELS)

    print(f"  Sizes          : {sizes}")
    print(f"  Seeds / config : {args.seeds}")
    print(f"  Attempt budget : {args.attempts}")
    print(f"  Output folder  : {out_dir}")
    print()

    print("Phase 1/2: Curating seeds...")
    curator = SeedPoolCurator(
        sizes=sizes,
        difficulties=tiers,
        seeds_per_config=args.seeds,
        max_attempts=args.attempts,
        entropy_seed=args.entropy_seed,
        workers=args.workers,
    )
    report = curator.curate()

    print("\nPhase 2/2: Generating Charts...")
    chart_1_acceptance_rate(report, sizes, tiers, out_dir)
    chart_2_attempts(report, sizes, tiers, out_dir)
    chart_3_density(report, tiers, out_dir)
    chart_4_sample_puzzle(report, out_dir)

    print_summary(report, tiers)
    print(f"All charts saved to: {out_dir}")


if __name__ == "__main__":
    main()
