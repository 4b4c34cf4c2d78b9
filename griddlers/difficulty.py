"""
Difficulty Configuration
========================
Static density bands for every difficulty tier.

This is the single table read by generation, validation and seed-pool
curation. A puzzle identifier only carries the tier key, so editing a
band here changes every grid issued for that tier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List


class UnknownDifficultyError(KeyError):
    """Raised when a difficulty key is not in the configuration table."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown difficulty: {self.key!r}"


@dataclass(frozen=True)
class DifficultyRange:
    """A band of acceptable fill densities, both ends in [0, 1]."""

    min_density: float
    max_density: float
    label: str = ""

    def __post_init__(self) -> None:
        if not (0.0 <= self.min_density <= 1.0 and 0.0 <= self.max_density <= 1.0):
            raise ValueError(
                f"Density bounds must lie in [0, 1], got "
                f"{self.min_density}..{self.max_density}"
            )
        if self.min_density > self.max_density:
            raise ValueError(
                f"min_density {self.min_density} exceeds max_density {self.max_density}"
            )

    @property
    def span(self) -> float:
        return self.max_density - self.min_density


# Order matters: challenge tokens encode a tier by its index in this list.
DIFFICULTY_LEVELS: List[str] = ["VERY_EASY", "EASY", "MEDIUM", "HARD", "VERY_HARD"]

DAILY_DIFFICULTY = "DAILY"

DIFFICULTY_CONFIG: Dict[str, DifficultyRange] = {
    "VERY_EASY": DifficultyRange(0.63, 0.70, "Very Easy (64-70%)"),
    "EASY": DifficultyRange(0.57, 0.62, "Easy (58-62%)"),
    "MEDIUM": DifficultyRange(0.53, 0.58, "Medium (53-58%)"),
    "HARD": DifficultyRange(0.48, 0.52, "Hard (48-52%)"),
    "VERY_HARD": DifficultyRange(0.40, 0.48, "Very Hard (40-48%)"),
    DAILY_DIFFICULTY: DifficultyRange(0.52, 0.58, "Daily Special"),
}

GRID_SIZES: List[int] = [5, 7, 8, 10, 12, 15, 16, 20, 25]
POOL_GRID_SIZES: List[int] = [5, 10, 15, 20]

_WHITESPACE = re.compile(r"\s+")


def normalize_difficulty_key(key: str) -> str:
    """'very easy' -> 'VERY_EASY'. Whitespace runs collapse to one underscore."""
    return _WHITESPACE.sub("_", key.strip()).upper()


def get_difficulty(key: str, table: Dict[str, DifficultyRange] | None = None) -> DifficultyRange:
    table = DIFFICULTY_CONFIG if table is None else table
    normalized = normalize_difficulty_key(key)
    try:
        return table[normalized]
    except KeyError:
        raise UnknownDifficultyError(normalized) from None
