"""
Puzzle Identity
===============
Seed derivation and the string encodings that name a puzzle.

A puzzle is fully determined by (size, difficulty key, seed). This module
turns user input, calendar dates and shared links into that triple and
back, without touching generation itself.
"""

from __future__ import annotations

import base64
import binascii
import datetime as dt
import re
from dataclasses import dataclass
from typing import Optional

from griddlers.difficulty import (
    DAILY_DIFFICULTY,
    DIFFICULTY_LEVELS,
    normalize_difficulty_key,
)

DAILY_SIZES = [10, 12, 15, 20]

_INT_FIELD = re.compile(r"[+-]?[0-9]+")


class MalformedPuzzleIdError(ValueError):
    """Raised when a puzzle identifier string cannot be parsed."""


@dataclass(frozen=True)
class PuzzleId:
    size: int
    difficulty: str
    seed: int

    def __str__(self) -> str:
        return format_puzzle_id(self.size, self.difficulty, self.seed)

    @property
    def config_key(self) -> str:
        """Seed-pool key for this puzzle's (size, difficulty) configuration."""
        return config_key(self.size, self.difficulty)


@dataclass(frozen=True)
class DailyPuzzle:
    seed: int
    size: int
    difficulty: str = DAILY_DIFFICULTY


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_units(text: str):
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_text_seed(text: str) -> int:
    """
    31-multiplier string hash over UTF-16 code units, wrapped to signed
    32 bits after every step; the absolute value is returned.
    """
    h = 0
    for unit in _utf16_units(text):
        h = _to_int32((h << 5) - h + unit)
    return abs(h)


def seed_from_text(text: str) -> int:
    """
    Seed for a user-entered value: all-digit text is read as a base-10
    integer, anything else is hashed. Surrounding whitespace is ignored.
    """
    text = text.strip()
    if not text:
        return 0
    if text.isascii() and text.isdigit():
        return int(text, 10)
    return hash_text_seed(text)


def daily_seed(date: dt.date) -> int:
    """YYYYMMDD of *date* as an integer. Datetimes are taken in UTC."""
    if isinstance(date, dt.datetime):
        if date.tzinfo is not None:
            date = date.astimezone(dt.timezone.utc)
        date = date.date()
    return date.year * 10000 + date.month * 100 + date.day


def daily_puzzle_config(date: Optional[dt.date] = None) -> DailyPuzzle:
    if date is None:
        date = dt.datetime.now(dt.timezone.utc)
    seed = daily_seed(date)
    size = DAILY_SIZES[(seed * 31 + 7) % len(DAILY_SIZES)]
    return DailyPuzzle(seed=seed, size=size)


def config_key(size: int, difficulty: str) -> str:
    return f"{size}:{normalize_difficulty_key(difficulty)}"


def format_puzzle_id(size: int, difficulty: str, seed: int) -> str:
    return f"{size}:{normalize_difficulty_key(difficulty)}:{seed}"


def _parse_int(text: str, field: str, raw: str) -> int:
    text = text.strip()
    if not _INT_FIELD.fullmatch(text):
        raise MalformedPuzzleIdError(f"Puzzle id {raw!r} has a non-integer {field}")
    return int(text, 10)


def parse_puzzle_id(raw: str) -> PuzzleId:
    """Parse "<size>:<difficulty>:<seed>". Raises MalformedPuzzleIdError."""
    if not isinstance(raw, str):
        raise MalformedPuzzleIdError(f"Puzzle id must be a string, got {type(raw).__name__}")
    parts = raw.split(":")
    if len(parts) != 3:
        raise MalformedPuzzleIdError(f"Puzzle id {raw!r} must have 3 colon-separated fields")
    size_text, difficulty, seed_text = parts
    size = _parse_int(size_text, "size", raw)
    seed = _parse_int(seed_text, "seed", raw)
    if size < 1:
        raise MalformedPuzzleIdError(f"Puzzle id {raw!r} has a non-positive size")
    key = normalize_difficulty_key(difficulty)
    if not key:
        raise MalformedPuzzleIdError(f"Puzzle id {raw!r} has an empty difficulty")
    return PuzzleId(size=size, difficulty=key, seed=seed)


# -- Challenge tokens -------------------------------------------------------
# Shareable link payload: base64("<size>:<tier index>:<seed>"), padding
# stripped, then reversed. Obfuscation only, not a security boundary.

def encode_challenge(seed: int, size: int, difficulty: str) -> str:
    index = DIFFICULTY_LEVELS.index(normalize_difficulty_key(difficulty))
    raw = f"{size}:{index}:{seed}"
    b64 = base64.b64encode(raw.encode("ascii")).decode("ascii").rstrip("=")
    return b64[::-1]


def decode_challenge(token: str) -> Optional[PuzzleId]:
    """Inverse of encode_challenge; None for anything that does not decode."""
    b64 = token.strip()[::-1]
    b64 += "=" * (-len(b64) % 4)
    try:
        raw = base64.b64decode(b64, validate=True).decode("ascii")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None

    parts = raw.split(":")
    if len(parts) != 3:
        return None
    if not all(_INT_FIELD.fullmatch(p) for p in parts):
        return None
    size, index, seed = (int(p, 10) for p in parts)
    if size < 1 or not 0 <= index < len(DIFFICULTY_LEVELS):
        return None
    return PuzzleId(size=size, difficulty=DIFFICULTY_LEVELS[index], seed=seed)
