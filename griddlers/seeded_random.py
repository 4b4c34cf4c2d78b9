"""
Seeded Random
=============
Deterministic 32-bit generator shared by every puzzle call site.

The stream is Mulberry32: a fixed odd increment on a 32-bit counter,
followed by an xorshift-multiply mix. Client, server and the seed-pool
tooling must all draw the exact same floats for the same seed, so the
arithmetic below is frozen. Changing it is a protocol change and bumps
ALGORITHM_VERSION.
"""

from __future__ import annotations

from typing import List, MutableSequence, TypeVar

T = TypeVar("T")

ALGORITHM_VERSION = "mulberry32-v1"

UINT32_MASK = 0xFFFFFFFF
UINT32_SCALE = 4294967296.0  # 2 ** 32
GOLDEN_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply (the low 32 bits of a * b)."""
    return (a * b) & UINT32_MASK


class SeededRandom:
    """
    Reproducible float stream in [0, 1) from a 32-bit integer seed.

    Any Python int is accepted; it is reduced modulo 2**32 exactly the
    way a signed 32-bit seed wraps, so -1 and 4294967295 are the same seed.
    """

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._state = self.seed & UINT32_MASK
        self.draws = 0

    def next(self) -> float:
        self._state = (self._state + GOLDEN_INCREMENT) & UINT32_MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        self.draws += 1
        return ((t ^ (t >> 14)) & UINT32_MASK) / UINT32_SCALE

    def boolean(self, probability: float = 0.5) -> bool:
        """True with the given probability (one draw)."""
        return self.next() < probability

    def range_int(self, low: int, high: int) -> int:
        """Integer in [low, high], both inclusive (one draw)."""
        return int(self.next() * (high - low + 1)) + low

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """
        In-place Fisher-Yates shuffle walking from the last index down.

        Consumes exactly len(items) - 1 draws. Returns *items* for chaining.
        """
        for i in range(len(items) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            items[i], items[j] = items[j], items[i]
        return items

    def sample_floats(self, count: int) -> List[float]:
        return [self.next() for _ in range(count)]

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed}, draws={self.draws})"
