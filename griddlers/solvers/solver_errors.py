"""
Solver safety errors and limits.
"""

from __future__ import annotations

import os
from typing import Any, Optional

DEFAULT_SAFE_LIMIT = 200000
STATE_SPACE_EXPLOSION_MESSAGE = "Line placement enumeration exceeded the configured safety limit."


class ControlledStateExplosionError(RuntimeError):
    """
    Raised when line enumeration crosses the configured bound on candidate placements.
    """

    def __init__(
        self,
        message: str = STATE_SPACE_EXPLOSION_MESSAGE,
        *,
        safe_limit: int | None = None,
        observed: int | None = None,
        context: str | None = None,
    ) -> None:
        super().__init__(message)
        self.safe_limit = safe_limit
        self.observed = observed
        self.context = context


class SolverInvariantError(RuntimeError):
    """A resolved cell was about to be overwritten with a different value."""

    def __init__(self, row: int, col: int, old: int, new: int) -> None:
        super().__init__(f"Cell ({row}, {col}) already resolved to {old}, refusing {new}")
        self.row = row
        self.col = col
        self.old = old
        self.new = new


def resolve_safe_limit(override: Optional[Any] = None) -> int:
    """
    Resolve the per-line enumeration limit.

    Priority:
    1) explicit override
    2) env GRIDDLERS_SAFE_LIMIT
    3) DEFAULT_SAFE_LIMIT
    """
    raw = override
    if raw is None:
        raw = os.getenv("GRIDDLERS_SAFE_LIMIT")
    if raw is None:
        return DEFAULT_SAFE_LIMIT

    try:
        limit = int(raw)
        if limit > 0:
            return limit
    except (TypeError, ValueError):
        pass
    return DEFAULT_SAFE_LIMIT
