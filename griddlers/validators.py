"""
Solution Validators
===================
Server-side check of a submitted solve.

The target grid is re-derived from the puzzle identifier with the same
synthesizer the client uses, the player's move history is replayed onto
an empty board, and the two are compared cell by cell.

Nothing here raises on bad input: every malformed identifier, unknown
difficulty or out-of-range move becomes a rejection with a logged reason.
The validator only reads the difficulty table, so one instance can serve
concurrent submissions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from griddlers.cell_state import EMPTY, FILLED, is_cell_state
from griddlers.difficulty import DIFFICULTY_CONFIG, DifficultyRange, UnknownDifficultyError, get_difficulty
from griddlers.generators.grid_synthesizer import generate_grid
from griddlers.puzzle_id import MalformedPuzzleIdError, PuzzleId, parse_puzzle_id

logger = logging.getLogger(__name__)

Grid = List[List[int]]


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    new_state: int
    timestamp_ms: int

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "Move":
        """
        Build a Move from the JSON shape {r, c, newState, time}.

        Raises ValueError for missing keys or non-integer fields.
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"Move must be an object, got {type(payload).__name__}")
        try:
            values = (payload["r"], payload["c"], payload["newState"], payload["time"])
        except KeyError as e:
            raise ValueError(f"Move is missing field {e.args[0]!r}") from None
        for name, value in zip(("r", "c", "newState", "time"), values):
            if not _is_int(value):
                raise ValueError(f"Move field {name!r} must be an integer, got {value!r}")
        return cls(row=values[0], col=values[1], new_state=values[2], timestamp_ms=values[3])

    def to_wire(self) -> Dict[str, int]:
        return {"r": self.row, "c": self.col, "newState": self.new_state, "time": self.timestamp_ms}


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: str
    errors: int = 0
    elapsed_ms: Optional[int] = None

    def __bool__(self) -> bool:
        return self.ok


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_move(move: Move, size: int) -> Tuple[bool, str]:
    """
    Check one replayed move against the board.
    Returns: (bool, reason)
    """
    if not (0 <= move.row < size and 0 <= move.col < size):
        return False, f"Out of bounds move [{move.row},{move.col}]"
    if not is_cell_state(move.new_state):
        return False, f"Invalid cell state {move.new_state!r} at [{move.row},{move.col}]"
    return True, "OK"


def replay_moves(moves: Iterable[Move], size: int) -> Tuple[Optional[Grid], str]:
    """
    Apply *moves* in order onto an all-empty board.
    Returns (grid, "OK"), or (None, reason) at the first invalid move.
    """
    grid = [[EMPTY] * size for _ in range(size)]
    for move in moves:
        valid, reason = is_valid_move(move, size)
        if not valid:
            return None, reason
        grid[move.row][move.col] = move.new_state
    return grid, "OK"


def count_discrepancies(user_grid: Grid, target_grid: Grid) -> int:
    """
    Cells where the replayed board disagrees with the solution.
    Every target cell must be FILLED; every other cell must not be.
    Crossed and unmarked cells are equivalent.
    """
    errors = 0
    for user_row, target_row in zip(user_grid, target_grid):
        for user_state, target in zip(user_row, target_row):
            if target == 1 and user_state != FILLED:
                errors += 1
            elif target == 0 and user_state == FILLED:
                errors += 1
    return errors


def check_win_condition(user_grid: Grid, target_grid: Grid) -> Tuple[bool, str]:
    """
    Check if the board matches the solution.
    Returns: (bool, reason)
    """
    errors = count_discrepancies(user_grid, target_grid)
    if errors:
        return False, f"{errors} discrepancies found in final grid"
    return True, "Solved"


class SolutionValidator:
    """
    Re-derives the target grid for a puzzle id and checks a move history.

    min_elapsed_ms rejects histories whose first-to-last move span is
    shorter than a human could plausibly manage; 0 only rejects negative
    spans. max_size caps the board a submission may ask us to build.
    """

    DEFAULT_MAX_SIZE = 100

    def __init__(
        self,
        difficulties: Optional[Mapping[str, DifficultyRange]] = None,
        min_elapsed_ms: int = 0,
        max_size: int = DEFAULT_MAX_SIZE,
    ):
        self.difficulties = dict(DIFFICULTY_CONFIG if difficulties is None else difficulties)
        self.min_elapsed_ms = min_elapsed_ms
        self.max_size = max_size

    def _reject(self, label: str, reason: str, **extra) -> ValidationResult:
        logger.warning("[VALIDATION] Failed for %s: %s", label, reason)
        return ValidationResult(ok=False, reason=reason, **extra)

    def check(self, puzzle_id: Union[str, PuzzleId], history: Any) -> ValidationResult:
        label = str(puzzle_id)

        if not history or not isinstance(history, (list, tuple)):
            return self._reject(label, "No history")

        if isinstance(puzzle_id, PuzzleId):
            pid = puzzle_id
        else:
            try:
                pid = parse_puzzle_id(puzzle_id)
            except MalformedPuzzleIdError as e:
                return self._reject(label, str(e))

        if pid.size < 1 or pid.size > self.max_size:
            return self._reject(label, f"Grid size {pid.size} outside 1..{self.max_size}")

        try:
            density_range = get_difficulty(pid.difficulty, self.difficulties)
        except UnknownDifficultyError as e:
            return self._reject(label, str(e))

        logger.info("[VALIDATION] Starting for %s | Moves: %d", label, len(history))

        moves: List[Move] = []
        for entry in history:
            if isinstance(entry, Move):
                moves.append(entry)
                continue
            try:
                moves.append(Move.from_wire(entry))
            except ValueError as e:
                return self._reject(label, f"Malformed move: {e}")

        user_grid, reason = replay_moves(moves, pid.size)
        if user_grid is None:
            return self._reject(label, reason)

        elapsed_ms = moves[-1].timestamp_ms - moves[0].timestamp_ms
        if elapsed_ms < 0:
            return self._reject(label, f"Negative time ({elapsed_ms}ms)", elapsed_ms=elapsed_ms)
        if elapsed_ms < self.min_elapsed_ms:
            return self._reject(
                label,
                f"Implausibly fast solve ({elapsed_ms}ms < {self.min_elapsed_ms}ms)",
                elapsed_ms=elapsed_ms,
            )

        target_grid = generate_grid(pid.seed, pid.size, density_range)
        errors = count_discrepancies(user_grid, target_grid)
        if errors:
            return self._reject(
                label,
                f"{errors} discrepancies found in final grid",
                errors=errors,
                elapsed_ms=elapsed_ms,
            )

        logger.info("[VALIDATION] Passed: %dms in history.", elapsed_ms)
        return ValidationResult(ok=True, reason="OK", elapsed_ms=elapsed_ms)

    def validate(self, puzzle_id: Union[str, PuzzleId], history: Any) -> bool:
        return self.check(puzzle_id, history).ok


_default_validator = SolutionValidator()


def validate_solution(puzzle_id: Union[str, PuzzleId], history: Any) -> bool:
    return _default_validator.validate(puzzle_id, history)
