"""
Cell states shared by the solver and move replay.

The numbering matches the move wire format: 0 is an unmarked cell, 1 is
filled, 2 is crossed out. For the solver the same values read as
unknown / filled / excluded.
"""

UNKNOWN = 0
EMPTY = UNKNOWN
FILLED = 1
EXCLUDED = 2
CROSSED = EXCLUDED

CELL_STATES = (UNKNOWN, FILLED, EXCLUDED)

_SYMBOLS = {UNKNOWN: ".", FILLED: "#", EXCLUDED: "x"}


def is_cell_state(value) -> bool:
    # bool is an int subclass; True must not pass as FILLED.
    return type(value) is int and value in CELL_STATES


def render_grid(grid) -> str:
    """Compact text view of a state grid, one row per line."""
    return "\n".join("".join(_SYMBOLS.get(v, "?") for v in row) for row in grid)
