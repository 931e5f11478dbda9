"""Classic Conway patterns and a small plaintext pattern format.

Patterns are 2D boolean numpy arrays. Text patterns use one line per row,
'#' or 'O' for a live cell and '.' for a dead one; lines starting with
'!' are comments.
"""

from pathlib import Path
from typing import Dict, Union

import numpy as np

from .core.ingest import validate_grid

# Moves one cell down and one cell right every 4 generations
GLIDER = np.array([
    [False, True, False],
    [False, False, True],
    [True, True, True]
], dtype=bool)

BLOCK = np.array([
    [True, True],
    [True, True]
], dtype=bool)

BLINKER = np.array([[True, True, True]], dtype=bool)

PATTERNS: Dict[str, np.ndarray] = {
    'glider': GLIDER,
    'block': BLOCK,
    'blinker': BLINKER,
}

LIVE_CHARS = '#O'
DEAD_CHARS = '.'


def place_pattern(rows: int, cols: int, pattern: np.ndarray,
                  row: int = 0, col: int = 0) -> np.ndarray:
    """Place a pattern onto an empty toroidal grid.

    Args:
        rows: Grid rows
        cols: Grid columns
        pattern: 2D boolean pattern
        row: Row of the pattern's top-left cell
        col: Column of the pattern's top-left cell

    Returns:
        New rows x cols boolean array (pattern wraps around edges)
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")

    grid = np.zeros((rows, cols), dtype=bool)
    pattern_rows, pattern_cols = pattern.shape
    for pr in range(pattern_rows):
        for pc in range(pattern_cols):
            if pattern[pr, pc]:
                grid[(row + pr) % rows, (col + pc) % cols] = True
    return grid


def parse_pattern(text: str) -> np.ndarray:
    """Parse a text pattern.

    Raises:
        ValueError: On unknown characters
        MalformedGridError: If rows differ in width or there are none
    """
    rows = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith('!'):
            continue
        row = []
        for char in line:
            if char in LIVE_CHARS:
                row.append(True)
            elif char in DEAD_CHARS:
                row.append(False)
            else:
                raise ValueError(f"Unexpected character {char!r} on line {line_number}")
        rows.append(row)
    return validate_grid(rows)


def load_pattern_file(path: Union[str, Path]) -> np.ndarray:
    """Read a text pattern from disk."""
    return parse_pattern(Path(path).read_text(encoding='utf-8'))


def get_pattern(name: str) -> np.ndarray:
    """Look up a built-in pattern by name (returns a copy)."""
    if name not in PATTERNS:
        raise ValueError(f"Unknown pattern: {name} (expected one of {sorted(PATTERNS)})")
    return PATTERNS[name].copy()
