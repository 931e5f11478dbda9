"""Validation and encryption of initial configurations.

Runs on the key holder's side: the plaintext grid is checked for shape
before a single ciphertext is created.
"""

import logging
from typing import Sequence, Union

import numpy as np

from ..backends.base import ClientKey
from ..errors import MalformedGridError
from .board import Board
from .circuits import ZeroTriple

logger = logging.getLogger(__name__)

GridLike = Union[np.ndarray, Sequence[Sequence[bool]]]


def validate_grid(grid: GridLike) -> np.ndarray:
    """Check that a plaintext grid is non-empty and rectangular.

    Args:
        grid: 2D numpy array or sequence of equal-width rows

    Returns:
        The grid as a 2D boolean array

    Raises:
        MalformedGridError: If the grid is empty, ragged or not two-dimensional
    """
    if isinstance(grid, np.ndarray):
        if grid.ndim != 2:
            raise MalformedGridError(f"Grid must be two-dimensional, got {grid.ndim} dimensions")
        if grid.size == 0:
            raise MalformedGridError(f"Grid must not be empty, got shape {grid.shape}")
        return grid.astype(bool)

    try:
        rows = [list(row) for row in grid]
    except TypeError:
        raise MalformedGridError("Grid must be a sequence of rows of cells") from None
    if not rows:
        raise MalformedGridError("Grid must have at least one row")

    width = len(rows[0])
    if width == 0:
        raise MalformedGridError("Grid rows must not be empty")
    for index, row in enumerate(rows):
        if len(row) != width:
            raise MalformedGridError(
                f"Row {index} has {len(row)} cells, expected {width} (grid must be rectangular)"
            )

    return np.array(rows, dtype=bool)


def encrypt_grid(grid: GridLike, client_key: ClientKey) -> Board:
    """Encrypt a plaintext configuration into a board.

    Args:
        grid: Initial configuration
        client_key: Key used to encrypt each cell

    Returns:
        Board at generation 0
    """
    cells = validate_grid(grid)
    rows, cols = cells.shape
    logger.info(f"Encrypting {rows}x{cols} initial configuration ({int(cells.sum())} live cells)")
    return Board(rows, cols, [client_key.encrypt(bool(alive)) for alive in cells.flat])


def encrypt_zero_triple(client_key: ClientKey) -> ZeroTriple:
    """Encrypt False three times, the adder's starting sum."""
    return ZeroTriple(client_key.encrypt(False), client_key.encrypt(False),
                      client_key.encrypt(False))
