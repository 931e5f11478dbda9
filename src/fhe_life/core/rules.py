"""
Plaintext Conway's Game of Life Rules

Reference implementation of the transition rule on unencrypted boolean
grids. The encrypted circuits must agree with it cell for cell, so
neighbor offsets and toroidal wrapping mirror the encrypted board exactly.
"""

from typing import Set

import numpy as np

SURVIVAL_SET: Set[int] = {2, 3}  # Live cells survive with 2-3 neighbors
BIRTH_SET: Set[int] = {3}        # Dead cells born with exactly 3 neighbors

# Moore neighborhood as (row, col) offsets: NW, N, NE, W, E, SW, S, SE
NEIGHBOR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


# Neighbor counts that yield a live cell, keyed by the current state
RULE_TABLE = {True: SURVIVAL_SET, False: BIRTH_SET}


def update_cell(alive: bool, live_neighbors: int) -> bool:
    """Next plaintext state of a cell with the given live neighbor count."""
    return live_neighbors in RULE_TABLE[bool(alive)]


def count_live_neighbors(grid: np.ndarray, row: int, col: int) -> int:
    """Count live neighbors of a cell on a toroidal grid.

    Wrapped positions that land on the same cell (or on the cell itself,
    for grids one cell wide or tall) are counted once per offset.

    Args:
        grid: 2D boolean numpy array
        row: Cell row
        col: Cell column

    Returns:
        Number of live neighbors (0-8)
    """
    rows, cols = grid.shape
    count = 0
    for dr, dc in NEIGHBOR_OFFSETS:
        if grid[(row + dr) % rows, (col + dc) % cols]:
            count += 1
    return count


def step_grid(grid: np.ndarray) -> np.ndarray:
    """Evolve a plaintext grid one generation.

    Args:
        grid: 2D boolean numpy array

    Returns:
        New array holding the next generation
    """
    rows, cols = grid.shape
    new_grid = np.zeros_like(grid, dtype=bool)
    for row in range(rows):
        for col in range(cols):
            neighbors = count_live_neighbors(grid, row, col)
            new_grid[row, col] = update_cell(bool(grid[row, col]), neighbors)
    return new_grid
