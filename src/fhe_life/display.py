"""Decryption and terminal rendering of board generations.

This is the consumer side: it needs the client key and must only be
handed completed generations (Board.cells or the on_generation callback).
"""

from typing import Sequence

import numpy as np

from .backends.base import Ciphertext, ClientKey
from .core.board import Board

ALIVE_CHAR = '█'
DEAD_CHAR = '░'


def decrypt_cells(cells: Sequence[Ciphertext], rows: int, cols: int,
                  client_key: ClientKey) -> np.ndarray:
    """Decrypt a row-major generation into a rows x cols boolean array."""
    values = [client_key.decrypt(ct) for ct in cells]
    return np.array(values, dtype=bool).reshape(rows, cols)


def decrypt_board(board: Board, client_key: ClientKey) -> np.ndarray:
    """Decrypt the board's current generation."""
    return decrypt_cells(board.cells, board.rows, board.cols, client_key)


def render(grid: np.ndarray) -> str:
    """String representation showing live cells as █ and dead as ░."""
    return '\n'.join(
        ''.join(ALIVE_CHAR if alive else DEAD_CHAR for alive in row)
        for row in grid
    )
