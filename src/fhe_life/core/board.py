"""
Encrypted toroidal board

Holds one generation of encrypted cell states in row-major order. Each
call to evolve() builds the complete next generation from a frozen
snapshot and swaps it in with a single assignment, so readers only ever
see a finished generation.
"""

import logging
import threading
from typing import TYPE_CHECKING, Iterator, List, Sequence, Tuple

from ..backends.base import Ciphertext
from ..errors import MalformedGridError
from .rules import NEIGHBOR_OFFSETS

if TYPE_CHECKING:
    from .scheduler import GenerationScheduler

logger = logging.getLogger(__name__)


class Board:
    """Toroidal grid of ciphertexts.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        generation: Number of completed evolve() calls
    """

    def __init__(self, rows: int, cols: int, cells: Sequence[Ciphertext]):
        """Initialize board from encrypted cells.

        Args:
            rows: Number of rows (>= 1)
            cols: Number of columns (>= 1)
            cells: rows*cols ciphertexts in row-major order

        Raises:
            MalformedGridError: If dimensions are invalid or cell count doesn't match
        """
        if rows < 1 or cols < 1:
            raise MalformedGridError(f"Board dimensions must be positive, got {rows}x{cols}")
        cells = tuple(cells)
        if len(cells) != rows * cols:
            raise MalformedGridError(
                f"Board of {rows}x{cols} needs {rows * cols} cells, got {len(cells)}"
            )

        self.rows = rows
        self.cols = cols
        self.generation = 0
        self._cells: Tuple[Ciphertext, ...] = cells
        self._evolve_lock = threading.Lock()

        logger.debug(f"Created encrypted board {rows}x{cols}")

    @classmethod
    def from_flat(cls, cols: int, cells: Sequence[Ciphertext]) -> 'Board':
        """Create board from a flat cell sequence, inferring the row count.

        Raises:
            MalformedGridError: If the cell count is not a positive multiple of cols
        """
        if cols < 1:
            raise MalformedGridError(f"Column count must be positive, got {cols}")
        cells = tuple(cells)
        if not cells or len(cells) % cols:
            raise MalformedGridError(f"{len(cells)} cells cannot fill rows of width {cols}")
        return cls(len(cells) // cols, cols, cells)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def cells(self) -> Tuple[Ciphertext, ...]:
        """Current generation, row-major. The tuple is never modified."""
        return self._cells

    def index(self, i: int, j: int) -> int:
        """Flat index of (i, j) with toroidal wrapping."""
        return (i % self.rows) * self.cols + (j % self.cols)

    def cell(self, i: int, j: int) -> Ciphertext:
        """Ciphertext at row i, column j (wrapping)."""
        return self._cells[self.index(i, j)]

    def neighbors(self, i: int, j: int) -> List[Ciphertext]:
        """Get the eight Moore neighbors of (i, j).

        Order is NW, N, NE, W, E, SW, S, SE. On boards one cell tall or wide,
        wrapped offsets coincide with each other or with (i, j) itself and
        the same ciphertext appears more than once.

        Args:
            i: Row
            j: Column

        Returns:
            List of eight ciphertexts
        """
        return neighbors_in(self._cells, self.rows, self.cols, i, j)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Ciphertext]:
        return iter(self._cells)

    def evolve(self, scheduler: 'GenerationScheduler') -> Tuple[Ciphertext, ...]:
        """Advance the board one generation.

        Every cell is computed against the pre-evolve snapshot; the new
        generation replaces the old one only once it is complete. Concurrent
        calls run one after another. If the scheduler raises, the board
        keeps its current generation.

        Args:
            scheduler: Scheduler that evaluates the transition circuit per cell

        Returns:
            The new generation
        """
        with self._evolve_lock:
            snapshot = self._cells
            new_cells = tuple(scheduler.next_generation(snapshot, self.rows, self.cols))
            if len(new_cells) != len(snapshot):
                raise RuntimeError(
                    f"Scheduler returned {len(new_cells)} cells for a board of {len(snapshot)}"
                )
            self._cells = new_cells
            self.generation += 1

        logger.debug(f"Board {self.rows}x{self.cols} advanced to generation {self.generation}")
        return new_cells

    def __repr__(self) -> str:
        return f"Board({self.rows}x{self.cols}, generation={self.generation})"


def neighbors_in(cells: Sequence[Ciphertext], rows: int, cols: int,
                 i: int, j: int) -> List[Ciphertext]:
    """Moore neighbors of (i, j) within a row-major cell snapshot."""
    return [cells[((i + di) % rows) * cols + (j + dj) % cols] for di, dj in NEIGHBOR_OFFSETS]
