"""
Parallel generation scheduler

Fans the per-cell transition circuit out over a thread pool. Cells are
independent within a generation: every task reads the same frozen
snapshot and writes only its own result, so the only shared mutable
resource is the evaluator pool.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple

from ..backends.base import Ciphertext
from .board import Board, neighbors_in
from .circuits import ZeroTriple, evolve_cell
from .pool import EvaluatorPool

logger = logging.getLogger(__name__)


class GenerationScheduler:
    """Computes whole generations with a bounded set of evaluators.

    Attributes:
        pool: Evaluators shared by the worker threads
        zeros: Encrypted 3-bit zero under the board's key
        max_workers: Thread count (defaults to the pool size)
    """

    def __init__(self, pool: EvaluatorPool, zeros: ZeroTriple,
                 max_workers: Optional[int] = None):
        """Initialize scheduler.

        Args:
            pool: Evaluator pool for the board's key
            zeros: Three encryptions of False under the same key
            max_workers: Worker threads; more than the pool size is allowed

        Raises:
            ValueError: If max_workers is less than 1
        """
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self.pool = pool
        self.zeros = zeros
        self.max_workers = max_workers or pool.size

    def _evolve_index(self, snapshot: Sequence[Ciphertext], rows: int, cols: int,
                      k: int) -> Ciphertext:
        i, j = divmod(k, cols)
        neighbors = neighbors_in(snapshot, rows, cols, i, j)
        with self.pool.acquire(k) as evaluator:
            return evolve_cell(evaluator, snapshot[k], neighbors, self.zeros)

    def next_generation(self, snapshot: Sequence[Ciphertext], rows: int,
                        cols: int) -> List[Ciphertext]:
        """Compute the next generation of a row-major snapshot.

        Returns only after every cell is finished. Any exception raised by a
        gate propagates to the caller.

        Args:
            snapshot: Current generation, rows*cols ciphertexts
            rows: Board rows
            cols: Board columns

        Returns:
            Next generation in the same order
        """
        started = time.perf_counter()
        with ThreadPoolExecutor(max_workers=self.max_workers,
                                thread_name_prefix='fhe-life') as executor:
            results = list(executor.map(
                lambda k: self._evolve_index(snapshot, rows, cols, k),
                range(rows * cols),
            ))

        elapsed = time.perf_counter() - started
        logger.debug(f"Evaluated {rows * cols} cells in {elapsed:.3f}s "
                     f"({self.max_workers} workers, {self.pool.size} evaluators)")
        return results

    def run(self, board: Board, generations: int,
            on_generation: Optional[Callable[[int, Tuple[Ciphertext, ...]], None]] = None,
            wait_seconds: float = 0.0) -> Board:
        """Evolve a board several generations.

        Args:
            board: Board to evolve in place
            generations: Number of generations to compute
            on_generation: Called with (generation, cells) after each completed generation
            wait_seconds: Pause between generations

        Returns:
            The same board, advanced
        """
        for step in range(generations):
            if step and wait_seconds > 0:
                time.sleep(wait_seconds)
            cells = board.evolve(self)
            if on_generation is not None:
                on_generation(board.generation, cells)
        return board
