"""Pool of interchangeable gate evaluators.

An evaluator cannot be used by two threads at once, so the pool keeps one
lock per evaluator. Acquisition never blocks on a single lock: it tries
the preferred slot and then walks the ring of slots until one is free.
This keeps workers from piling up behind one busy evaluator when there
are more threads than evaluators.
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator, List, Sequence

from ..backends.base import GateEvaluator
from ..errors import InvalidPoolSizeError

logger = logging.getLogger(__name__)


class _Slot:
    """One evaluator and the lock guarding it."""

    __slots__ = ('evaluator', 'lock', 'uses')

    def __init__(self, evaluator: GateEvaluator):
        self.evaluator = evaluator
        self.lock = threading.Lock()
        self.uses = 0


class EvaluatorPool:
    """Fixed-size set of evaluators for one key.

    All evaluators must be functionally identical (clones for the same
    key): which one handles a given cell does not affect the result.

    Attributes:
        size: Number of evaluators
    """

    def __init__(self, evaluators: Sequence[GateEvaluator]):
        """Initialize pool.

        Args:
            evaluators: Evaluators for the same key

        Raises:
            InvalidPoolSizeError: If no evaluators are given
        """
        if len(evaluators) == 0:
            raise InvalidPoolSizeError("Evaluator pool needs at least one evaluator")

        self._slots: List[_Slot] = [_Slot(ev) for ev in evaluators]
        self.size = len(self._slots)

        # Failed try-lock attempts, for diagnosing contention
        self._contention_lock = threading.Lock()
        self._contended_probes = 0

        logger.debug(f"Created evaluator pool with {self.size} evaluators")

    @classmethod
    def from_evaluator(cls, evaluator: GateEvaluator, size: int) -> 'EvaluatorPool':
        """Build a pool of `size` evaluators cloned from one.

        The given evaluator occupies the first slot.

        Raises:
            InvalidPoolSizeError: If size is less than 1
        """
        if size < 1:
            raise InvalidPoolSizeError(f"Evaluator pool size must be at least 1, got {size}")
        return cls([evaluator] + [evaluator.clone() for _ in range(size - 1)])

    @contextmanager
    def acquire(self, preferred: int = 0) -> Iterator[GateEvaluator]:
        """Borrow an evaluator for the duration of a with-block.

        Tries slot `preferred mod size` first, then the following slots in
        ring order, yielding the thread after each full unsuccessful pass.

        Args:
            preferred: Slot hint, usually the cell's flat index

        Yields:
            An evaluator no other caller holds
        """
        slot = self._claim(preferred)
        try:
            yield slot.evaluator
        finally:
            slot.lock.release()

    def _claim(self, preferred: int) -> _Slot:
        start = preferred % self.size
        misses = 0
        while True:
            for offset in range(self.size):
                slot = self._slots[(start + offset) % self.size]
                if slot.lock.acquire(blocking=False):
                    slot.uses += 1
                    if misses:
                        with self._contention_lock:
                            self._contended_probes += misses
                    return slot
                misses += 1
            time.sleep(0)

    def stats(self) -> Dict[str, object]:
        """Get usage counters.

        Returns:
            Dict with pool size, per-slot acquisition counts and the number
            of probes that found their slot busy
        """
        return {
            'size': self.size,
            'uses': [slot.uses for slot in self._slots],
            'contended_probes': self._contended_probes,
        }

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"EvaluatorPool(size={self.size})"
