"""
Encrypted Game of Life core

Circuits, board, evaluator pool and scheduler. Nothing in this package
holds a decryption capability.
"""

from .board import Board
from .circuits import CounterBits, ZeroTriple, add_bit, count_population, evolve_cell, next_state
from .ingest import encrypt_grid, encrypt_zero_triple, validate_grid
from .pool import EvaluatorPool
from .scheduler import GenerationScheduler

__all__ = [
    'Board',
    'CounterBits',
    'ZeroTriple',
    'add_bit',
    'count_population',
    'evolve_cell',
    'next_state',
    'encrypt_grid',
    'encrypt_zero_triple',
    'validate_grid',
    'EvaluatorPool',
    'GenerationScheduler',
]
