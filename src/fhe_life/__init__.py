"""
fhe_life: Conway's Game of Life over homomorphically encrypted cells

Each generation is computed from encrypted cell states with AND/OR/XOR/NOT
gates from an FHE boolean library, in parallel over a pool of evaluators.
The engine never decrypts.
"""

from .core import (
    Board,
    CounterBits,
    EvaluatorPool,
    GenerationScheduler,
    ZeroTriple,
    count_population,
    encrypt_grid,
    encrypt_zero_triple,
    evolve_cell,
    next_state,
    validate_grid,
)
from .errors import (
    EvaluatorBusyError,
    FheLifeError,
    InvalidPoolSizeError,
    KeyMismatchError,
    MalformedGridError,
)

__version__ = "0.1.0"

__all__ = [
    'Board',
    'CounterBits',
    'EvaluatorPool',
    'GenerationScheduler',
    'ZeroTriple',
    'count_population',
    'encrypt_grid',
    'encrypt_zero_triple',
    'evolve_cell',
    'next_state',
    'validate_grid',
    'EvaluatorBusyError',
    'FheLifeError',
    'InvalidPoolSizeError',
    'KeyMismatchError',
    'MalformedGridError',
]
