#!/usr/bin/env python3
"""
Encrypted Game of Life runner

Encrypts an initial configuration, evolves it under encryption and shows
each decrypted generation in the terminal. The key holder's side (key
generation, encryption, decryption for display, pacing) lives here; the
engine in fhe_life.core only ever sees ciphertexts.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, Sequence

import numpy as np

from .backends import generate_keys
from .config import LifeConfig
from .core import EvaluatorPool, GenerationScheduler, encrypt_grid, encrypt_zero_triple
from .core.rules import step_grid
from .display import decrypt_board, decrypt_cells, render
from .patterns import PATTERNS, get_pattern, load_pattern_file, place_pattern

logger = logging.getLogger(__name__)


def run_encrypted_life(initial: np.ndarray, config: LifeConfig,
                       show: Optional[Callable[[int, np.ndarray], None]] = None,
                       verify: bool = False) -> List[np.ndarray]:
    """Run an encrypted simulation and return every decrypted generation.

    Args:
        initial: Initial plaintext configuration
        config: Run configuration
        show: Called with (generation, decrypted grid), generation 0 included
        verify: Compare each generation with the plaintext rules

    Returns:
        Decrypted grids for generations 0..config.generations

    Raises:
        RuntimeError: If verify is set and a generation disagrees with the plaintext rules
    """
    logger.info(f"Generating keys with the {config.backend} backend")
    client_key, evaluator = generate_keys(config.backend, seed=config.seed)

    board = encrypt_grid(initial, client_key)
    zeros = encrypt_zero_triple(client_key)
    pool = EvaluatorPool.from_evaluator(evaluator, config.pool_size)
    scheduler = GenerationScheduler(pool, zeros, max_workers=config.max_workers)

    history = [decrypt_board(board, client_key)]
    if show is not None:
        show(0, history[0])

    def on_generation(generation, cells):
        grid = decrypt_cells(cells, board.rows, board.cols, client_key)
        if verify:
            expected = step_grid(history[-1])
            if not np.array_equal(grid, expected):
                raise RuntimeError(f"Generation {generation} differs from the plaintext rules")
        history.append(grid)
        logger.info(f"Generation {generation}: {int(grid.sum())} live cells")
        if show is not None:
            show(generation, grid)

    scheduler.run(board, config.generations, on_generation=on_generation,
                  wait_seconds=config.wait_seconds)

    logger.info(f"Pool usage: {pool.stats()}")
    return history


def _print_generation(generation: int, grid: np.ndarray) -> None:
    print(f"\nGeneration {generation}")
    print(render(grid))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Configuration flags default to None so that unset flags fall back to
    FHE_LIFE_* environment variables, then to LifeConfig defaults.
    """
    parser = argparse.ArgumentParser(description="Conway's Game of Life evaluated under FHE")
    parser.add_argument("--pattern", default="glider",
                        help=f"Built-in pattern ({', '.join(sorted(PATTERNS))}) or path to a text pattern")
    parser.add_argument("--rows", type=int, default=6, help="Board rows")
    parser.add_argument("--cols", type=int, default=6, help="Board columns")
    parser.add_argument("--offset", type=int, nargs=2, default=(0, 0), metavar=("ROW", "COL"),
                        help="Top-left position of the pattern")
    parser.add_argument("--generations", type=int, default=None,
                        help="Generations to evolve (default 4)")
    parser.add_argument("--pool-size", type=int, default=None,
                        help="Number of evaluator clones (default 4)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker threads (defaults to pool size)")
    parser.add_argument("--wait", type=float, default=None,
                        help="Seconds to wait between generations (default 0)")
    parser.add_argument("--backend", default=None,
                        help="Gate backend: cleartext or jaxite (default cleartext)")
    parser.add_argument("--seed", type=int, default=None, help="Key generation seed")
    parser.add_argument("--verify", action="store_true",
                        help="Check every generation against the plaintext rules")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def load_initial(pattern: str, rows: int, cols: int, offset: Sequence[int]) -> np.ndarray:
    """Resolve the --pattern argument to a rows x cols grid."""
    if pattern in PATTERNS:
        shape = get_pattern(pattern)
    else:
        shape = load_pattern_file(pattern)
    return place_pattern(rows, cols, shape, offset[0], offset[1])


def resolve_config(args: argparse.Namespace) -> LifeConfig:
    """Merge command line flags over FHE_LIFE_* variables and validate once."""
    values = LifeConfig.env_values()
    flags = {
        'pool_size': args.pool_size,
        'max_workers': args.workers,
        'generations': args.generations,
        'wait_seconds': args.wait,
        'backend': args.backend,
        'seed': args.seed,
    }
    values.update({name: value for name, value in flags.items() if value is not None})
    return LifeConfig(**values)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        config = resolve_config(args)
        initial = load_initial(args.pattern, args.rows, args.cols, args.offset)
        run_encrypted_life(initial, config, show=_print_generation, verify=args.verify)
    except Exception as e:
        logger.error(f"Run failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
